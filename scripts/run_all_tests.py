#!/usr/bin/env python3
"""
Run the test suite.

Usage, from the project root:
  ./venv/bin/python scripts/run_all_tests.py            # everything
  ./venv/bin/python scripts/run_all_tests.py unit       # tests/unit only
  ./venv/bin/python scripts/run_all_tests.py api -- -k gmp

Arguments after "--" are passed to pytest unchanged.
"""
import argparse
import os
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SUITES = {
    "all": PROJECT_ROOT / "tests",
    "unit": PROJECT_ROOT / "tests" / "unit",
    "api": PROJECT_ROOT / "tests" / "api",
}


def pytest_command() -> list[str]:
    """Prefer the project venv; fall back to the interpreter running this script."""
    venv_pytest = PROJECT_ROOT / "venv" / "bin" / "pytest"
    if venv_pytest.exists():
        return [str(venv_pytest)]
    return [sys.executable, "-m", "pytest"]


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run the IPO tracker tests")
    parser.add_argument("suite", nargs="?", choices=sorted(SUITES), default="all")
    parser.add_argument("-q", "--quiet", action="store_true", help="less verbose pytest output")
    parser.add_argument("pytest_args", nargs=argparse.REMAINDER, help="extra pytest arguments after --")
    args = parser.parse_args(argv)

    extra = args.pytest_args[1:] if args.pytest_args[:1] == ["--"] else args.pytest_args
    cmd = pytest_command() + [str(SUITES[args.suite]), "-q" if args.quiet else "-v", "--tb=short", *extra]
    env = {**os.environ, "PYTHONPATH": os.pathsep.join([str(PROJECT_ROOT / "src"), str(PROJECT_ROOT)])}
    print("Running:", " ".join(cmd))
    return subprocess.run(cmd, cwd=str(PROJECT_ROOT), env=env).returncode


if __name__ == "__main__":
    sys.exit(main())
