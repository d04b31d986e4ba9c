"""Backend entrypoint. Starts uvicorn with host/port from settings; BACKEND_PORT overrides the port."""
import os
import uvicorn

# Import app directly so a frozen bundle can resolve the package (uvicorn's
# string-based import fails under PyInstaller).
from ipo_tracker.config.settings import get_settings
from ipo_tracker.main import app


def main() -> None:
    settings = get_settings()
    port = int(os.environ.get("BACKEND_PORT", str(settings.port)))
    uvicorn.run(app, host=settings.host, port=port)


if __name__ == "__main__":
    main()
