"""Logging configuration."""

import logging
import sys
from typing import Optional

from ipo_tracker.config.settings import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(threadName)s - %(message)s"
HANDLER_NAME = "ipo-tracker-stdout"

# Scraping runs through requests; its transport libraries log every connection.
_LIBRARY_LEVELS = {
    "urllib3": logging.WARNING,
    "charset_normalizer": logging.WARNING,
    "uvicorn": logging.INFO,
}


def setup_logging(level: Optional[str] = None) -> None:
    """
    Send application logs to stdout at the configured level.

    Each app lifespan calls this, so repeat calls only update the level and
    never stack a second stdout handler.
    """
    level_name = (level or get_settings().log_level).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name))

    if not any(h.get_name() == HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    for name, library_level in _LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(library_level)
