"""Logging setup shared by the CLI and the API."""
from __future__ import annotations
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

LOGGER_NAME = "matcher"
# engine and the CLI/API/batch layer
LOGGER_NAMES = (LOGGER_NAME, "app")
FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """Send ``matcher.*`` and ``app.*`` records to stderr and, optionally, a rotating file.

    Returns the ``matcher`` logger.
    """
    formatter = logging.Formatter(FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(path, maxBytes=5 * 1024 * 1024, backupCount=3))
    for h in handlers:
        h.setFormatter(formatter)

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        for h in list(logger.handlers):
            logger.removeHandler(h)
            h.close()
        for h in handlers:
            logger.addHandler(h)
    return logging.getLogger(LOGGER_NAME)
