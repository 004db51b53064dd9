"""Logging setup for the datapkg command line.

The library itself only creates loggers (``logging.getLogger(__name__)``);
handlers are installed here, by the application.
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "datapkg"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logging(level: str | int = logging.WARNING, stream=None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Remove any existing handlers
    for h in logger.handlers[:]:
        logger.removeHandler(h)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
