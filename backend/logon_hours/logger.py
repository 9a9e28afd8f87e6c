from __future__ import annotations

import logging
import sys

from .config import settings


def get_logger(name: str) -> logging.Logger:
    """Creates and returns a logger with the specified name."""
    logger = logging.getLogger(name)
    logger.setLevel(settings.log_level.upper())
    # Prevent duplicate handlers if requested more than once
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s: %(message)s"))
        logger.addHandler(handler)
    return logger
