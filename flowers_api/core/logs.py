"""
Logging utilities for the invoicing backend.

Provides a logger factory that creates configured stdlib loggers with
consistent formatting across the application.
"""

import logging
from pathlib import Path

from .config import get_settings


def logger(name: str) -> logging.Logger:
    """
    Create and configure a logger for the given name.

    Accepts either a dotted module name or a ``__file__`` path, in which case
    the file stem is used as the logger name.
    """
    if "/" in name or "\\" in name:
        name = Path(name).stem

    log = logging.getLogger(name)

    # Only configure if not already configured
    if not log.handlers:
        level = get_settings().log_level
        log.setLevel(getattr(logging, level, logging.INFO))
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        log.addHandler(handler)

    return log
