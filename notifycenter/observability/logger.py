"""Structured logging for registry events (subscribe, unsubscribe, publish)."""

import logging
import sys
from typing import Optional, Union

DEFAULT_LEVEL = logging.INFO


def get_logger(name: str, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Return a stdout logger for name.

    The handler is attached on first use, with DEFAULT_LEVEL unless level is
    given. Later calls leave the level alone unless level is passed explicitly.
    Loggers are process-wide, so the level is shared by every caller of name.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
            )
        )
        logger.addHandler(handler)
        logger.setLevel(DEFAULT_LEVEL if level is None else level)
    elif level is not None:
        logger.setLevel(level)
    return logger
