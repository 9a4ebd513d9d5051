"""Logging helpers."""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "finproducts"
CONSOLE_HANDLER_NAME = "finproducts.console"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str = PACKAGE_LOGGER) -> logging.Logger:
    return logging.getLogger(name)


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Install one stderr handler on the package logger.

    Calling it again replaces the handler instead of stacking another.
    """
    logger = get_logger()
    for handler in list(logger.handlers):
        if getattr(handler, "name", None) == CONSOLE_HANDLER_NAME:
            logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.name = CONSOLE_HANDLER_NAME
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
