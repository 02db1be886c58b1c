"""
Logging configuration for the ``brepkit`` logger namespace.

Modules log through ``logging.getLogger(__name__)``; nothing is printed
until an application calls :func:`setup_logging`.  Setting the
``BREPKIT_DEBUG`` environment variable to ``1``/``true``/``yes`` makes the
default level DEBUG, which reports every kernel failure and rejected input.
"""

import logging
import os
import sys
from typing import Optional

BREPKIT_DEBUG = "BREPKIT_DEBUG"


def debug_enabled() -> bool:
    return os.environ.get(BREPKIT_DEBUG, "").lower() in ("1", "true", "yes")


def setup_logging(level: Optional[int] = None, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the ``brepkit`` logger.

    Args:
        level: Logging level; defaults to DEBUG when ``BREPKIT_DEBUG`` is set,
            INFO otherwise.
        log_file: Optional path to also write log records to.
    """
    if level is None:
        level = logging.DEBUG if debug_enabled() else logging.INFO

    logger = logging.getLogger("brepkit")
    logger.setLevel(level)

    # avoid duplicate handlers on repeated setup
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger


__all__ = ["BREPKIT_DEBUG", "debug_enabled", "setup_logging"]
