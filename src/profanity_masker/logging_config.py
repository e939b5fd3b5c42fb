"""Logging setup for the command line.

Library code only calls ``logging.getLogger(__name__)``; handlers are
attached here, once, under the ``profanity_masker`` namespace.
"""

from __future__ import annotations
import logging
import sys

_LOGGER_NAME = "profanity_masker"
_logging_initialized = False


def setup_logging(level: str = "WARNING", *, force: bool = False) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        force: Reconfigure even if already initialized

    Returns:
        The package logger
    """
    global _logging_initialized

    root_logger = logging.getLogger(_LOGGER_NAME)
    if _logging_initialized and not force:
        return root_logger

    log_level = getattr(logging, level.upper(), logging.WARNING)
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root_logger.addHandler(handler)
    root_logger.propagate = False

    _logging_initialized = True
    return root_logger
