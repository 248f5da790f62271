"""Logging configuration for the beta decay visualizer."""

import logging
from typing import Optional

from settings import LOG_FORMAT, LOG_LEVEL


def setup_logging(name: Optional[str] = None, level: Optional[str] = None) -> logging.Logger:
    """
    Set up console logging.

    Args:
        name: Logger name (None configures the root logger)
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance
    """
    if level is None:
        level = LOG_LEVEL
    numeric = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(numeric)

    # Re-running main() in the same interpreter must not stack handlers
    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(numeric)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(console_handler)

    return logger
