"""Logging configuration"""

import logging
import sys
from typing import Optional


def setup_logger(
    name: str = "chrome_webstore",
    level: int | str = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """
    Set up a logger with consistent formatting

    Args:
        name: Logger name (the package logger by default)
        level: Logging level, as a number or a name like "DEBUG"
        format_string: Custom format string
        handler: Handler to attach instead of a stderr stream handler

    Returns:
        Configured logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers
    if logger.handlers:
        for existing in logger.handlers:
            existing.setLevel(level)
        return logger

    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        if format_string is None:
            format_string = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    handler.setLevel(level)
    if format_string is not None:
        handler.setFormatter(logging.Formatter(format_string))

    logger.addHandler(handler)

    return logger
