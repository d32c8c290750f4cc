"""Logging configuration for the tinyurl service."""

import logging
import sys

LOGGER_NAME = "tinyurl"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the tinyurl logger tree with a console handler.

    Module loggers created with logging.getLogger(__name__) under the
    tinyurl package propagate here.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        The configured root logger of the package
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)
    logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger
