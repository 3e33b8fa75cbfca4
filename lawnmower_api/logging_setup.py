"""Logging configuration for the Lawnmower Catalog API."""

import logging
import sys

LOGGER_NAME = "lawnmower_api"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the package logger once.

    Args:
        level: Log level name from the logging config section.

    Returns:
        The package root logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())

    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    # Prevent propagation to root logger (avoid duplicate logs)
    logger.propagate = False
    return logger
