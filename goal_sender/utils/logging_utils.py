"""Logging utilities for the goal sender."""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

# Package loggers are children of this one and propagate to its handlers.
ROOT_LOGGER = "goal_sender"


def setup_logger(
    name: str = ROOT_LOGGER,
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    Set up a logger with console and optional file output.

    Args:
        name: Logger name
        level: Logging level (e.g., logging.INFO or "DEBUG")
        log_file: Optional path to log file
        format_string: Custom format string for log messages

    Returns:
        Configured logger instance
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear existing handlers
    logger.handlers.clear()

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    formatter = logging.Formatter(format_string)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """
    Get an existing logger or create a new one with default settings.

    Child loggers (see ``component_logger()``) are returned as-is so they
    propagate to the configured root.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)
    if "." in name or logger.handlers:
        return logger
    return setup_logger(name)


def component_logger(component: str) -> logging.Logger:
    """
    Logger for one part of the package, e.g. ``goal_sender.node``.

    Never attaches handlers; records reach the console through the root
    logger configured by ``setup_logger()``.
    """
    return logging.getLogger(f"{ROOT_LOGGER}.{component}")
