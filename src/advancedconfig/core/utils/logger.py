# advancedconfig/core/utils/logger.py

"""
Logging configuration and utilities for advancedconfig.

This module provides a single logger shared by every part of the package so
that file creation, default materialisation and comment rewriting are all
reported with the same format.

Key Features:
- Global logger instance with lazy initialization
- Standardized log message formats with module context
- File operation logging
- Configuration change logging
"""

import logging
import sys
from typing import Any

# Global logger instance for singleton pattern
_logger: logging.Logger | None = None

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOGGER_NAME = "advancedconfig"


def setup_logging(
    level: str = DEFAULT_LOG_LEVEL,
    log_file: str | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """
    Set up logging configuration for advancedconfig.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (optional). If provided, logs will be
                 written to both console and file.
        format_string: Custom log format string (optional). Uses default
                      format if not provided.

    Returns:
        Configured logger instance

    Note:
        Handlers from a previous call are removed first, so calling this
        twice reconfigures the same logger instead of duplicating output.
    """
    global _logger

    logger = logging.getLogger(LOGGER_NAME)
    logger.disabled = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))

    formatter = logging.Formatter(format_string or DEFAULT_LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, level.upper()))
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(getattr(logging, level.upper()))
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """
    Get the global logger instance.

    If the logger hasn't been initialized yet, it will be set up with the
    default configuration.
    """
    if _logger is None:
        return setup_logging()
    return _logger


def _format(module: str, message: str, context: str = "") -> str:
    text = f"[{module.upper()}] {message}"
    if context:
        text += f" | Context: {context}"
    return text


def log_error(
    module: str, error: str, context: str = "", exception: Exception | None = None
) -> None:
    """
    Log a standardized error message.

    Args:
        module: Name of the module where the error occurred
        error: Error message describing what went wrong
        context: Additional context information (optional)
        exception: Exception object to include stack trace (optional)
    """
    logger = get_logger()
    message = _format(module, error, context)
    if exception:
        logger.error(message, exc_info=exception)
    else:
        logger.error(message)
    for handler in logger.handlers:
        try:
            handler.flush()
        except Exception:
            continue


def log_info(module: str, message: str, context: str = "") -> None:
    """Log a standardized info message."""
    get_logger().info(_format(module, message, context))


def log_debug(module: str, message: str, context: str = "") -> None:
    """Log a standardized debug message."""
    get_logger().debug(_format(module, message, context))


def log_configuration_change(setting: str, old_value: Any, new_value: Any) -> None:
    """
    Log a configuration change.

    Args:
        setting: Dotted path of the setting that changed
        old_value: Previous value of the setting
        new_value: New value of the setting
    """
    logger = get_logger()
    logger.info(f"Configuration changed: {setting} = {old_value!r} -> {new_value!r}")


def log_file_operation(
    operation: str, file_path: str, success: bool, error: str | None = None
) -> None:
    """
    Log a file operation.

    Args:
        operation: Type of operation (create, save, rewrite, etc.)
        file_path: Path to the file being operated on
        success: Whether the operation was successful
        error: Error message if the operation failed (optional)
    """
    logger = get_logger()
    if success:
        logger.info(f"File {operation}: {file_path}")
    else:
        logger.error(f"File {operation} failed: {file_path} - {error}")


def reset_logging() -> None:
    """
    Reset the global logger instance.

    This is useful for testing or when you need to reconfigure
    the logging system from scratch.
    """
    global _logger
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    _logger = None
