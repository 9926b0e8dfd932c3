"""Exceptions raised while binding fields to a config file."""

from __future__ import annotations

from typing import Optional


class ConfigError(Exception):
    """Base exception for config loading errors."""

    def __init__(self, message: str, path: Optional[str] = None):
        """
        Initialize the config error.

        Args:
            message: Error message
            path: Dotted document path the error relates to (optional)
        """
        super().__init__(message)
        self.message = message
        self.path = path


class ConfigFieldError(ConfigError):
    """A bound field could not be read from or written to the document."""


class ConfigFormatError(ConfigError):
    """The backing file is not a YAML mapping."""
