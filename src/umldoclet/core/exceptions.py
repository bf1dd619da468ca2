"""Core exceptions for configuration, rendering and postprocessing.

This module contains shared exception classes to avoid circular imports
between the configuration, rendering and html modules.
"""

from __future__ import annotations


class UmlDocletError(Exception):
    """Base exception for all fatal umldoclet errors."""


class ConfigurationError(UmlDocletError):
    """Raised when configuration loading or parsing fails."""

    def __init__(self, message: str, config_path: str | None = None) -> None:
        """Initialize the configuration error.

        Args:
            message: Error description
            config_path: Path to the config file that caused the error

        """
        super().__init__(message)
        self.config_path = config_path


class RenderingError(UmlDocletError):
    """Raised when the documentable model cannot be rendered.

    Any rendering error aborts the whole render pass, no partial diagram is written.
    """


class PostprocessingError(UmlDocletError):
    """Raised when a generated page cannot be safely read or replaced."""

    def __init__(self, message: str, path: str | None = None) -> None:
        """Initialize the postprocessing error.

        Args:
            message: Error description
            path: The offending file

        """
        super().__init__(message)
        self.path = path


class RelativePathError(ValueError):
    """Raised when a relative path is requested from a location that does not exist."""
