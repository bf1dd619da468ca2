"""Core module - configuration, logging, exceptions and shared primitives."""

from umldoclet.core.exceptions import ConfigurationError, PostprocessingError, RelativePathError, RenderingError, UmlDocletError
from umldoclet.core.logger import get_loggers

__all__ = [
    "ConfigurationError",
    "PostprocessingError",
    "RelativePathError",
    "RenderingError",
    "UmlDocletError",
    "get_loggers",
]
