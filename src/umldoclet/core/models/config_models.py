"""Pydantic models for umldoclet configuration."""

from __future__ import annotations

import codecs
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogLevel(StrEnum):
    """Log level enumeration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"
    NOTSET = "NOTSET"


class LogLevelsConfig(BaseModel):
    """Log level per handler."""

    console: LogLevel = LogLevel.INFO
    main_file: LogLevel = LogLevel.INFO


class LoggingConfig(BaseModel):
    """Logging configuration."""

    main_log_file: str | None = None
    levels: LogLevelsConfig = Field(default_factory=LogLevelsConfig)


class ExternalLinkConfig(BaseModel):
    """One externally hosted documentation root.

    Without ``package_list`` the link is online style: the package list is found next to
    the documents. With ``package_list`` it is offline style.
    """

    model_config = ConfigDict(frozen=True)

    apidoc: str = Field(min_length=1)
    package_list: str | None = None


class AppConfig(BaseModel):
    """Main application configuration model."""

    destination_directory: str
    model_file: str | None = None
    html_encoding: str = "utf-8"
    always_use_qualified_classnames: bool = False
    links: list[ExternalLinkConfig] = Field(default_factory=list)
    image_format: str | None = None
    staging_directory: str | None = None
    package_list_timeout_seconds: float = Field(default=30.0, gt=0)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("html_encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as e:
            msg = f"Unknown encoding: {value}"
            raise ValueError(msg) from e
        return value

    @field_validator("image_format")
    @classmethod
    def _strip_dot(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.lstrip(".") or None
