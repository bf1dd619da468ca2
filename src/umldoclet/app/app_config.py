"""Configuration management for umldoclet: file lookup plus command-line overrides."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv

from umldoclet.core.core_config import build_config, load_config_data
from umldoclet.core.exceptions import ConfigurationError
from umldoclet.core.models.config_models import LogLevel

if TYPE_CHECKING:
    import argparse

    from umldoclet.core.models.config_models import AppConfig

DEFAULT_CONFIG_FILES = ["umldoclet.yaml", "config.yaml"]


def overrides_from_args(args: argparse.Namespace) -> dict[str, Any]:
    """Collect configuration values given on the command line.

    Options that were not given are left out, so file values stay in effect. External
    links are appended to the configured ones.
    """
    overrides: dict[str, Any] = {}
    if destination := getattr(args, "destination", None):
        overrides["destination_directory"] = destination
    if model := getattr(args, "model", None):
        overrides["model_file"] = model
    if encoding := getattr(args, "encoding", None):
        overrides["html_encoding"] = encoding
    if getattr(args, "qualified", None):
        overrides["always_use_qualified_classnames"] = True

    links = [{"apidoc": uri} for uri in getattr(args, "link", None) or []]
    links.extend({"apidoc": uri, "package_list": package_list} for uri, package_list in getattr(args, "linkoffline", None) or [])
    if links:
        overrides["links"] = links

    if getattr(args, "verbose", False):
        overrides["console_level"] = LogLevel.DEBUG
    elif getattr(args, "quiet", False):
        overrides["console_level"] = LogLevel.WARNING
    return overrides


def merge_overrides(config_data: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Apply command-line overrides on top of file configuration data."""
    merged = dict(config_data)
    for key, value in overrides.items():
        match key:
            case "links":
                merged["links"] = [*(merged.get("links") or []), *value]
            case "console_level":
                logging_data = dict(merged.get("logging") or {})
                levels = dict(logging_data.get("levels") or {})
                levels["console"] = value
                logging_data["levels"] = levels
                merged["logging"] = logging_data
            case _:
                merged[key] = value
    return merged


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_path: str | None = None) -> None:
        """Initialize configuration.

        Args:
            config_path: Path to the configuration file. When ``None``, ``CONFIG_PATH`` and
                then the default files in the working directory are tried. No file at all
                is allowed; the command line must then provide the required options.

        """
        if config_path is None:
            load_dotenv()
            config_path = os.getenv("CONFIG_PATH") or None
        if config_path is None:
            config_path = next((name for name in DEFAULT_CONFIG_FILES if Path(name).exists()), None)

        self.config_path = config_path
        self._config: AppConfig | None = None

    @property
    def resolved_path(self) -> str | None:
        """Absolute path of the configuration file, ``None`` when running without one."""
        if self.config_path is None:
            return None
        load_path = Path(os.path.expandvars(self.config_path)).expanduser()
        try:
            return str(load_path.resolve())
        except (OSError, ValueError):
            return str(load_path.absolute())

    def load(self, overrides: dict[str, Any] | None = None) -> AppConfig:
        """Load, merge and validate the configuration.

        Args:
            overrides: Values from ``overrides_from_args``

        Returns:
            Validated configuration

        Raises:
            ConfigurationError: If the file is invalid, or no file exists and the command
                line does not name a destination directory.

        """
        if self._config is None:
            overrides = overrides or {}
            if self.config_path is None:
                if "destination_directory" not in overrides:
                    msg = (
                        f"No configuration file found. Checked CONFIG_PATH env var and files: {DEFAULT_CONFIG_FILES}. "
                        "Create a configuration file or pass --destination."
                    )
                    raise ConfigurationError(msg)
                config_data: dict[str, Any] = {}
            else:
                config_data = load_config_data(self.resolved_path or self.config_path)
            self._config = build_config(merge_overrides(config_data, overrides), self.resolved_path)
        return self._config
