"""Configuration loading for umldoclet."""

from __future__ import annotations

import logging
import os
import pathlib
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from umldoclet.core.exceptions import ConfigurationError
from umldoclet.core.models.config_models import AppConfig

# Type definitions for configuration
ConfigValue = dict[str, Any] | list[Any] | str | int | float | bool | None

# Set up logger early so it's available before the rich handlers are installed
logger = logging.getLogger("config")
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

MAX_CONFIG_SIZE = 1024 * 1024  # 1MB


def resolve_env_vars(config: ConfigValue) -> ConfigValue:
    """Recursively resolve environment variables in config values.

    Args:
        config: Configuration value (dict, list, or primitive).

    Returns:
        ConfigValue: Config with environment variables resolved.

    """
    if isinstance(config, dict):
        return {str(k): resolve_env_vars(v) for k, v in config.items()}
    if isinstance(config, list):
        return [resolve_env_vars(item) for item in config]
    if isinstance(config, str):
        # Pure ${VAR} syntax - empty string if var not set
        if config.startswith("${") and config.endswith("}"):
            return os.getenv(config[2:-1], "")
        result = config
        if "$" in result:
            result = os.path.expandvars(result)
        if result.startswith("~"):
            result = str(pathlib.Path(result).expanduser())
        return result
    return config


def _validate_config_path(path: str) -> pathlib.Path:
    """Resolve and validate the configuration file path.

    Args:
        path: The user-provided path to the configuration file.

    Returns:
        A resolved and validated pathlib.Path object.

    Raises:
        ConfigurationError: If the path does not exist, is not a readable file or has a wrong extension.

    """
    try:
        resolved_path = pathlib.Path(path).resolve(strict=True)
    except FileNotFoundError as e:
        msg = f"Config file not found at the specified path: {path}"
        raise ConfigurationError(msg, path) from e

    if not resolved_path.is_file():
        msg = f"Config path does not point to a file: {resolved_path}"
        raise ConfigurationError(msg, path)

    if not os.access(resolved_path, os.R_OK):
        msg = f"No read permission for config file: {resolved_path}"
        raise ConfigurationError(msg, path)

    if resolved_path.suffix.lower() not in (".yaml", ".yml"):
        msg = "Configuration file must have a .yaml or .yml extension"
        raise ConfigurationError(msg, path)

    return resolved_path


def _read_and_parse_config(path: pathlib.Path) -> ConfigValue:
    """Read and parse the YAML config file with size validation.

    Raises:
        ConfigurationError: If the file is too large.
        yaml.YAMLError: If YAML parsing fails.
        OSError: If file cannot be read.

    """
    if path.stat().st_size > MAX_CONFIG_SIZE:
        msg = f"Config file {path} is too large (max {MAX_CONFIG_SIZE} bytes)"
        raise ConfigurationError(msg, str(path))

    logger.info("Loading config from: %s", path)
    parsed: ConfigValue = yaml.safe_load(path.read_text(encoding="utf-8"))
    return parsed


def format_pydantic_errors(error: ValidationError) -> str:
    """Format Pydantic validation errors into a readable string.

    Args:
        error: Pydantic ValidationError instance.

    Returns:
        str: Formatted error message string.

    """
    error_messages: list[str] = []

    for err in error.errors():
        loc_path = ".".join(str(loc) for loc in err["loc"])
        msg = err["msg"]
        error_type = err["type"]

        if error_type == "missing":
            error_messages.append(f"{loc_path}: Missing required field")
        elif error_type in ("value_error", "assertion_error"):
            error_messages.append(f"{loc_path}: {msg}")
        else:
            error_messages.append(f"{loc_path}: {msg} (type: {error_type})")

    return "\n".join(error_messages)


def build_config(config_data: ConfigValue, config_path: str | None = None) -> AppConfig:
    """Validate raw configuration data into an AppConfig.

    Args:
        config_data: Parsed configuration, environment variables already resolved.
        config_path: Source file, reported in errors.

    Returns:
        Validated AppConfig.

    Raises:
        ConfigurationError: If the data is not a mapping or fails validation.

    """
    if not isinstance(config_data, dict):
        msg = "Configuration data is not a dictionary after parsing."
        raise ConfigurationError(msg, config_path)
    try:
        return AppConfig(**config_data)
    except ValidationError as e:
        msg = f"Configuration validation failed:\n{format_pydantic_errors(e)}"
        raise ConfigurationError(msg, config_path) from e


def load_config_data(config_path: str) -> dict[str, Any]:
    """Load a YAML configuration file and resolve environment variables, without validation.

    Raises:
        ConfigurationError: If the file is missing, unreadable, invalid YAML or not a mapping.

    """
    env_loaded = load_dotenv()
    logger.debug(".env file %s", "found and loaded" if env_loaded else "not found, using system environment variables")

    validated_path = _validate_config_path(config_path)
    try:
        config_data = resolve_env_vars(_read_and_parse_config(validated_path))
    except (OSError, yaml.YAMLError) as e:
        msg = f"Failed to read configuration from '{validated_path}': {e}"
        raise ConfigurationError(msg, config_path) from e
    if config_data is None:
        return {}
    if not isinstance(config_data, dict):
        msg = "Configuration data is not a dictionary after parsing."
        raise ConfigurationError(msg, config_path)
    return config_data
