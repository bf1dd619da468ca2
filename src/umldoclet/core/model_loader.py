"""Loading of the documentable-element model written by the page generator."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from umldoclet.core.core_config import format_pydantic_errors
from umldoclet.core.exceptions import ConfigurationError, RenderingError
from umldoclet.core.models.doc_model import DocModel

logger = logging.getLogger("config")

YAML_SUFFIXES = (".yaml", ".yml")


def load_doc_model(model_file: str | None) -> DocModel:
    """Read and validate the model file (JSON, or YAML by extension).

    Args:
        model_file: Path to the model

    Returns:
        Validated model

    Raises:
        ConfigurationError: If no model file is configured or it cannot be read.
        RenderingError: If the file content is not a valid model.

    """
    if not model_file:
        msg = "No model file configured (model_file or --model)"
        raise ConfigurationError(msg)

    path = Path(model_file).expanduser()
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Cannot read model file {path}: {e}"
        raise ConfigurationError(msg, str(path)) from e

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            model = DocModel.model_validate(yaml.safe_load(text) or {})
        else:
            model = DocModel.model_validate_json(text)
    except yaml.YAMLError as e:
        msg = f"Malformed model file {path}: {e}"
        raise RenderingError(msg) from e
    except ValidationError as e:
        msg = f"Invalid model in {path}:\n{format_pydantic_errors(e)}"
        raise RenderingError(msg) from e

    logger.debug("Loaded model with %d packages from %s", len(model.packages), path)
    return model
