"""Pytest configuration and shared fixtures for umldoclet.

This module configures the test environment by ensuring the project root
is added to sys.path, allowing imports of the test helper modules.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest

from tests.factories import create_test_app_config
from tests.mocks.logger_mock import MockLogger

if TYPE_CHECKING:
    from umldoclet.core.models.config_models import AppConfig

# Ensure project root is on sys.path for `import tests.*`
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def mock_console_logger() -> MagicMock:
    """Mock console logger for testing."""
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def mock_error_logger() -> MagicMock:
    """Mock error logger for testing."""
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def console_logger() -> MockLogger:
    """Recording console logger."""
    return MockLogger("console")


@pytest.fixture
def error_logger() -> MockLogger:
    """Recording error logger."""
    return MockLogger("error")


@pytest.fixture
def destination(tmp_path: Path) -> Path:
    """Empty documentation destination directory."""
    docs = tmp_path / "docs"
    docs.mkdir()
    return docs


@pytest.fixture
def app_config(destination: Path) -> AppConfig:
    """Minimal configuration pointing at the destination fixture."""
    return create_test_app_config(destination_directory=str(destination))
