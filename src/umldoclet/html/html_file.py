"""Abstraction for a single HTML page produced by the documentation generator."""

from __future__ import annotations

import os
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

from umldoclet.core.exceptions import PostprocessingError
from umldoclet.core.logger import LogFormat as LF
from umldoclet.html.replace import replace_file

if TYPE_CHECKING:
    import logging
    from collections.abc import Iterable

    from umldoclet.core.models.config_models import AppConfig
    from umldoclet.html.replace import ReplaceBranch
    from umldoclet.html.uml_diagram import UmlDiagram


class PageState(StrEnum):
    """Terminal state of a processed page. Failures raise instead."""

    SKIPPED = "skipped"
    REPLACED = "replaced"


def normalize_path(path: str | os.PathLike[str]) -> Path:
    """Absolute, canonical form used to compare page locations."""
    return Path(path).resolve()


class HtmlFile:
    """A generated page: an absolute path plus the configuration it is read and written with."""

    def __init__(self, config: AppConfig, path: str | os.PathLike[str], console_logger: logging.Logger) -> None:
        """Initialize the page.

        Args:
            config: Active configuration (encoding, staging directory)
            path: Location of the page
            console_logger: Logger for progress messages

        """
        if config is None:
            msg = "Configuration is <None>."
            raise ValueError(msg)
        if path is None:
            msg = "HTML file is <None>."
            raise ValueError(msg)
        self.config = config
        self.path = normalize_path(path)
        self.console_logger = console_logger

    def __repr__(self) -> str:
        return f"HtmlFile({str(self.path)!r})"

    @staticmethod
    def is_html_file(path: Path | None) -> bool:
        """Whether ``path`` is a readable ``.html`` file."""
        return path is not None and path.is_file() and os.access(path, os.R_OK) and path.name.endswith(".html")

    @property
    def encoding(self) -> str:
        """Configured page encoding."""
        return self.config.html_encoding

    @property
    def staging_directory(self) -> Path:
        """Directory for the staging copy: configured, or the page's own directory."""
        configured = self.config.staging_directory
        return Path(configured) if configured else self.path.parent

    def process(self, diagrams: Iterable[UmlDiagram]) -> PageState:
        """Insert the first claiming diagram into this page.

        Args:
            diagrams: Candidate diagrams in claim order

        Returns:
            ``REPLACED`` when the page was updated, ``SKIPPED`` otherwise.

        Raises:
            PostprocessingError: If the page cannot be read or safely replaced.

        """
        for diagram in diagrams:
            insertion = diagram.claim(self)
            if insertion is not None:
                self.console_logger.info("Add UML to %s...", LF.file(self.path.name))
                return insertion.apply()
        return self.skip()

    def skip(self) -> PageState:
        """Leave the page untouched."""
        self.console_logger.debug("Skipping %s...", self.path)
        return PageState.SKIPPED

    def read_lines(self) -> list[str]:
        """Read the page as lines, line endings preserved.

        Raises:
            PostprocessingError: On any read or decode failure.

        """
        try:
            with self.path.open(encoding=self.encoding, newline="") as page:
                return page.readlines()
        except (OSError, UnicodeDecodeError) as e:
            msg = f"I/O exception postprocessing {self.path}: {e}"
            raise PostprocessingError(msg, str(self.path)) from e

    def replace_by(self, staging: Path) -> ReplaceBranch:
        """Replace the page by the staging copy.

        Raises:
            PostprocessingError: If the page or the staging copy cannot be deleted.

        """
        branch = replace_file(self.path, staging).unwrap()
        self.console_logger.debug("%s %s from %s.", branch.capitalize(), self.path, staging)
        return branch
