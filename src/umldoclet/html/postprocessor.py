"""Pending insertion of a diagram reference into one page."""

from __future__ import annotations

import contextlib
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from umldoclet.core.exceptions import PostprocessingError
from umldoclet.html.html_file import PageState

if TYPE_CHECKING:
    from umldoclet.html.html_file import HtmlFile
    from umldoclet.html.uml_diagram import UmlDiagram

# Searched in this order; the reference goes right before the first match.
ANCHORS = (
    "<!-- ======= START OF BOTTOM NAVBAR ====== -->",
    "<footer",
    "</body>",
)


def _line_ending(line: str) -> str:
    if line.endswith("\r\n"):
        return "\r\n"
    if line.endswith(("\n", "\r")):
        return line[-1]
    return "\n"


@dataclass(frozen=True, slots=True)
class Inserter:
    """Splices ``content`` in front of the first anchor found in a page."""

    content: str
    anchors: tuple[str, ...] = ANCHORS

    def insert(self, lines: list[str]) -> list[str] | None:
        """Return new lines with the content inserted, or ``None`` if no anchor is present.

        When only whitespace precedes the anchor on its line, the content becomes a line of
        its own before it; otherwise it is spliced into the line.
        """
        for anchor in self.anchors:
            needle = anchor.lower()
            for index, line in enumerate(lines):
                position = line.lower().find(needle)
                if position < 0:
                    continue
                before, after = line[:position], line[position:]
                if before.strip():
                    replacement = [f"{before}{self.content}{after}"]
                else:
                    replacement = [f"{before}{self.content}{_line_ending(line)}", line]
                return [*lines[:index], *replacement, *lines[index + 1 :]]
        return None


@dataclass(slots=True)
class PendingInsertion:
    """Binds one diagram to one page; applied at most once."""

    diagram: UmlDiagram
    page: HtmlFile
    inserter: Inserter
    _applied: bool = field(default=False, init=False)

    def apply(self) -> PageState:
        """Insert the reference and replace the page.

        Returns:
            ``REPLACED``, or ``SKIPPED`` when the page has no anchor.

        Raises:
            PostprocessingError: If the page cannot be read, staged or replaced.

        """
        if self._applied:
            msg = f"Insertion of {self.diagram} into {self.page.path} was already applied"
            raise RuntimeError(msg)
        self._applied = True

        new_lines = self.inserter.insert(self.page.read_lines())
        if new_lines is None:
            self.page.console_logger.debug("No insertion point for UML in %s.", self.page.path)
            return PageState.SKIPPED

        staging = self._write_staging(new_lines)
        self.page.replace_by(staging)
        return PageState.REPLACED

    def _write_staging(self, lines: list[str]) -> Path:
        directory = self.page.staging_directory
        try:
            descriptor, name = tempfile.mkstemp(prefix=f".{self.page.path.stem}.", suffix=".tmp", dir=directory)
        except OSError as e:
            msg = f"Cannot create staging file for {self.page.path} in {directory}: {e}"
            raise PostprocessingError(msg, str(self.page.path)) from e

        staging = Path(name)
        try:
            try:
                out = os.fdopen(descriptor, "w", encoding=self.page.encoding, newline="")
            except (OSError, LookupError):
                # fdopen owns the descriptor only on success
                os.close(descriptor)
                raise
            with out:
                out.writelines(lines)
        except (OSError, LookupError, UnicodeEncodeError) as e:
            with contextlib.suppress(OSError):
                staging.unlink()
            msg = f"Cannot write staging file {staging} for {self.page.path}: {e}"
            raise PostprocessingError(msg, str(self.page.path)) from e
        return staging
