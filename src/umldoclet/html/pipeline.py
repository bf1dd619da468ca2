"""Postprocessing of all generated pages."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from umldoclet.core.logger import LogFormat as LF
from umldoclet.html.html_file import HtmlFile, PageState

if TYPE_CHECKING:
    import logging
    from collections.abc import Iterable, Sequence

    from umldoclet.core.models.config_models import AppConfig
    from umldoclet.html.uml_diagram import UmlDiagram


@dataclass
class PostprocessReport:
    """Pages touched by one postprocessing pass."""

    replaced: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Number of visited pages."""
        return len(self.replaced) + len(self.skipped)

    def record(self, page: HtmlFile, state: PageState) -> None:
        """Add the outcome of one page."""
        match state:
            case PageState.REPLACED:
                self.replaced.append(page.path)
            case PageState.SKIPPED:
                self.skipped.append(page.path)


def find_html_files(config: AppConfig, console_logger: logging.Logger) -> list[HtmlFile]:
    """All readable ``*.html`` pages below the destination directory, in sorted path order."""
    destination = Path(config.destination_directory)
    paths = sorted(path for path in destination.rglob("*.html") if HtmlFile.is_html_file(path))
    return [HtmlFile(config, path, console_logger) for path in paths]


def postprocess_pages(pages: Iterable[HtmlFile], diagrams: Sequence[UmlDiagram], console_logger: logging.Logger) -> PostprocessReport:
    """Insert diagram references into the pages the diagrams claim, one page at a time.

    Args:
        pages: Generated pages
        diagrams: Diagrams in claim order
        console_logger: Logger for the summary

    Returns:
        Replaced and skipped pages.

    Raises:
        PostprocessingError: On the first page that cannot be read or replaced.

    """
    report = PostprocessReport()
    for page in pages:
        report.record(page, page.process(diagrams))
    console_logger.debug(
        "Postprocessed %s pages: %s replaced, %s skipped",
        LF.number(report.total),
        LF.number(len(report.replaced)),
        LF.number(len(report.skipped)),
    )
    return report
