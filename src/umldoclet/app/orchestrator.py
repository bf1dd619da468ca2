"""Main orchestrator module for umldoclet.

This module sequences one documentation-generation run: load the model, resolve
external links, render and write all diagrams, then postprocess the generated pages.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING

from umldoclet.core.logger import LogFormat as LF
from umldoclet.core.logger import shorten_path
from umldoclet.core.model_loader import load_doc_model
from umldoclet.html import create_diagrams, find_html_files, postprocess_pages
from umldoclet.links import ExternalLinks

if TYPE_CHECKING:
    import logging
    from pathlib import Path

    from umldoclet.core.models.config_models import AppConfig
    from umldoclet.core.models.doc_model import DocModel
    from umldoclet.html import PostprocessReport, UmlDiagram
    from umldoclet.links.external_link import PackageListSource


class Orchestrator:
    """Orchestrates the diagram generation workflow."""

    def __init__(
        self,
        config: AppConfig,
        console_logger: logging.Logger,
        error_logger: logging.Logger,
        *,
        fetcher: PackageListSource | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            config: Validated configuration
            console_logger: Logger for progress output
            error_logger: Logger for warnings and failures
            fetcher: Package list source override, the HTTP/file fetcher by default

        """
        self.config = config
        self.console_logger = console_logger
        self.error_logger = error_logger
        self.fetcher = fetcher

    async def run(self) -> PostprocessReport:
        """Run the whole pass.

        Returns:
            Report of replaced and skipped pages.

        Raises:
            UmlDocletError: On configuration, rendering or postprocessing failure.

        """
        start_time = time.time()
        model = await asyncio.to_thread(load_doc_model, self.config.model_file)

        # Malformed link locations fail here, before any rendering
        links = ExternalLinks.from_config(
            self.config,
            error_logger=self.error_logger,
            console_logger=self.console_logger,
            fetcher=self.fetcher,
        )
        if len(links):
            self.console_logger.debug("Configured %s external links", LF.number(len(links)))

        diagrams = self.create_diagrams(model, links)
        await asyncio.to_thread(self.write_diagrams, diagrams)

        pages = await asyncio.to_thread(find_html_files, self.config, self.console_logger)
        report = await asyncio.to_thread(postprocess_pages, pages, diagrams, self.console_logger)

        self.console_logger.info(
            "%s %s diagrams, %s of %s pages updated in %s",
            LF.success("Done:"),
            LF.number(len(diagrams)),
            LF.number(len(report.replaced)),
            LF.number(report.total),
            LF.duration(time.time() - start_time),
        )
        return report

    def create_diagrams(self, model: DocModel, links: ExternalLinks) -> list[UmlDiagram]:
        """Diagrams of the run in claim order."""
        return create_diagrams(self.config, model, links)

    def write_diagrams(self, diagrams: list[UmlDiagram]) -> list[Path]:
        """Render every diagram, then write them all.

        Nothing is written when any diagram fails to render.
        """
        rendered = [(diagram, diagram.render()) for diagram in diagrams]
        written: list[Path] = []
        for diagram, text in rendered:
            path = diagram.write(text)
            self.console_logger.info("Wrote %s (%s types)", LF.file(shorten_path(str(path), self.config)), LF.number(len(diagram.encountered_types)))
            written.append(path)
        return written
