"""Diagrams emitted for the documentation run and the pages they claim."""

from __future__ import annotations

import html
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from umldoclet.core.exceptions import RenderingError
from umldoclet.html.html_file import normalize_path
from umldoclet.html.postprocessor import Inserter, PendingInsertion
from umldoclet.links.relativize import relative_location
from umldoclet.rendering import RenderContext, UMLDiagram

if TYPE_CHECKING:
    from umldoclet.core.models.config_models import AppConfig
    from umldoclet.core.models.doc_model import DocModel, PackageDoc
    from umldoclet.html.html_file import HtmlFile
    from umldoclet.links.external_link import ExternalLinks

DIAGRAM_EXTENSION = ".puml"


def package_directory(destination: Path, package_name: str) -> Path:
    """Directory of a package's pages below the destination; the destination for the unnamed package."""
    return destination.joinpath(*package_name.split(".")) if package_name else destination


class UmlDiagram(ABC):
    """A diagram scoped to one documentable unit.

    A diagram renders to a ``.puml`` file and claims exactly one generated page, into
    which a reference to the diagram is inserted.
    """

    def __init__(self, config: AppConfig, model: DocModel, links: ExternalLinks) -> None:
        """Initialize the diagram.

        Args:
            config: Active configuration
            model: The documentable-element model of the run
            links: External link resolver for undocumented types

        """
        self.config = config
        self.model = model
        self.links = links
        self.destination = normalize_path(config.destination_directory)
        self.encountered_types: frozenset[str] = frozenset()

    @property
    @abstractmethod
    def output_file(self) -> Path:
        """Location of the diagram source file."""

    @property
    @abstractmethod
    def page_path(self) -> Path:
        """Location of the page this diagram claims."""

    @property
    @abstractmethod
    def title(self) -> str:
        """Human readable description, used as link text."""

    @abstractmethod
    def build(self, context: RenderContext) -> UMLDiagram:
        """Create the render tree for this diagram."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.output_file)!r})"

    def render(self) -> str:
        """Render the diagram text.

        Every call builds a fresh render tree with an empty encountered-types set, so the
        result for the same model is always the same. Nothing is written to disk.

        Raises:
            RenderingError: If the model is malformed.

        """
        context = RenderContext(
            model=self.model,
            destination_directory=self.destination,
            diagram_directory=self.output_file.parent,
            links=self.links,
            always_use_qualified_classnames=self.config.always_use_qualified_classnames,
        )
        text = self.build(context).render()
        self.encountered_types = frozenset(context.encountered_types)
        return text

    def write(self, text: str) -> Path:
        """Write rendered text to the output file with the configured encoding.

        Raises:
            RenderingError: If the diagram directory cannot be created.

        """
        diagram_directory = self.output_file.parent
        try:
            diagram_directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            msg = f"Cannot create diagram directory {diagram_directory}: {e}"
            raise RenderingError(msg) from e
        self.output_file.write_text(text, encoding=self.config.html_encoding)
        return self.output_file

    @property
    def image_file(self) -> Path | None:
        """Image rendered from the diagram source, when an image format is configured."""
        if not self.config.image_format:
            return None
        return self.output_file.with_suffix(f".{self.config.image_format}")

    def reference_html(self, page: HtmlFile) -> str:
        """The HTML fragment inserted into ``page``."""
        image = self.image_file
        target = relative_location(page.path.parent, image or self.output_file)
        href = html.escape(target, quote=True)
        title = html.escape(self.title, quote=True)
        if image is not None:
            return f'<div class="uml-diagram"><img src="{href}" alt="{title}" title="{title}"></div>'
        return f'<div class="uml-diagram"><a href="{href}">{title}</a></div>'

    def claim(self, page: HtmlFile) -> PendingInsertion | None:
        """A pending insertion when ``page`` is the page of this diagram, ``None`` otherwise."""
        if page.path != self.page_path:
            return None
        return PendingInsertion(self, page, Inserter(self.reference_html(page)))


class PackageDiagram(UmlDiagram):
    """Diagram of one package, inserted into its package summary."""

    def __init__(self, config: AppConfig, model: DocModel, links: ExternalLinks, package: PackageDoc) -> None:
        super().__init__(config, model, links)
        self.package = package
        self.directory = package_directory(self.destination, package.name)

    @property
    def output_file(self) -> Path:
        return self.directory / f"package{DIAGRAM_EXTENSION}"

    @property
    def page_path(self) -> Path:
        return self.directory / "package-summary.html"

    @property
    def title(self) -> str:
        return f"Package diagram of {self.package.name}" if self.package.name else "Package diagram"

    def build(self, context: RenderContext) -> UMLDiagram:
        if self.package.name:
            return UMLDiagram(context, packages=[self.package])
        return UMLDiagram(context, classes=self.package.classes)


class OverviewDiagram(UmlDiagram):
    """Diagram of all packages, inserted into the overview summary."""

    @property
    def output_file(self) -> Path:
        return self.destination / f"overview{DIAGRAM_EXTENSION}"

    @property
    def page_path(self) -> Path:
        return self.destination / "overview-summary.html"

    @property
    def title(self) -> str:
        return "Overview diagram"

    def build(self, context: RenderContext) -> UMLDiagram:
        named = sorted((package for package in self.model.packages if package.name), key=lambda package: package.name)
        unnamed = [class_doc for package in self.model.packages if not package.name for class_doc in package.classes]
        return UMLDiagram(context, packages=named, classes=unnamed)


def create_diagrams(config: AppConfig, model: DocModel, links: ExternalLinks) -> list[UmlDiagram]:
    """All diagrams of the run in claim order: the overview, then packages by name.

    Packages without types get no diagram.
    """
    diagrams: list[UmlDiagram] = [OverviewDiagram(config, model, links)]
    packages = sorted((package for package in model.packages if package.classes), key=lambda package: package.name)
    diagrams.extend(PackageDiagram(config, model, links, package) for package in packages)
    return diagrams
