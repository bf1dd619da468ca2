"""State shared by all nodes of one diagram render."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from umldoclet.links.relativize import relative_location

if TYPE_CHECKING:
    from umldoclet.core.models.doc_model import DocModel
    from umldoclet.links.external_link import ExternalLinks


@dataclass
class RenderContext:
    """Diagram-wide context for the render tree.

    ``encountered_types`` collects the qualified name of every type whose name was written.
    Relations are only drawn to encountered types.
    """

    model: DocModel
    destination_directory: Path
    diagram_directory: Path
    links: ExternalLinks
    always_use_qualified_classnames: bool = False
    encountered_types: set[str] = field(default_factory=set)
    display_names: dict[str, str] = field(default_factory=dict)

    def encounter(self, qualified_name: str, display_name: str) -> None:
        """Register a written type name."""
        self.encountered_types.add(qualified_name)
        self.display_names.setdefault(qualified_name, display_name)

    def display_name(self, qualified_name: str) -> str:
        """The name a type was written with, its qualified name if never written."""
        return self.display_names.get(qualified_name, qualified_name)

    def type_link(self, qualified_name: str) -> str | None:
        """Link to the documentation page of a type.

        Documented types link relatively from the diagram directory to their page below the
        destination directory. Other types link through the external links, if any knows them.
        """
        documented = self.model.find_class(qualified_name)
        if documented is not None:
            page = self.destination_directory.joinpath(*documented.package.split(".")) if documented.package else self.destination_directory
            return relative_location(self.diagram_directory, page / f"{documented.simple_name}.html")
        package_name, _, type_name = qualified_name.rpartition(".")
        return self.links.resolve_type(package_name, type_name)
