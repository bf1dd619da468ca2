"""Shared test factories for umldoclet.

Provides reusable factory functions for configuration, documentable-element
models and generated pages that can be imported by any test module.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from umldoclet.core.models.config_models import AppConfig
from umldoclet.core.models.doc_model import ClassDoc, DocModel, FieldDoc, MethodDoc, PackageDoc, ParameterDoc, TagDoc

if TYPE_CHECKING:
    from pathlib import Path

MINIMAL_CONFIG_DATA: dict[str, Any] = {
    "destination_directory": "/tmp/test-docs",
    "html_encoding": "utf-8",
    "logging": {"levels": {"console": "INFO", "main_file": "INFO"}},
}

BOTTOM_NAVBAR = "<!-- ======= START OF BOTTOM NAVBAR ====== -->"


def create_test_app_config(**overrides: Any) -> AppConfig:
    """Create a minimal valid AppConfig for testing.

    Uses shallow merge: passing ``logging={...}`` replaces the entire
    logging dict rather than merging individual keys.

    Args:
        **overrides: Top-level fields to replace in the config data.

    """
    data = {**MINIMAL_CONFIG_DATA, **overrides}
    return AppConfig(**data)


def make_class(qualified_name: str, **fields: Any) -> ClassDoc:
    """Class documentation with the package derived from the qualified name."""
    fields.setdefault("package", qualified_name.rpartition(".")[0])
    return ClassDoc(qualified_name=qualified_name, **fields)


def make_full_class(qualified_name: str = "com.acme.Widget") -> ClassDoc:
    """A class with every kind of member, declared out of UML order."""
    return make_class(
        qualified_name,
        abstract=True,
        type_parameters=["T", "U"],
        methods=[
            MethodDoc(name="render", abstract=True, visibility="public"),
            MethodDoc(name="size", return_type="int", visibility="public"),
            MethodDoc(name="of", parameters=[ParameterDoc(name="value", type="T")], return_type="Widget", static=True, visibility="public"),
        ],
        constructors=[MethodDoc(name="Widget", parameters=[ParameterDoc(name="name", type="String")], visibility="protected")],
        fields=[
            FieldDoc(name="name", type="String", visibility="private"),
            FieldDoc(name="COUNT", type="int", static=True, visibility="public"),
        ],
        enum_constants=[FieldDoc(name="SMALL"), FieldDoc(name="LARGE")],
        tags=[TagDoc(name="note", text="First note"), TagDoc(name="since", text="1.0"), TagDoc(name="note", text="Second note")],
    )


def make_package(name: str, *classes: ClassDoc) -> PackageDoc:
    """Package documentation."""
    return PackageDoc(name=name, classes=list(classes))


def make_model(*packages: PackageDoc) -> DocModel:
    """Documentable-element model."""
    return DocModel(packages=list(packages))


def sample_model() -> DocModel:
    """Two packages with a small inheritance hierarchy and one external supertype."""
    shape = make_class("com.acme.shapes.Shape", kind="interface", methods=[MethodDoc(name="area", return_type="double", abstract=True, visibility="public")])
    circle = make_class(
        "com.acme.shapes.Circle",
        fields=[FieldDoc(name="radius", type="double", visibility="private")],
        interfaces=["com.acme.shapes.Shape", "java.io.Serializable"],
    )
    canvas = make_class("com.acme.ui.Canvas", superclass="com.acme.shapes.Circle")
    return make_model(make_package("com.acme.shapes", shape, circle), make_package("com.acme.ui", canvas))


def page_html(title: str = "Package", *, anchor: str = BOTTOM_NAVBAR, newline: str = "\n") -> str:
    """A generated page with the given insertion anchor."""
    lines = [
        "<!DOCTYPE HTML>",
        "<html lang=\"en\">",
        f"<head><title>{title}</title></head>",
        "<body>",
        "<div class=\"contentContainer\">",
        "<p>Summary</p>",
        "</div>",
    ]
    if anchor:
        lines.append(anchor)
    lines.extend(["</html>"] if anchor == "</body>" else ["</body>", "</html>"])
    return newline.join(lines) + newline


def write_page(path: Path, content: str, encoding: str = "utf-8") -> Path:
    """Write a page preserving line endings."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content.encode(encoding))
    return path


def make_render_context(destination: Path, model: DocModel, *, diagram_directory: Path | None = None, links: Any = None, qualified: bool = False) -> Any:
    """Render context for a diagram in ``diagram_directory`` (the destination by default), created on disk."""
    from umldoclet.links import ExternalLinks
    from umldoclet.rendering import RenderContext

    directory = diagram_directory or destination
    directory.mkdir(parents=True, exist_ok=True)
    return RenderContext(
        model=model,
        destination_directory=destination,
        diagram_directory=directory,
        links=links if links is not None else ExternalLinks(),
        always_use_qualified_classnames=qualified,
    )


class StaticPackageList:
    """Package list source with a fixed result that counts its calls."""

    def __init__(self, outcome: Any) -> None:
        """Initialize with the outcome every call returns."""
        self.outcome = outcome
        self.calls: list[str] = []

    def __call__(self, uri: str) -> Any:
        """Record the requested location and return the fixed outcome."""
        self.calls.append(uri)
        return self.outcome
