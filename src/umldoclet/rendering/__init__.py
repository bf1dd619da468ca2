"""Render tree producing PlantUML class diagrams from the documentable model."""

from umldoclet.rendering.class_renderer import ClassRenderer, TypeKey, TypeReferenceRenderer
from umldoclet.rendering.context import RenderContext
from umldoclet.rendering.diagram import UMLDiagram
from umldoclet.rendering.indent import IndentingWriter
from umldoclet.rendering.package_renderer import PackageRenderer

__all__ = [
    "ClassRenderer",
    "IndentingWriter",
    "PackageRenderer",
    "RenderContext",
    "TypeKey",
    "TypeReferenceRenderer",
    "UMLDiagram",
]
