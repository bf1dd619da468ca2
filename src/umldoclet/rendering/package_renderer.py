"""Renderer for a package and the types it contains."""

from __future__ import annotations

from typing import TYPE_CHECKING

from umldoclet.core.exceptions import RenderingError
from umldoclet.rendering.class_renderer import ClassRenderer
from umldoclet.rendering.renderer import NodeKind, Renderer

if TYPE_CHECKING:
    from umldoclet.core.models.doc_model import PackageDoc
    from umldoclet.rendering.context import RenderContext
    from umldoclet.rendering.indent import IndentingWriter


class PackageRenderer(Renderer):
    """A ``package <name> { ... }`` block with one child per type, in model order."""

    kind = NodeKind.PACKAGE
    separate_children = True

    def __init__(self, parent: Renderer, context: RenderContext, package_doc: PackageDoc) -> None:
        if package_doc is None or package_doc.classes is None:
            msg = "No package documentation provided."
            raise RenderingError(msg)
        super().__init__(parent, context)
        self.package_doc = package_doc
        self.children.extend(ClassRenderer(self, context, class_doc) for class_doc in package_doc.classes)

    def write_to(self, out: IndentingWriter) -> IndentingWriter:
        out.append("package").whitespace().append(self.package_doc.name).whitespace().append("{").newline()
        return self.write_children_to(out).append("}").newline()
