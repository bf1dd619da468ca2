"""Root of the render tree: one PlantUML diagram."""

from __future__ import annotations

from typing import TYPE_CHECKING

from umldoclet.core.models.doc_model import ClassDoc
from umldoclet.rendering.class_renderer import ClassRenderer, TypeKey, TypeReferenceRenderer
from umldoclet.rendering.indent import IndentingWriter
from umldoclet.rendering.package_renderer import PackageRenderer
from umldoclet.rendering.renderer import NodeKind, Renderer

if TYPE_CHECKING:
    from collections.abc import Iterable

    from umldoclet.core.models.doc_model import PackageDoc
    from umldoclet.rendering.context import RenderContext

HEADER = (
    "set namespaceSeparator none",
    "hide empty fields",
    "hide empty methods",
)


class UMLDiagram(Renderer):
    """Diagram root with packages and unpackaged types as children.

    After the children, relations to supertypes are written. A supertype that was not
    written as part of the diagram is first declared as a linked reference, when its
    documentation resolves; otherwise its relations are left out.
    """

    kind = NodeKind.DIAGRAM
    separate_children = True

    def __init__(self, context: RenderContext, packages: Iterable[PackageDoc] = (), classes: Iterable[ClassDoc] = ()) -> None:
        """Create the render tree.

        Args:
            context: Shared diagram context
            packages: Packages rendered as package blocks
            classes: Types rendered directly below the root

        """
        super().__init__(None, context)
        self.children.extend(PackageRenderer(self, context, package) for package in packages)
        self.children.extend(ClassRenderer(self, context, class_doc) for class_doc in classes)

    def class_renderers(self) -> list[ClassRenderer]:
        """All type nodes in tree order."""
        return [node for node in self.walk() if isinstance(node, ClassRenderer)]

    def render(self) -> str:
        """Return the complete diagram text."""
        return self.write_to(IndentingWriter()).getvalue()

    def write_to(self, out: IndentingWriter) -> IndentingWriter:
        out.append("@startuml").newline()
        body = out.indented()
        for line in HEADER:
            body.append(line).newline()
        if self.children:
            body.newline()
        self.write_children_to(out)
        self._write_relations_to(body)
        return out.append("@enduml").newline()

    def _write_relations_to(self, out: IndentingWriter) -> IndentingWriter:
        references: dict[TypeKey, TypeReferenceRenderer] = {}
        relations: list[tuple[str, str, str]] = []
        for renderer in self.class_renderers():
            for supertype, arrow, kind in renderer.supertypes():
                key = TypeKey(supertype)
                if supertype not in self.context.encountered_types and key not in references:
                    url = self.context.type_link(supertype)
                    if url is None:
                        continue
                    reference_doc = self.context.model.find_class(supertype) or ClassDoc(
                        qualified_name=supertype, package=supertype.rpartition(".")[0], kind=kind
                    )
                    references[key] = TypeReferenceRenderer(self, self.context, reference_doc, url)
                relations.append((supertype, arrow, renderer.class_doc.qualified_name))

        if references:
            out.newline()
            for reference in references.values():
                reference.write_to(out)
        if relations:
            out.newline()
            for supertype, arrow, subtype in relations:
                out.append(self.context.display_name(supertype)).whitespace().append(arrow).whitespace()
                out.append(self.context.display_name(subtype)).newline()
        return out
