"""Renderers for fields, enum constants, constructors and methods."""

from __future__ import annotations

from typing import TYPE_CHECKING

from umldoclet.rendering.renderer import NodeKind, Renderer

if TYPE_CHECKING:
    from umldoclet.core.models.doc_model import FieldDoc, MethodDoc
    from umldoclet.rendering.context import RenderContext
    from umldoclet.rendering.indent import IndentingWriter


def _member_name(name: str, *, deprecated: bool) -> str:
    # Strikethrough
    return f"--{name}--" if deprecated else name


class FieldRenderer(Renderer):
    """A field, or an enum constant (written by name only)."""

    kind = NodeKind.MEMBER

    def __init__(self, parent: Renderer, context: RenderContext, field_doc: FieldDoc, *, enum_constant: bool = False) -> None:
        super().__init__(parent, context)
        self.field_doc = field_doc
        self.enum_constant = enum_constant

    def write_to(self, out: IndentingWriter) -> IndentingWriter:
        doc = self.field_doc
        name = _member_name(doc.name, deprecated=doc.deprecated)
        if self.enum_constant:
            return out.append(name).newline()
        if doc.static:
            out.append("{static}").whitespace()
        out.append(doc.visibility.uml).append(name)
        if doc.type:
            out.append(": ").append(doc.type)
        return out.newline()


class MethodRenderer(Renderer):
    """A method, or a constructor (written without return type)."""

    kind = NodeKind.MEMBER

    def __init__(self, parent: Renderer, context: RenderContext, method_doc: MethodDoc, *, constructor: bool = False) -> None:
        super().__init__(parent, context)
        self.method_doc = method_doc
        self.constructor = constructor

    def write_to(self, out: IndentingWriter) -> IndentingWriter:
        doc = self.method_doc
        if doc.abstract:
            out.append("{abstract}").whitespace()
        if doc.static:
            out.append("{static}").whitespace()
        out.append(doc.visibility.uml).append(_member_name(doc.name, deprecated=doc.deprecated))
        out.append("(").append(", ".join(f"{param.name}: {param.type}" for param in doc.parameters)).append(")")
        if not self.constructor and doc.return_type:
            out.append(": ").append(doc.return_type)
        return out.newline()
