"""Renderer for a single class, interface, enum or annotation type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from umldoclet.core.exceptions import RenderingError
from umldoclet.core.models.doc_model import TypeKind
from umldoclet.rendering.members import FieldRenderer, MethodRenderer
from umldoclet.rendering.notes import NoteRenderer
from umldoclet.rendering.renderer import NodeKind, Renderer

if TYPE_CHECKING:
    from collections.abc import Sequence
    from typing import TypeVar

    from umldoclet.core.models.doc_model import ClassDoc
    from umldoclet.rendering.context import RenderContext
    from umldoclet.rendering.indent import IndentingWriter

    T = TypeVar("T")

NOTE_TAG = "note"
GENERALIZATION = "<|--"
REALIZATION = "<|.."


@dataclass(frozen=True, slots=True)
class TypeKey:
    """Identity of a rendered type: its fully qualified name.

    Two renders of the same type collapse to one key, whatever their content.
    """

    qualified_name: str


def _require(items: Sequence[T] | None, what: str, owner: str) -> Sequence[T]:
    if items is None:
        msg = f"Missing {what} for {owner}"
        raise RenderingError(msg)
    for item in items:
        if item is None:
            msg = f"Unexpected empty entry in {what} of {owner}"
            raise RenderingError(msg)
    return items


class ClassRenderer(Renderer):
    """A class-like type with its members, in UML order.

    Children are ordered: enum constants, static fields, instance fields, constructors,
    concrete methods, abstract methods. Equality and hashing use only the qualified name.
    Each ``note`` tag becomes a note below the type. A note tag with blank text produces
    no note block.
    """

    kind = NodeKind.TYPE

    def __init__(self, parent: Renderer, context: RenderContext, class_doc: ClassDoc) -> None:
        """Create the renderer and its member children.

        Raises:
            RenderingError: If the class documentation or one of its members is missing.

        """
        if parent is None:
            msg = "No parent renderer for class provided."
            raise RenderingError(msg)
        if class_doc is None:
            msg = "No class documentation provided."
            raise RenderingError(msg)
        super().__init__(parent, context)
        self.class_doc = class_doc
        self.notes: list[NoteRenderer] = []

        owner = class_doc.qualified_name
        for constant in _require(class_doc.enum_constants, "enum constants", owner):
            self.children.append(FieldRenderer(self, context, constant, enum_constant=True))

        fields = _require(class_doc.fields, "fields", owner)
        self.children.extend(FieldRenderer(self, context, field) for field in fields if field.static)
        self.children.extend(FieldRenderer(self, context, field) for field in fields if not field.static)

        for constructor in _require(class_doc.constructors, "constructors", owner):
            self.children.append(MethodRenderer(self, context, constructor, constructor=True))

        methods = _require(class_doc.methods, "methods", owner)
        self.children.extend(MethodRenderer(self, context, method) for method in methods if not method.abstract)
        self.children.extend(MethodRenderer(self, context, method) for method in methods if method.abstract)

        _require(class_doc.tags, "tags", owner)
        for tag in class_doc.tags_named(NOTE_TAG):
            if tag.text.strip():
                self.notes.append(NoteRenderer(self, context, tag.text, self.name()))

    @property
    def key(self) -> TypeKey:
        """Identity of the rendered type."""
        return TypeKey(self.class_doc.qualified_name)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ClassRenderer) and self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.class_doc.qualified_name!r})"

    def uml_type(self) -> str:
        """UML keyword: ``enum``, ``interface``, ``annotation``, ``abstract class`` or ``class``."""
        match self.class_doc.kind:
            case TypeKind.ENUM:
                return "enum"
            case TypeKind.INTERFACE:
                return "interface"
            case TypeKind.ANNOTATION:
                return "annotation"
        return "abstract class" if self.class_doc.abstract else "class"

    def name(self) -> str:
        """Name to render.

        Qualified directly below the diagram root; relative to the package when nested in a
        package node (unless qualified names are always used); qualified otherwise.
        """
        qualified = self.class_doc.qualified_name
        if self.parent is not None and self.parent.kind is NodeKind.PACKAGE and not self.context.always_use_qualified_classnames:
            package_prefix = f"{self.class_doc.package}." if self.class_doc.package else ""
            if package_prefix and qualified.startswith(package_prefix):
                return qualified[len(package_prefix) :]
        return qualified

    def write_name_to(self, out: IndentingWriter) -> IndentingWriter:
        """Write the name and mark the type as encountered."""
        name = self.name()
        self.context.encounter(self.class_doc.qualified_name, name)
        return out.append(name)

    def write_generics_to(self, out: IndentingWriter) -> IndentingWriter:
        """Write ``<A, B>`` when the type has type parameters."""
        type_parameters = self.class_doc.type_parameters
        if type_parameters:
            out.append("<").append(", ".join(type_parameters)).append(">")
        return out

    def write_link_to(self, out: IndentingWriter) -> IndentingWriter:
        """Write ``[[url label]]`` when the documentation page of the type resolves."""
        qualified = self.class_doc.qualified_name
        if url := self.context.type_link(qualified):
            out.whitespace().append(f"[[{url} {qualified}]]")
        return out

    def write_notes_to(self, out: IndentingWriter) -> IndentingWriter:
        """Write the trailing notes in declaration order."""
        for note in self.notes:
            note.write_to(out)
        return out

    def write_to(self, out: IndentingWriter) -> IndentingWriter:
        self.write_name_to(out.append(self.uml_type()).whitespace())
        self.write_generics_to(out)
        if self.class_doc.deprecated:
            out.whitespace().append("<<deprecated>>")
        self.write_link_to(out)
        self.write_children_to(out.whitespace().append("{").newline()).append("}").newline()
        return self.write_notes_to(out)

    def supertypes(self) -> list[tuple[str, str, TypeKind]]:
        """``(qualified name, arrow, kind)`` for the superclass and each implemented interface."""
        doc = self.class_doc
        result: list[tuple[str, str, TypeKind]] = []
        if doc.superclass:
            result.append((doc.superclass, GENERALIZATION, TypeKind.CLASS))
        interface_arrow = GENERALIZATION if doc.kind is TypeKind.INTERFACE else REALIZATION
        result.extend((interface, interface_arrow, TypeKind.INTERFACE) for interface in doc.interfaces)
        return result


class TypeReferenceRenderer(ClassRenderer):
    """Declaration of a type outside the diagram, with a link to its documentation."""

    def __init__(self, parent: Renderer, context: RenderContext, class_doc: ClassDoc, url: str) -> None:
        super().__init__(parent, context, class_doc)
        self.url = url

    def write_to(self, out: IndentingWriter) -> IndentingWriter:
        self.write_name_to(out.append(self.uml_type()).whitespace())
        return out.whitespace().append(f"[[{self.url} {self.class_doc.qualified_name}]]").newline()
