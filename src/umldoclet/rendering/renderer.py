"""Base class of all nodes in the render tree."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from umldoclet.rendering.context import RenderContext
    from umldoclet.rendering.indent import IndentingWriter


class NodeKind(Enum):
    """Position of a node in the render tree."""

    DIAGRAM = "diagram"
    PACKAGE = "package"
    TYPE = "type"
    MEMBER = "member"
    NOTE = "note"


class Renderer(ABC):
    """One node of the render tree.

    A node owns its children in insertion order and keeps a non-owning reference to its
    parent. The diagram root has no parent.
    """

    kind: ClassVar[NodeKind]
    separate_children: ClassVar[bool] = False

    def __init__(self, parent: Renderer | None, context: RenderContext) -> None:
        """Initialize the node.

        Args:
            parent: Parent node, ``None`` only for the diagram root
            context: Shared diagram context

        """
        self.parent = parent
        self.context = context
        self.children: list[Renderer] = []

    @abstractmethod
    def write_to(self, out: IndentingWriter) -> IndentingWriter:
        """Write this node to ``out``."""

    def write_children_to(self, out: IndentingWriter) -> IndentingWriter:
        """Write all children one level deeper than ``out``."""
        indented = out.indented()
        for index, child in enumerate(self.children):
            if self.separate_children and index:
                indented.newline()
            child.write_to(indented)
        return out

    def walk(self) -> list[Renderer]:
        """This node and all descendants, depth first in child order."""
        nodes: list[Renderer] = [self]
        for child in self.children:
            nodes.extend(child.walk())
        return nodes
