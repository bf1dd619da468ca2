"""Free-text notes attached to a type."""

from __future__ import annotations

from typing import TYPE_CHECKING

from umldoclet.rendering.renderer import NodeKind, Renderer

if TYPE_CHECKING:
    from umldoclet.rendering.context import RenderContext
    from umldoclet.rendering.indent import IndentingWriter


class NoteRenderer(Renderer):
    """A note block below the type it belongs to."""

    kind = NodeKind.NOTE

    def __init__(self, parent: Renderer, context: RenderContext, note: str, target: str) -> None:
        super().__init__(parent, context)
        self.note = note
        self.target = target

    def write_to(self, out: IndentingWriter) -> IndentingWriter:
        out.append("note bottom of ").append(self.target).newline()
        indented = out.indented()
        for line in self.note.strip().splitlines():
            indented.append(line.strip()).newline()
        return out.append("end note").newline()
