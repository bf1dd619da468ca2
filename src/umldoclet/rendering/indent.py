"""Writer that indents every line it starts."""

from __future__ import annotations

from typing import Self


class _Buffer:
    __slots__ = ("at_line_start", "parts")

    def __init__(self) -> None:
        self.parts: list[str] = []
        self.at_line_start = True


class IndentingWriter:
    """Accumulates text, prefixing each new line with the writer's indentation.

    Writers returned by ``indented()`` share the same buffer with one more level.
    """

    def __init__(self, indentation: str = "    ", level: int = 0, *, _buffer: _Buffer | None = None) -> None:
        """Create a writer.

        Args:
            indentation: Text for one indentation level
            level: Number of indentation levels for lines started by this writer

        """
        self.indentation = indentation
        self.level = level
        self._buffer = _buffer if _buffer is not None else _Buffer()

    def indented(self) -> IndentingWriter:
        """Return a writer on the same buffer, one level deeper."""
        return IndentingWriter(self.indentation, self.level + 1, _buffer=self._buffer)

    def append(self, text: str) -> Self:
        """Append text; text must not contain line breaks."""
        if text:
            if self._buffer.at_line_start:
                self._buffer.parts.append(self.indentation * self.level)
                self._buffer.at_line_start = False
            self._buffer.parts.append(text)
        return self

    def whitespace(self) -> Self:
        """Append a single space unless at line start or after whitespace."""
        parts = self._buffer.parts
        if not self._buffer.at_line_start and parts and not parts[-1][-1:].isspace():
            parts.append(" ")
        return self

    def newline(self) -> Self:
        """End the current line."""
        self._buffer.parts.append("\n")
        self._buffer.at_line_start = True
        return self

    def getvalue(self) -> str:
        """Everything written so far."""
        return "".join(self._buffer.parts)
