"""Validation helpers shared across buffer implementations."""

from __future__ import annotations

from typing import Protocol

from .state import Position
from .sync import BufferValidationError


class LineSource(Protocol):
    @property
    def line_count(self) -> int:
        ...

    def get_line(self, index: int) -> str:
        ...


def clip_position(document: LineSource, pos: Position) -> Position:
    """Clamp ``pos`` into the document; negative coordinates are rejected.

    Positions past the last line map to the document end and columns past a
    line's end map to that line's end.
    """

    line, ch = pos
    if line < 0 or ch < 0:
        raise BufferValidationError("Negative position", position=pos)
    last = document.line_count - 1
    if line > last:
        return Position(last, len(document.get_line(last)))
    return Position(line, min(ch, len(document.get_line(line))))


def clip_offset(offset: int, length: int) -> int:
    if offset < 0:
        raise BufferValidationError("Negative offset", position=offset)
    return min(offset, length)
