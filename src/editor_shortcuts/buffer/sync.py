"""Boundary types describing what a host editor buffer must provide."""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence

from .state import Position, Selection, SelectionBoundaries


class TextBuffer(Protocol):
    """Contract every host buffer exposes to the editing operations.

    Offsets returned by ``pos_to_offset`` are only valid until the next call
    to ``replace_range``.
    """

    def get_line(self, line: int) -> str:
        ...

    def line_count(self) -> int:
        ...

    def last_line(self) -> int:
        ...

    def get_value(self) -> str:
        ...

    def get_range(self, start: Position, end: Position) -> str:
        ...

    def replace_range(
        self, text: str, start: Position, end: Optional[Position] = None
    ) -> object:
        """Replace ``[start, end)`` with ``text``; omitting ``end`` inserts."""
        ...

    def pos_to_offset(self, pos: Position) -> int:
        ...

    def offset_to_pos(self, offset: int) -> Position:
        ...

    def list_selections(self) -> List[Selection]:
        ...

    def set_selections(self, selections: Sequence[Selection]) -> None:
        ...

    def scroll_into_view(self, boundaries: SelectionBoundaries) -> None:
        ...


class BufferValidationError(RuntimeError):
    """Raised when callers hand a buffer a position it cannot address."""

    def __init__(self, message: str, *, position: object | None = None) -> None:
        super().__init__(message)
        self.position = position
