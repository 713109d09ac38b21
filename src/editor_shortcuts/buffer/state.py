"""Position, selection, and selection-list state for buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, NamedTuple, Optional


class Position(NamedTuple):
    """Line index plus zero-based column within that line."""

    line: int
    ch: int

    def with_ch(self, ch: int) -> "Position":
        return Position(self.line, ch)


@dataclass(frozen=True, slots=True)
class Selection:
    """Anchor/head pair; the anchor may sit after the head."""

    anchor: Position
    head: Position

    @classmethod
    def cursor(cls, pos: Position) -> "Selection":
        return cls(anchor=pos, head=pos)

    @classmethod
    def of(cls, anchor: Position, head: Optional[Position] = None) -> "Selection":
        return cls(anchor=anchor, head=head if head is not None else anchor)

    @property
    def is_empty(self) -> bool:
        return self.anchor == self.head


class SelectionBoundaries(NamedTuple):
    """Document-ordered form of a selection."""

    start: Position
    end: Position
    has_trailing_newline: bool = False


@dataclass(slots=True)
class BufferState:
    """Mutable selection list tied to a BufferDocument version."""

    selections: List[Selection] = field(
        default_factory=lambda: [Selection.cursor(Position(0, 0))]
    )
    last_change_tick: int = 0
    last_scrolled: Optional[SelectionBoundaries] = None

    @property
    def primary(self) -> Selection:
        return self.selections[-1]

    def set_selections(self, selections: Iterable[Selection]) -> None:
        updated = list(selections)
        if not updated:
            raise ValueError("At least one selection is required")
        self.selections = updated

    def set_cursor(self, line: int, ch: int) -> None:
        self.selections = [Selection.cursor(Position(line, ch))]
