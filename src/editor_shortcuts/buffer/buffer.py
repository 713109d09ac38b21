"""Reference buffer implementing the host contract over a line document."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, List, Optional, Sequence

from editor_shortcuts.runtime import telemetry

from .document import BufferDocument
from .state import BufferState, Position, Selection, SelectionBoundaries
from .validation import clip_offset, clip_position


@dataclass(slots=True)
class BufferView:
    version: int
    text: str
    selections: tuple[Selection, ...]


@dataclass(slots=True)
class BufferDelta:
    version: int
    start: int
    removed: str
    inserted: str
    label: str


class Buffer:
    """In-memory text buffer with line/column and offset addressing.

    Positions handed to the buffer are clipped to the document the way most
    host editors do; negative coordinates raise ``BufferValidationError``.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self.history: List[BufferDelta] = []

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        name: str = "default",
        selections: Optional[Sequence[Selection]] = None,
    ) -> "Buffer":
        buffer = cls(name=name, document=BufferDocument.from_text(text))
        if selections:
            buffer.set_selections(selections)
        return buffer

    @classmethod
    def from_lines(cls, *lines: str, name: str = "default") -> "Buffer":
        return cls.from_text("\n".join(lines), name=name)

    def snapshot(self) -> BufferView:
        return BufferView(
            version=self.document.version,
            text=self.document.text,
            selections=tuple(self.state.selections),
        )

    @property
    def lines(self) -> Sequence[str]:
        return self.document.snapshot()

    def get_line(self, line: int) -> str:
        return self.document.get_line(line)

    def line_count(self) -> int:
        return self.document.line_count

    def last_line(self) -> int:
        return self.document.line_count - 1

    def get_value(self) -> str:
        return self.document.text

    def get_range(self, start: Position, end: Position) -> str:
        start_offset = self.pos_to_offset(start)
        end_offset = self.pos_to_offset(end)
        if start_offset > end_offset:
            start_offset, end_offset = end_offset, start_offset
        return self.document.text[start_offset:end_offset]

    def pos_to_offset(self, pos: Position) -> int:
        return self.document.offset_of(clip_position(self.document, Position(*pos)))

    def offset_to_pos(self, offset: int) -> Position:
        return self.document.position_at(clip_offset(offset, self.document.length))

    def replace_range(
        self,
        text: str,
        start: Position,
        end: Optional[Position] = None,
        *,
        label: str = "replace_range",
    ) -> BufferDelta:
        start_offset = self.pos_to_offset(start)
        end_offset = start_offset if end is None else self.pos_to_offset(end)
        if start_offset > end_offset:
            start_offset, end_offset = end_offset, start_offset
        with Transaction(self, label) as tx:
            removed = self.document.text[start_offset:end_offset]
            self.document = self.document.splice(start_offset, end_offset, text)
            self.state.last_change_tick = self.document.version
            delta = tx.commit(start_offset, removed, text)
        return delta

    def insert_text(self, text: str, pos: Position) -> BufferDelta:
        return self.replace_range(text, pos, label="insert_text")

    def delete_range(self, start: Position, end: Position) -> BufferDelta:
        return self.replace_range("", start, end, label="delete_range")

    def list_selections(self) -> List[Selection]:
        return list(self.state.selections)

    def set_selections(self, selections: Sequence[Selection]) -> None:
        self.state.set_selections(
            Selection(
                anchor=clip_position(self.document, Position(*selection.anchor)),
                head=clip_position(self.document, Position(*selection.head)),
            )
            for selection in selections
        )

    def set_cursor(self, line: int, ch: int) -> None:
        self.set_selections([Selection.cursor(Position(line, ch))])

    def scroll_into_view(self, boundaries: SelectionBoundaries) -> None:
        self.state.last_scrolled = boundaries


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps a single buffer mutation in a telemetry span and records it."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def commit(self, start: int, removed: str, inserted: str) -> BufferDelta:
        delta = BufferDelta(
            version=self.buffer.document.version,
            start=start,
            removed=removed,
            inserted=inserted,
            label=self.label,
        )
        self.buffer.history.append(delta)
        return delta

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
