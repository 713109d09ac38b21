"""``TextBuffer`` implementation backed by a Textual ``TextArea``."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from textual.widgets.text_area import Selection as TextAreaSelection

from editor_shortcuts.buffer import (
    Position,
    Selection,
    SelectionBoundaries,
    clip_offset,
    clip_position,
)
from editor_shortcuts.runtime.telemetry import span


class TextAreaBuffer:
    """Adapts a ``TextArea`` to the buffer contract the operations expect.

    ``TextArea`` keeps a single selection: ``list_selections`` reports it and
    ``set_selections`` shows the last (primary) selection it is given.
    Offsets count each line break with the document's own newline length so
    they index ``get_value()`` directly.
    """

    def __init__(self, text_area: Any, *, name: str = "textarea") -> None:
        self.text_area = text_area
        self.name = name

    @property
    def document(self) -> Any:
        return self.text_area.document

    @property
    def _newline_length(self) -> int:
        return len(self.document.newline)

    def get_line(self, line: int) -> str:
        return self.document.get_line(line)

    def line_count(self) -> int:
        return self.document.line_count

    def last_line(self) -> int:
        return self.document.line_count - 1

    def get_value(self) -> str:
        return self.document.text

    def get_range(self, start: Position, end: Position) -> str:
        start = self._clip(start)
        end = self._clip(end)
        if start > end:
            start, end = end, start
        return self.document.get_text_range(tuple(start), tuple(end))

    def pos_to_offset(self, pos: Position) -> int:
        line, ch = self._clip(pos)
        newline = self._newline_length
        return sum(len(self.get_line(index)) + newline for index in range(line)) + ch

    def offset_to_pos(self, offset: int) -> Position:
        newline = self._newline_length
        total = len(self.document.text)
        remaining = clip_offset(offset, total)
        for line in range(self.line_count()):
            length = len(self.get_line(line))
            if remaining <= length:
                return Position(line, remaining)
            remaining -= length + newline
        last = self.last_line()
        return Position(last, len(self.get_line(last)))

    def replace_range(
        self, text: str, start: Position, end: Optional[Position] = None
    ) -> object:
        start = self._clip(start)
        end = start if end is None else self._clip(end)
        if start > end:
            start, end = end, start
        with span(
            "textarea::replace_range",
            component="textual",
            metadata={"buffer": self.name},
        ):
            return self.text_area.replace(
                text, tuple(start), tuple(end), maintain_selection_offset=False
            )

    def list_selections(self) -> List[Selection]:
        current = self.text_area.selection
        return [Selection(Position(*current.start), Position(*current.end))]

    def set_selections(self, selections: Sequence[Selection]) -> None:
        if not selections:
            raise ValueError("At least one selection is required")
        primary = selections[-1]
        self.text_area.selection = TextAreaSelection(
            tuple(self._clip(primary.anchor)), tuple(self._clip(primary.head))
        )

    def scroll_into_view(self, boundaries: SelectionBoundaries) -> None:
        self.text_area.scroll_cursor_visible()

    def _clip(self, pos: Position) -> Position:
        return clip_position(self.document, Position(*pos))


__all__ = ["TextAreaBuffer"]
