"""Position and range helpers shared by every operation."""

from __future__ import annotations

from editor_shortcuts.buffer import Position, Selection, SelectionBoundaries, TextBuffer


def line_start_pos(line: int) -> Position:
    return Position(line, 0)


def line_end_pos(line: int, buffer: TextBuffer) -> Position:
    return Position(line, len(buffer.get_line(line)))


def leading_whitespace(text: str) -> str:
    return text[: len(text) - len(text.lstrip())]


def is_blank(text: str) -> bool:
    return not text.strip()


def first_non_whitespace(text: str) -> int:
    """Column of the first non-whitespace character, or -1 on a blank line."""

    stripped = text.lstrip()
    return len(text) - len(stripped) if stripped else -1


def selection_boundaries(selection: Selection) -> SelectionBoundaries:
    start, end = selection.anchor, selection.head
    if start > end:
        start, end = end, start
    # A range dragged to column 0 of a later line touches, but does not own,
    # that line.
    has_trailing_newline = end.line > start.line and end.ch == 0
    return SelectionBoundaries(start, end, has_trailing_newline)


__all__ = [
    "first_non_whitespace",
    "is_blank",
    "leading_whitespace",
    "line_end_pos",
    "line_start_pos",
    "selection_boundaries",
]
