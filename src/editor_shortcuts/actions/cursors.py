"""Whole-buffer multi-cursor operations.

Each operation reads every selection of the buffer and returns the complete
selection list the host should show next.
"""

from __future__ import annotations

from typing import List

from editor_shortcuts.buffer import Position, Selection, TextBuffer
from editor_shortcuts.settings import CodeEditor

from .matching import (
    find_all_match_positions,
    find_next_match_position,
    get_search_text,
    word_range_at_pos,
)
from .positions import line_end_pos, line_start_pos, selection_boundaries
from .result import BatchContext


def select_word_or_next_occurrence(
    buffer: TextBuffer, context: BatchContext
) -> List[Selection]:
    """Grow cursors to words, then add the next occurrence on each call.

    Whole-word matching applies while the current selections were produced by
    this operation; a selection made by hand matches inside words too.
    """

    context.programmatic_change = True
    selections = buffer.list_selections()
    search = get_search_text(buffer, selections, auto_expand=False)

    if search.text and search.single:
        latest, _, _ = selection_boundaries(selections[-1])
        match = find_next_match_position(
            buffer,
            latest,
            search.text,
            within_words=context.manual_selection,
            selections=selections,
        )
        updated = selections + [match] if match is not None else list(selections)
        buffer.scroll_into_view(selection_boundaries(updated[-1]))
        return updated

    updated = []
    for selection in selections:
        if not selection.is_empty:
            updated.append(selection)
            continue
        start, _, _ = selection_boundaries(selection)
        updated.append(word_range_at_pos(start, buffer.get_line(start.line)))
        context.manual_selection = False
    return updated


def select_all_occurrences(buffer: TextBuffer) -> List[Selection]:
    selections = buffer.list_selections()
    search = get_search_text(buffer, selections, auto_expand=True)
    if not search.single:
        return selections
    matches = find_all_match_positions(buffer, search.text, within_words=True)
    return matches or selections


def add_cursors_to_selection_ends(
    buffer: TextBuffer, emulate: CodeEditor = CodeEditor.VSCODE
) -> List[Selection]:
    """Split a single multi-line selection into one selection per line."""

    selections = buffer.list_selections()
    if len(selections) != 1:
        return selections

    start, end, has_trailing_newline = selection_boundaries(selections[0])
    last = end.line - 1 if has_trailing_newline else end.line
    updated = []
    for line in range(start.line, last + 1):
        head = end if line == end.line else line_end_pos(line, buffer)
        if emulate is CodeEditor.VSCODE:
            anchor = head
        else:
            anchor = start if line == start.line else line_start_pos(line)
        updated.append(Selection(anchor, head))
    return updated


def _insert_cursor(buffer: TextBuffer, line_offset: int) -> List[Selection]:
    selections = buffer.list_selections()
    added = []
    for selection in selections:
        line = selection.head.line
        if (line == 0 and line_offset < 0) or (
            line == buffer.last_line() and line_offset > 0
        ):
            break
        anchor_line = min(max(selection.anchor.line + line_offset, 0), buffer.last_line())
        anchor_length = len(buffer.get_line(anchor_line))
        head_length = len(buffer.get_line(line + line_offset))
        added.append(
            Selection(
                Position(anchor_line, min(selection.anchor.ch, anchor_length)),
                Position(line + line_offset, min(selection.head.ch, head_length)),
            )
        )
    return selections + added


def insert_cursor_above(buffer: TextBuffer) -> List[Selection]:
    return _insert_cursor(buffer, -1)


def insert_cursor_below(buffer: TextBuffer) -> List[Selection]:
    return _insert_cursor(buffer, 1)


__all__ = [
    "add_cursors_to_selection_ends",
    "insert_cursor_above",
    "insert_cursor_below",
    "select_all_occurrences",
    "select_word_or_next_occurrence",
]
