"""Line-level editing and navigation operations.

Insertions and deletions are batch operations: a host runs them once per
selection against the same unmodified buffer and applies all edits together,
so the selection each call reports is corrected by the work done for the
selections before it (``BatchContext.iteration`` and ``lines_deleted``).
The remaining operations handle one selection against the current buffer.
"""

from __future__ import annotations

import re
from typing import Literal

from editor_shortcuts.buffer import Position, Selection, TextBuffer

from .lists import is_numbered, list_prefix_of, next_list_prefix, renumber_list_prefixes
from .positions import (
    is_blank,
    leading_whitespace,
    line_end_pos,
    line_start_pos,
    selection_boundaries,
)
from .result import BatchContext, EditResult, TextEdit

Direction = Literal["up", "down"]
LineBoundary = Literal["start", "end"]
LineTarget = Literal["prev", "next", "first", "last"]

_SENTENCE_END_AHEAD = re.compile(r"[.!?][\"')\]}*_`]*(?=\s|\Z)")
_SENTENCE_END_BEHIND = re.compile(r"[.!?][\"')\]}*_`]*\s+")


def insert_line_above(
    buffer: TextBuffer, selection: Selection, context: BatchContext
) -> EditResult:
    line = selection.head.line
    text = buffer.get_line(line)
    indentation = leading_whitespace(text)
    changes = []

    prefix = ""
    # Only continue a list the previous line belongs to.
    if (
        context.settings.auto_insert_list_prefix
        and line > 0
        and not is_blank(buffer.get_line(line - 1))
    ):
        prefix = next_list_prefix(text, "before") or ""
        if is_numbered(prefix):
            changes.extend(renumber_list_prefixes(buffer, line, indentation))

    start = buffer.pos_to_offset(line_start_pos(line))
    changes.append(TextEdit.insert(start, indentation + prefix + "\n"))
    head = Position(line + context.iteration, len(indentation) + len(prefix))
    return EditResult(changes=tuple(changes), selection=Selection.cursor(head))


def insert_line_below(
    buffer: TextBuffer, selection: Selection, context: BatchContext
) -> EditResult:
    line = selection.head.line
    text = buffer.get_line(line)
    indentation = leading_whitespace(text)
    line_start = buffer.pos_to_offset(line_start_pos(line))
    line_end = line_start + len(text)
    changes = []

    prefix = ""
    if context.settings.auto_insert_list_prefix:
        next_prefix = next_list_prefix(text, "after")
        if next_prefix is None:
            # Confirming an empty list item ends the list.
            return EditResult(
                changes=(TextEdit(line_start, line_end),),
                selection=Selection.cursor(Position(line, 0)),
            )
        prefix = next_prefix
        if is_numbered(prefix):
            changes.extend(renumber_list_prefixes(buffer, line + 1, indentation))

    changes.append(TextEdit.insert(line_end, "\n" + indentation + prefix))
    head = Position(line + 1 + context.iteration, len(indentation) + len(prefix))
    return EditResult(changes=tuple(changes), selection=Selection.cursor(head))


def delete_line(
    buffer: TextBuffer, selection: Selection, context: BatchContext
) -> EditResult:
    if context.iteration == 0:
        context.lines_deleted = 0
    start, end, has_trailing_newline = selection_boundaries(selection)

    if end.line == buffer.last_line():
        # No following line to pull up; take the preceding newline instead.
        previous = max(0, start.line - 1)
        previous_end = line_end_pos(previous, buffer)
        delete_from = line_start_pos(0) if start.line == 0 else previous_end
        delete_to = line_start_pos(end.line) if end.ch == 0 else line_end_pos(end.line, buffer)
        head = Position(
            max(previous - context.lines_deleted, 0), min(start.ch, previous_end.ch)
        )
        return EditResult(
            changes=(
                TextEdit(buffer.pos_to_offset(delete_from), buffer.pos_to_offset(delete_to)),
            ),
            selection=Selection.cursor(head),
        )

    to_line = end.line - 1 if has_trailing_newline else end.line
    next_line_end = line_end_pos(to_line + 1, buffer)
    edit = TextEdit(
        buffer.pos_to_offset(line_start_pos(start.line)),
        buffer.pos_to_offset(line_start_pos(to_line + 1)),
    )
    head = Position(
        max(start.line - context.lines_deleted, 0), min(end.ch, next_line_end.ch)
    )
    context.lines_deleted += to_line - start.line + 1
    return EditResult(changes=(edit,), selection=Selection.cursor(head))


def join_lines(buffer: TextBuffer, selection: Selection) -> EditResult:
    """Pull the following line(s) onto the selection's first line.

    List markers on joined lines are dropped and a single space separates the
    joined content unless the line already ends in one.
    """

    start, end, _ = selection_boundaries(selection)
    line = start.line
    original = buffer.get_line(line)
    joined = original
    join_point = len(original)
    stripped = 0
    count = max(end.line - line, 1)

    taken = 0
    while taken < count and line + taken + 1 < buffer.line_count():
        following = buffer.get_line(line + taken + 1)
        marker = list_prefix_of(following)
        stripped += len(marker)
        content = following[len(marker) :]
        join_point = len(joined)
        if content and not joined.endswith(" "):
            joined += " " + content
        else:
            joined += content
        taken += 1

    changes = ()
    if taken:
        replace_from = buffer.pos_to_offset(line_end_pos(line, buffer))
        replace_to = buffer.pos_to_offset(line_end_pos(line + taken, buffer))
        changes = (TextEdit(replace_from, replace_to, joined[len(original) :]),)

    length = buffer.pos_to_offset(end) - buffer.pos_to_offset(start)
    if length == 0:
        return EditResult(changes=changes, selection=Selection.cursor(Position(line, join_point)))
    head = Position(line, start.ch + length - stripped)
    return EditResult(changes=changes, selection=Selection(start, head))


def copy_line(buffer: TextBuffer, selection: Selection, direction: Direction) -> EditResult:
    start, end, has_trailing_newline = selection_boundaries(selection)
    first = line_start_pos(start.line)
    to_line = end.line - 1 if has_trailing_newline else end.line
    last = line_end_pos(to_line, buffer)
    contents = buffer.get_range(first, last)

    if direction == "up":
        edit = TextEdit.insert(buffer.pos_to_offset(last), "\n" + contents)
        return EditResult(changes=(edit,), selection=selection)

    edit = TextEdit.insert(buffer.pos_to_offset(first), contents + "\n")
    lines_selected = end.line - start.line + 1
    return EditResult(
        changes=(edit,),
        selection=Selection(
            Position(to_line + 1, start.ch),
            Position(to_line + lines_selected, end.ch),
        ),
    )


def _delete_span(buffer: TextBuffer, start: Position, end: Position, cursor: Position) -> EditResult:
    edit = TextEdit(buffer.pos_to_offset(start), buffer.pos_to_offset(end))
    return EditResult(changes=(edit,), selection=Selection.cursor(cursor))


def delete_to_start_of_line(buffer: TextBuffer, selection: Selection) -> EditResult:
    pos = selection.head
    if pos == (0, 0):
        return EditResult.unchanged(selection)
    start = line_start_pos(pos.line)
    if pos == start:
        start = line_end_pos(pos.line - 1, buffer)
    return _delete_span(buffer, start, pos, start)


def delete_to_end_of_line(buffer: TextBuffer, selection: Selection) -> EditResult:
    pos = selection.head
    end = line_end_pos(pos.line, buffer)
    if pos == end:
        if pos.line == buffer.last_line():
            return EditResult.unchanged(selection)
        end = line_start_pos(pos.line + 1)
    return _delete_span(buffer, pos, end, pos)


def delete_to_end_of_sentence(buffer: TextBuffer, selection: Selection) -> EditResult:
    pos = selection.head
    line_end = line_end_pos(pos.line, buffer)
    match = _SENTENCE_END_AHEAD.search(buffer.get_line(pos.line), pos.ch)
    if match is not None:
        end = pos.with_ch(match.end())
    elif pos != line_end:
        end = line_end
    elif pos.line < buffer.last_line():
        end = line_start_pos(pos.line + 1)
    else:
        return EditResult.unchanged(selection)
    return _delete_span(buffer, pos, end, pos)


def delete_to_start_of_sentence(buffer: TextBuffer, selection: Selection) -> EditResult:
    pos = selection.head
    before = buffer.get_line(pos.line)[: pos.ch]
    last_match = None
    for last_match in _SENTENCE_END_BEHIND.finditer(before):
        pass

    if last_match is not None:
        start = pos.with_ch(last_match.end())
    elif pos.ch > 0:
        start = line_start_pos(pos.line)
    elif pos.line > 0:
        start = line_end_pos(pos.line - 1, buffer)
    else:
        return EditResult.unchanged(selection)
    return _delete_span(buffer, start, pos, start)


def select_line(buffer: TextBuffer, selection: Selection) -> EditResult:
    start, end, _ = selection_boundaries(selection)
    if end.line + 1 < buffer.line_count():
        head = line_start_pos(end.line + 1)
    else:
        head = line_end_pos(end.line, buffer)
    return EditResult.select(line_start_pos(start.line), head)


def go_to_line_boundary(
    buffer: TextBuffer, selection: Selection, boundary: LineBoundary
) -> EditResult:
    start, end, _ = selection_boundaries(selection)
    if boundary == "start":
        return EditResult.select(line_start_pos(start.line))
    return EditResult.select(line_end_pos(end.line, buffer))


def navigate_line(
    buffer: TextBuffer, selection: Selection, target: LineTarget
) -> EditResult:
    pos = selection.head
    last = buffer.last_line()
    if target == "prev":
        line = max(pos.line - 1, 0)
        ch = min(pos.ch, len(buffer.get_line(line)))
    elif target == "next":
        line = min(pos.line + 1, last)
        ch = min(pos.ch, len(buffer.get_line(line)))
    elif target == "first":
        line, ch = 0, 0
    elif target == "last":
        line, ch = last, len(buffer.get_line(last))
    else:
        raise ValueError(f"Unknown line target '{target}'")
    return EditResult.select(Position(line, ch))


__all__ = [
    "copy_line",
    "delete_line",
    "delete_to_end_of_line",
    "delete_to_end_of_sentence",
    "delete_to_start_of_line",
    "delete_to_start_of_sentence",
    "go_to_line_boundary",
    "insert_line_above",
    "insert_line_below",
    "join_lines",
    "navigate_line",
    "select_line",
]
