"""Reorder sentences: swap with a neighbour or hop to an adjacent paragraph.

The moved unit is either the sentence under the cursor or a selection snapped
outward to whole sentences. Walking away from the unit, a blank line means
the unit is relocated to the edge of the neighbouring paragraph; anything
else means it trades places with the next (or previous) sentence.
"""

from __future__ import annotations

from typing import Optional, Tuple

from editor_shortcuts.buffer import Position, Selection, TextBuffer
from editor_shortcuts.runtime.telemetry import record_event

from .positions import is_blank, selection_boundaries
from .result import EditResult, TextEdit
from .sentence import (
    follows_terminator,
    sentence_at,
    skip_closing_delimiters_backward,
    snap_to_sentences,
)


def _unit_bounds(buffer: TextBuffer, selection: Selection) -> Tuple[Position, Position]:
    if selection.is_empty:
        return sentence_at(buffer, selection.head)
    return snap_to_sentences(buffer, selection_boundaries(selection))


def _trailing_inline_space(text: str) -> int:
    stripped = text.rstrip(" \t")
    return len(text) - len(stripped)


def _separator(first: str, last: str, between: str) -> Tuple[str, str]:
    """Return ``(separator, last)`` for placing ``last`` after ``first``.

    Two sentences that touch keep touching only if ``first`` already ends in
    whitespace. Otherwise the trailing spaces carried by ``last`` move in
    front of it; with none to move, a single space is used.
    """

    if between or (first and first[-1].isspace()):
        return between, last
    trailing = _trailing_inline_space(last)
    if trailing:
        return last[len(last) - trailing :], last[: len(last) - trailing]
    return " ", last


def _relocate(
    buffer: TextBuffer, unit_start: Position, unit_end: Position, target: Position
) -> EditResult:
    start = buffer.pos_to_offset(unit_start)
    end = buffer.pos_to_offset(unit_end)
    target_offset = buffer.pos_to_offset(target)
    text = buffer.get_range(unit_start, unit_end)

    insert_offset = target_offset
    if target_offset > start:
        insert_offset -= end - start
    return EditResult(
        changes=(TextEdit(start, end), TextEdit.insert(target_offset, text)),
        offsets=(insert_offset, insert_offset + len(text)),
    )


def _forward_walk(
    buffer: TextBuffer, pos: Position
) -> Tuple[Optional[Position], bool]:
    """Skip whitespace after ``pos``.

    Returns ``(position, crossed_paragraph)``; ``position`` is ``None`` when
    the document ends first.
    """

    line, ch = pos
    while True:
        text = buffer.get_line(line)
        if ch < len(text):
            if not text[ch].isspace():
                return Position(line, ch), False
            ch += 1
            continue
        following = line + 1
        if following >= buffer.line_count():
            return None, False
        if is_blank(buffer.get_line(following)):
            while following < buffer.line_count() and is_blank(buffer.get_line(following)):
                following += 1
            if following >= buffer.line_count():
                return None, True
            return Position(following, 0), True
        line, ch = following, 0


def move_sentence_down(buffer: TextBuffer, selection: Selection) -> EditResult:
    unit_start, unit_end = _unit_bounds(buffer, selection)
    if unit_start == unit_end:
        return EditResult.unchanged(selection)

    resume, crossed = _forward_walk(buffer, unit_end)
    if resume is None:
        record_event("sentence.move.noop", level="debug", data={"direction": "down"})
        return EditResult.unchanged(selection)

    if crossed:
        record_event(
            "sentence.move.paragraph",
            level="debug",
            data={"direction": "down", "line": resume.line},
        )
        return _relocate(buffer, unit_start, unit_end, resume)

    partner_start, partner_end = sentence_at(buffer, resume)
    unit = buffer.get_range(unit_start, unit_end)
    partner = buffer.get_range(partner_start, partner_end)
    between = buffer.get_range(unit_end, partner_start)
    separator, unit = _separator(partner, unit, between)

    start = buffer.pos_to_offset(unit_start)
    end = buffer.pos_to_offset(partner_end)
    new_start = start + len(partner) + len(separator)
    record_event("sentence.move.swap", level="debug", data={"direction": "down"})
    return EditResult(
        changes=(TextEdit(start, end, partner + separator + unit),),
        offsets=(new_start, new_start + len(unit)),
    )


def move_sentence_up(buffer: TextBuffer, selection: Selection) -> EditResult:
    unit_start, unit_end = _unit_bounds(buffer, selection)
    if unit_start == unit_end:
        return EditResult.unchanged(selection)

    line, ch = unit_start
    if ch > 0:
        ch -= 1
    elif line > 0:
        line -= 1
        ch = len(buffer.get_line(line))
    else:
        return EditResult.unchanged(selection)

    while ch > 0 or line > 0:
        if ch > 0:
            if not buffer.get_line(line)[ch - 1].isspace():
                break
            ch -= 1
            continue
        if is_blank(buffer.get_line(line)):
            first_blank = line
            while first_blank > 0 and is_blank(buffer.get_line(first_blank - 1)):
                first_blank -= 1
            if first_blank == 0:
                record_event("sentence.move.noop", level="debug", data={"direction": "up"})
                return EditResult.unchanged(selection)
            previous = first_blank - 1
            record_event(
                "sentence.move.paragraph",
                level="debug",
                data={"direction": "up", "line": previous},
            )
            target = Position(previous, len(buffer.get_line(previous)))
            return _relocate(buffer, unit_start, unit_end, target)
        line -= 1
        ch = len(buffer.get_line(line))

    search = Position(line, ch)
    if ch > 0:
        search = skip_closing_delimiters_backward(buffer, search)
        if follows_terminator(buffer, search):
            search = search.with_ch(search.ch - 1)
        if search.ch > 0:
            search = search.with_ch(search.ch - 1)

    partner_start, partner_end = sentence_at(buffer, search)
    if partner_start == partner_end or partner_end > unit_start:
        record_event("sentence.move.noop", level="debug", data={"direction": "up"})
        return EditResult.unchanged(selection)

    unit = buffer.get_range(unit_start, unit_end)
    partner = buffer.get_range(partner_start, partner_end)
    between = buffer.get_range(partner_end, unit_start)
    separator, partner = _separator(unit, partner, between)

    start = buffer.pos_to_offset(partner_start)
    end = buffer.pos_to_offset(unit_end)
    record_event("sentence.move.swap", level="debug", data={"direction": "up"})
    return EditResult(
        changes=(TextEdit(start, end, unit + separator + partner),),
        offsets=(start, start + len(unit)),
    )


__all__ = ["move_sentence_down", "move_sentence_up"]
