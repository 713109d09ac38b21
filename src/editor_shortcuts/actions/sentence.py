"""Sentence boundary scanning plus selection and shift operations.

A sentence runs from just after the previous terminator run, or the start of
the line, through the next terminator run, or the end of the line. A
terminator run is one of ``. ! ?`` followed by any closing delimiters
(quotes, brackets, markdown emphasis) and the spaces or tabs after them.

Both scanners stay on the line they start on. Operations that need to cross
lines or paragraphs do so explicitly.
"""

from __future__ import annotations

import re
from typing import Tuple

from editor_shortcuts.buffer import Position, Selection, SelectionBoundaries, TextBuffer

from .positions import first_non_whitespace, is_blank, line_end_pos, selection_boundaries
from .result import EditResult

TERMINATORS = frozenset(".!?")
CLOSING_DELIMITERS = frozenset("\"')]}*_`")
INLINE_SPACE = frozenset(" \t")

_SENTENCE_END = re.compile(r"[.!?](?:\s|\Z)")


def find_sentence_start(buffer: TextBuffer, pos: Position) -> Position:
    """Return where the sentence containing ``pos`` starts on its line."""

    line, ch = pos
    text = buffer.get_line(line)
    while ch > 0:
        if text[ch - 1].isspace():
            lookback = ch - 1
            while lookback > 0 and text[lookback - 1].isspace():
                lookback -= 1
            while lookback > 0 and text[lookback - 1] in CLOSING_DELIMITERS:
                lookback -= 1
            if lookback > 0 and text[lookback - 1] in TERMINATORS:
                while ch < len(text) and text[ch].isspace():
                    ch += 1
                return Position(line, ch)
        ch -= 1
    return Position(line, 0)


def find_sentence_end(buffer: TextBuffer, pos: Position) -> Position:
    """Return the end of the sentence at ``pos``, trailing spaces included."""

    line, ch = pos
    text = buffer.get_line(line)
    while ch < len(text):
        if text[ch] in TERMINATORS:
            ch += 1
            while ch < len(text) and text[ch] in CLOSING_DELIMITERS:
                ch += 1
            while ch < len(text) and text[ch] in INLINE_SPACE:
                ch += 1
            return Position(line, ch)
        ch += 1
    return Position(line, len(text))


def sentence_at(buffer: TextBuffer, pos: Position) -> Tuple[Position, Position]:
    return find_sentence_start(buffer, pos), find_sentence_end(buffer, pos)


def snap_to_sentences(
    buffer: TextBuffer, boundaries: SelectionBoundaries
) -> Tuple[Position, Position]:
    """Widen a range outward to whole sentences.

    The end is kept as-is when it already sits between two sentences, so a
    selection that ends after a sentence's trailing space does not swallow the
    next one.
    """

    start = find_sentence_start(buffer, boundaries.start)
    end_sentence_start = find_sentence_start(buffer, boundaries.end)
    if end_sentence_start >= boundaries.end:
        return start, boundaries.end
    return start, find_sentence_end(buffer, end_sentence_start)


def skip_closing_delimiters_backward(buffer: TextBuffer, pos: Position) -> Position:
    line, ch = pos
    text = buffer.get_line(line)
    while ch > 0 and text[ch - 1] in CLOSING_DELIMITERS:
        ch -= 1
    return Position(line, ch)


def follows_terminator(buffer: TextBuffer, pos: Position) -> bool:
    return pos.ch > 0 and buffer.get_line(pos.line)[pos.ch - 1] in TERMINATORS


def _through_line_break(buffer: TextBuffer, line: int) -> Position:
    """Start of the line after ``line``, or its end on the last line."""

    if line + 1 < buffer.line_count():
        return Position(line + 1, 0)
    return line_end_pos(line, buffer)


def select_sentence(buffer: TextBuffer, selection: Selection) -> EditResult:
    if not selection.is_empty:
        start, end = snap_to_sentences(buffer, selection_boundaries(selection))
        return EditResult.select(start, end)

    pos = selection.head
    text = buffer.get_line(pos.line)
    if is_blank(text):
        return EditResult.select(Position(pos.line, 0), _through_line_break(buffer, pos.line))

    search = pos
    if is_blank(text[: pos.ch]):
        search = pos.with_ch(first_non_whitespace(text))
    start, end = sentence_at(buffer, search)
    return EditResult.select(start, end)


def expand_sentence_selection(buffer: TextBuffer, selection: Selection) -> EditResult:
    """Grow a selection by one sentence, crossing into the next line if needed."""

    if selection.is_empty:
        return select_sentence(buffer, selection)

    start, end, _ = selection_boundaries(selection)
    rest_of_line = buffer.get_line(end.line)[end.ch :]
    if not is_blank(rest_of_line):
        next_end = find_sentence_end(buffer, end)
        if next_end.ch > end.ch:
            return EditResult.select(start, next_end)

    next_line = end.line + 1
    if next_line >= buffer.line_count():
        return EditResult.unchanged(selection)
    text = buffer.get_line(next_line)
    if is_blank(text):
        return EditResult.select(start, _through_line_break(buffer, next_line))
    column = first_non_whitespace(text)
    return EditResult.select(start, find_sentence_end(buffer, Position(next_line, column)))


def reduce_sentence_selection(buffer: TextBuffer, selection: Selection) -> EditResult:
    """Drop the last sentence from a multi-sentence selection."""

    if selection.is_empty:
        return EditResult.unchanged(selection)

    start, end, _ = selection_boundaries(selection)
    if end.ch == 0 and end.line > start.line:
        previous = end.line - 1
        return EditResult.select(start, Position(previous, len(buffer.get_line(previous))))

    selected = buffer.get_range(start, end)
    matches = list(_SENTENCE_END.finditer(selected))
    if len(matches) >= 2:
        new_head = buffer.offset_to_pos(buffer.pos_to_offset(start) + matches[-2].end())
        return EditResult.select(start, new_head)

    anchor, head = sentence_at(buffer, start)
    return EditResult.select(anchor, head)


def select_to_start_of_sentence(buffer: TextBuffer, selection: Selection) -> EditResult:
    pos = selection.head
    return EditResult.select(pos, find_sentence_start(buffer, pos))


def select_to_end_of_sentence(buffer: TextBuffer, selection: Selection) -> EditResult:
    pos = selection.head
    return EditResult.select(pos, find_sentence_end(buffer, pos))


def shift_selection_to_next_sentence(buffer: TextBuffer, selection: Selection) -> EditResult:
    _, search, _ = selection_boundaries(selection)
    text = buffer.get_line(search.line)
    ch = search.ch
    while ch < len(text) and text[ch].isspace():
        ch += 1
    search = search.with_ch(ch)

    if ch >= len(text):
        line = search.line + 1
        while True:
            if line >= buffer.line_count():
                return EditResult.unchanged(selection)
            text = buffer.get_line(line)
            if not is_blank(text):
                break
            line += 1
        search = Position(line, first_non_whitespace(text))

    start, end = sentence_at(buffer, search)
    return EditResult.select(start, end)


def shift_selection_to_previous_sentence(
    buffer: TextBuffer, selection: Selection
) -> EditResult:
    start, _, _ = selection_boundaries(selection)
    if start.ch > 0:
        search = start.with_ch(start.ch - 1)
    elif start.line > 0:
        search = Position(start.line - 1, len(buffer.get_line(start.line - 1)))
    else:
        return EditResult.unchanged(selection)

    search = skip_closing_delimiters_backward(
        buffer, skip_whitespace_backward(buffer, search)
    )
    if follows_terminator(buffer, search) and search.ch > 1:
        # Land inside the previous sentence, not on its closing boundary.
        search = search.with_ch(search.ch - 2)

    anchor, head = sentence_at(buffer, search)
    return EditResult.select(anchor, head)


def skip_whitespace_backward(buffer: TextBuffer, pos: Position) -> Position:
    """Walk back over whitespace and line breaks, stopping at document start."""

    line, ch = pos
    while ch > 0 or line > 0:
        if ch > 0:
            if not buffer.get_line(line)[ch - 1].isspace():
                break
            ch -= 1
        else:
            line -= 1
            ch = len(buffer.get_line(line))
    return Position(line, ch)


__all__ = [
    "CLOSING_DELIMITERS",
    "TERMINATORS",
    "expand_sentence_selection",
    "find_sentence_end",
    "follows_terminator",
    "find_sentence_start",
    "reduce_sentence_selection",
    "select_sentence",
    "select_to_end_of_sentence",
    "select_to_start_of_sentence",
    "sentence_at",
    "shift_selection_to_next_sentence",
    "shift_selection_to_previous_sentence",
    "skip_closing_delimiters_backward",
    "skip_whitespace_backward",
    "snap_to_sentences",
]
