"""Case transforms and selection expansion to enclosing brackets or quotes."""

from __future__ import annotations

import re
from enum import Enum
from typing import List, Mapping

from editor_shortcuts.buffer import Selection, TextBuffer

from .matching import CharacterCheck, SearchDirection, find_pos_of_next_character, word_range_at_pos
from .positions import selection_boundaries
from .result import EditResult, TextEdit


class Case(str, Enum):
    UPPER = "upper"
    LOWER = "lower"
    TITLE = "title"
    NEXT = "next"


LOWER_CASE_WORDS = frozenset({"a", "an", "the"})

MATCHING_BRACKETS: Mapping[str, str] = {"[": "]", "(": ")", "{": "}"}
MATCHING_QUOTES: Mapping[str, str] = {"'": "'", '"': '"', "`": "`"}
MATCHING_QUOTES_BRACKETS: Mapping[str, str] = {**MATCHING_QUOTES, **MATCHING_BRACKETS}

_WHITESPACE_RUN = re.compile(r"(\s+)")


def to_title_case(text: str) -> str:
    # Splitting on a captured group keeps the separators.
    parts = _WHITESPACE_RUN.split(text)
    titled = []
    for index, word in enumerate(parts):
        if 0 < index < len(parts) - 1 and word.lower() in LOWER_CASE_WORDS:
            titled.append(word.lower())
        else:
            titled.append(word[:1].upper() + word[1:].lower())
    return "".join(titled)


def next_case(text: str) -> str:
    """Cycle lower -> title -> upper -> lower; mixed case goes to upper."""

    upper = text.upper()
    lower = text.lower()
    if text == upper:
        return lower
    if text == lower:
        return to_title_case(text)
    return upper


def apply_case(text: str, case: Case) -> str:
    if case is Case.UPPER:
        return text.upper()
    if case is Case.LOWER:
        return text.lower()
    if case is Case.TITLE:
        return to_title_case(text)
    return next_case(text)


def transform_case(buffer: TextBuffer, selection: Selection, case: Case) -> EditResult:
    start, end, _ = selection_boundaries(selection)
    if start == end:
        word = word_range_at_pos(selection.head, buffer.get_line(selection.head.line))
        start, end = word.anchor, word.head
    text = buffer.get_range(start, end)
    replacement = apply_case(text, Case(case))
    if replacement == text:
        return EditResult.unchanged(selection)
    edit = TextEdit(buffer.pos_to_offset(start), buffer.pos_to_offset(end), replacement)
    return EditResult(changes=(edit,), selection=selection)


def _expand_selection(
    buffer: TextBuffer,
    selection: Selection,
    is_opening: CharacterCheck,
    closers: Mapping[str, str],
) -> EditResult:
    start, end, _ = selection_boundaries(selection)
    opening = find_pos_of_next_character(buffer, start, is_opening, SearchDirection.BACKWARD)
    if opening is None:
        return EditResult.unchanged(selection)
    closer = closers[opening.char]
    closing = find_pos_of_next_character(
        buffer, end, lambda char: char == closer, SearchDirection.FORWARD
    )
    if closing is None:
        return EditResult.unchanged(selection)
    return EditResult.select(opening.pos, closing.pos)


def expand_selection_to_brackets(buffer: TextBuffer, selection: Selection) -> EditResult:
    return _expand_selection(buffer, selection, MATCHING_BRACKETS.__contains__, MATCHING_BRACKETS)


def expand_selection_to_quotes(buffer: TextBuffer, selection: Selection) -> EditResult:
    return _expand_selection(buffer, selection, MATCHING_QUOTES.__contains__, MATCHING_QUOTES)


def expand_selection_to_quotes_or_brackets(buffer: TextBuffer) -> List[Selection]:
    """Add the expansion of the first selection to the current selections."""

    selections = buffer.list_selections()
    expanded = _expand_selection(
        buffer,
        selections[0],
        MATCHING_QUOTES_BRACKETS.__contains__,
        MATCHING_QUOTES_BRACKETS,
    ).selection
    return selections + [expanded]


__all__ = [
    "Case",
    "LOWER_CASE_WORDS",
    "MATCHING_BRACKETS",
    "MATCHING_QUOTES",
    "MATCHING_QUOTES_BRACKETS",
    "apply_case",
    "expand_selection_to_brackets",
    "expand_selection_to_quotes",
    "expand_selection_to_quotes_or_brackets",
    "next_case",
    "to_title_case",
    "transform_case",
]
