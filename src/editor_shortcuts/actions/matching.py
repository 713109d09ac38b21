"""Word ranges, character searches and occurrence matching."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, NamedTuple, Optional, Pattern, Sequence

from editor_shortcuts.buffer import Position, Selection, TextBuffer

from .positions import selection_boundaries

CharacterCheck = Callable[[str], bool]


class SearchDirection(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


class CharacterMatch(NamedTuple):
    char: str
    pos: Position


@dataclass(frozen=True, slots=True)
class SearchText:
    text: str
    # True when every selection covers the same text.
    single: bool


def is_word_character(char: str) -> bool:
    return char.isalnum()


def word_range_at_pos(pos: Position, line_text: str) -> Selection:
    """Selection spanning the run of word characters around ``pos``."""

    start = end = pos.ch
    while start > 0 and is_word_character(line_text[start - 1]):
        start -= 1
    while end < len(line_text) and is_word_character(line_text[end]):
        end += 1
    return Selection(pos.with_ch(start), pos.with_ch(end))


def find_pos_of_next_character(
    buffer: TextBuffer,
    start: Position,
    check: CharacterCheck,
    direction: SearchDirection,
) -> Optional[CharacterMatch]:
    """Scan from ``start`` for the first character accepted by ``check``.

    Backward searches look at the characters before ``start`` and report the
    position just after the match; forward searches begin at ``start`` and
    report the position of the match itself. Either way the result is the
    inner edge of the matched character.
    """

    line, ch = start
    if direction is SearchDirection.BACKWARD:
        while line >= 0:
            text = buffer.get_line(line)
            ch = min(ch, len(text))
            while ch > 0:
                if check(text[ch - 1]):
                    return CharacterMatch(text[ch - 1], Position(line, ch))
                ch -= 1
            line -= 1
            if line >= 0:
                ch = len(buffer.get_line(line))
        return None

    while line < buffer.line_count():
        text = buffer.get_line(line)
        while ch < len(text):
            if check(text[ch]):
                return CharacterMatch(text[ch], Position(line, ch))
            ch += 1
        line += 1
        ch = 0
    return None


def search_regex(text: str, within_words: bool) -> Pattern[str]:
    escaped = re.escape(text)
    if within_words:
        return re.compile(escaped)
    return re.compile(rf"\b{escaped}\b")


def get_search_text(
    buffer: TextBuffer, selections: Sequence[Selection], *, auto_expand: bool
) -> SearchText:
    """Text of the first selection, optionally widened to the word at a cursor."""

    start, end, _ = selection_boundaries(selections[0])
    text = buffer.get_range(start, end)
    if not text and auto_expand:
        word = word_range_at_pos(start, buffer.get_line(start.line))
        text = buffer.get_range(word.anchor, word.head)
    contents = {
        buffer.get_range(*selection_boundaries(selection)[:2]) for selection in selections
    }
    return SearchText(text=text, single=len(contents) == 1)


def _match_selection(buffer: TextBuffer, match: "re.Match[str]") -> Selection:
    return Selection(buffer.offset_to_pos(match.start()), buffer.offset_to_pos(match.end()))


def find_all_match_positions(
    buffer: TextBuffer, text: str, *, within_words: bool
) -> List[Selection]:
    if not text:
        return []
    pattern = search_regex(text, within_words)
    return [_match_selection(buffer, match) for match in pattern.finditer(buffer.get_value())]


def find_next_match_position(
    buffer: TextBuffer,
    after: Position,
    text: str,
    *,
    within_words: bool,
    selections: Sequence[Selection] = (),
) -> Optional[Selection]:
    """First match starting after ``after``, wrapping to the first unselected one."""

    if not text:
        return None
    after_offset = buffer.pos_to_offset(after)
    selected = {
        (buffer.pos_to_offset(start), buffer.pos_to_offset(end))
        for start, end, _ in map(selection_boundaries, selections)
    }
    wrapped: Optional[Selection] = None
    for match in search_regex(text, within_words).finditer(buffer.get_value()):
        if match.start() > after_offset:
            return _match_selection(buffer, match)
        if wrapped is None and match.span() not in selected:
            wrapped = _match_selection(buffer, match)
    return wrapped


__all__ = [
    "CharacterCheck",
    "CharacterMatch",
    "SearchDirection",
    "SearchText",
    "find_all_match_positions",
    "find_next_match_position",
    "find_pos_of_next_character",
    "get_search_text",
    "is_word_character",
    "search_regex",
    "word_range_at_pos",
]
