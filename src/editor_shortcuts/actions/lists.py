"""Markdown list markers: recognition, continuation and renumbering."""

from __future__ import annotations

import re
from typing import List, Literal, Optional

from editor_shortcuts.buffer import Position, TextBuffer

from .result import TextEdit

ListDirection = Literal["before", "after"]

LIST_PREFIX = re.compile(r"^\s*(-|\+|\*|\d+\.|>) (\[.\] )?")
_NUMBER = re.compile(r"\d+")
EMPTY_TASK = "- [ ] "


def list_prefix_of(text: str) -> str:
    """Return the full marker of ``text`` (indentation included), or ``""``."""

    match = LIST_PREFIX.match(text)
    return match.group(0) if match else ""


def is_numbered(prefix: Optional[str]) -> bool:
    return bool(prefix) and prefix[0].isdigit()


def next_list_prefix(text: str, direction: ListDirection) -> Optional[str]:
    """Marker for a new item placed ``direction`` of the item in ``text``.

    Returns ``None`` when ``text`` is a marker with nothing after it, and an
    empty string when ``text`` is not a list item at all.
    """

    marker = list_prefix_of(text)
    if not marker:
        return ""
    prefix = marker.lstrip()
    if prefix == text.lstrip():
        return None
    if is_numbered(prefix) and direction == "after":
        number = int(_NUMBER.match(prefix).group(0))
        prefix = f"{number + 1}. "
    elif prefix.startswith("- [") and "[ ]" not in prefix:
        prefix = EMPTY_TASK
    return prefix


def renumber_list_prefixes(
    buffer: TextBuffer, from_line: int, indentation: str
) -> List[TextEdit]:
    """Bump every numbered item at ``indentation`` from ``from_line`` onward.

    Nested items (deeper indentation) are stepped over; anything else ends
    the list.
    """

    edits: List[TextEdit] = []
    for line in range(from_line, buffer.line_count()):
        text = buffer.get_line(line)
        if not text.startswith(indentation):
            break
        rest = text[len(indentation) :]
        if rest[:1] in (" ", "\t"):
            continue
        number = _NUMBER.match(rest)
        if number is None or rest[number.end() : number.end() + 1] != ".":
            break
        start = buffer.pos_to_offset(Position(line, len(indentation)))
        edits.append(TextEdit(start, start + number.end(), str(int(number.group(0)) + 1)))
    return edits


__all__ = [
    "EMPTY_TASK",
    "LIST_PREFIX",
    "ListDirection",
    "is_numbered",
    "list_prefix_of",
    "next_list_prefix",
    "renumber_list_prefixes",
]
