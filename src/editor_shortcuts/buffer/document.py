"""Core document data structures for editor_shortcuts buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from .state import Position

NEWLINE = "\n"


@dataclass(slots=True)
class BufferDocument:
    """List-of-lines text storage with offset arithmetic.

    Lines never contain the newline character; offsets count each line break
    as a single character.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0

    @classmethod
    def from_text(cls, text: str) -> "BufferDocument":
        return cls(_lines=text.split(NEWLINE), version=0)

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    @property
    def text(self) -> str:
        return NEWLINE.join(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def length(self) -> int:
        return sum(len(line) for line in self._lines) + len(self._lines) - 1

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def offset_of(self, pos: Position) -> int:
        line, ch = pos
        offset = 0
        for index in range(line):
            offset += len(self._lines[index]) + 1
        return offset + ch

    def position_at(self, offset: int) -> Position:
        running = 0
        for line, content in enumerate(self._lines):
            if offset <= running + len(content):
                return Position(line, offset - running)
            running += len(content) + 1
        last = len(self._lines) - 1
        return Position(last, len(self._lines[last]))

    def splice(self, start: int, end: int, text: str) -> "BufferDocument":
        """Return a document with ``[start:end)`` replaced by ``text``."""

        current = self.text
        updated = current[:start] + text + current[end:]
        return BufferDocument(_lines=updated.split(NEWLINE), version=self.version + 1)

    def replace_lines(self, lines: Iterable[str]) -> "BufferDocument":
        updated = list(lines) or [""]
        return BufferDocument(_lines=updated, version=self.version + 1)
