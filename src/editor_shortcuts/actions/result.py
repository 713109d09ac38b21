"""Edit plans returned by every operation and the code that applies them.

Operations never mutate a buffer. They read what they need, then return an
``EditResult`` whose edits are expressed as offsets into the buffer *as it was
read*. ``apply_result`` performs the edits and only afterwards maps the
resulting selection back to line/column positions on the mutated buffer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from editor_shortcuts.buffer import Position, Selection, TextBuffer
from editor_shortcuts.settings import Settings


@dataclass(frozen=True, slots=True)
class TextEdit:
    """Replace ``[start, end)`` (pre-edit offsets) with ``text``."""

    start: int
    end: int
    text: str = ""

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid edit range [{self.start}, {self.end})")

    @classmethod
    def insert(cls, offset: int, text: str) -> "TextEdit":
        return cls(offset, offset, text)

    @property
    def delta(self) -> int:
        return len(self.text) - (self.end - self.start)


@dataclass(frozen=True, slots=True)
class EditResult:
    """Edits to apply plus the selection to show afterwards.

    ``selection`` is given in post-edit line/column coordinates; ``offsets``
    is an ``(anchor, head)`` pair of post-edit offsets for operations whose
    result can only be located after the buffer changes. When both are unset
    the caller keeps its current selection.
    """

    changes: Tuple[TextEdit, ...] = ()
    selection: Optional[Selection] = None
    offsets: Optional[Tuple[int, int]] = None

    @classmethod
    def unchanged(cls, selection: Selection) -> "EditResult":
        return cls(selection=selection)

    @classmethod
    def select(cls, anchor: Position, head: Optional[Position] = None) -> "EditResult":
        return cls(selection=Selection.of(anchor, head))

    @property
    def mutates(self) -> bool:
        return bool(self.changes)

    def resolve_selection(self, buffer: TextBuffer) -> Optional[Selection]:
        if self.offsets is not None:
            anchor, head = self.offsets
            return Selection(buffer.offset_to_pos(anchor), buffer.offset_to_pos(head))
        return self.selection


@dataclass(slots=True)
class BatchContext:
    """State threaded by the host through one command invocation.

    ``iteration`` is the index of the selection being processed;
    ``lines_deleted`` accumulates across ``delete_line`` calls of one batch.
    ``manual_selection`` and ``programmatic_change`` drive occurrence search.
    """

    settings: Settings = field(default_factory=Settings)
    iteration: int = 0
    lines_deleted: int = 0
    manual_selection: bool = True
    programmatic_change: bool = False


def ordered_changes(changes: Iterable[TextEdit]) -> List[TextEdit]:
    """Sort edits for back-to-front application and reject overlaps."""

    ordered = sorted(dict.fromkeys(changes), key=lambda edit: (edit.start, edit.end))
    for previous, current in zip(ordered, ordered[1:]):
        if current.start < previous.end:
            raise ValueError(f"Overlapping edits: {previous} and {current}")
    ordered.reverse()
    return ordered


def apply_changes(buffer: TextBuffer, changes: Sequence[TextEdit]) -> List[TextEdit]:
    """Apply simultaneous edits, last offset first, so earlier offsets stay valid."""

    ordered = ordered_changes(changes)
    for edit in ordered:
        start = buffer.offset_to_pos(edit.start)
        end = buffer.offset_to_pos(edit.end)
        buffer.replace_range(edit.text, start, end)
    return ordered


def map_offset(offset: int, edits: Sequence[TextEdit]) -> int:
    """Map a pre-edit offset through edits given in back-to-front order."""

    for edit in edits:
        if offset >= edit.end:
            offset += edit.delta
        elif offset > edit.start:
            offset = edit.start + min(offset - edit.start, len(edit.text))
    return offset


def apply_result(buffer: TextBuffer, result: EditResult) -> Optional[Selection]:
    """Perform ``result``'s edits and return the selection it asks for."""

    if result.changes:
        apply_changes(buffer, result.changes)
    return result.resolve_selection(buffer)


__all__ = [
    "BatchContext",
    "EditResult",
    "TextEdit",
    "apply_changes",
    "apply_result",
    "map_offset",
    "ordered_changes",
]
