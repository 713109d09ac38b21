"""Buffer abstractions: positions, selections, and the host buffer contract."""

from .buffer import Buffer, BufferDelta, BufferView, Transaction
from .document import BufferDocument
from .state import BufferState, Position, Selection, SelectionBoundaries
from .sync import BufferValidationError, TextBuffer
from .validation import clip_offset, clip_position

__all__ = [
    "Buffer",
    "BufferDelta",
    "BufferDocument",
    "BufferState",
    "BufferValidationError",
    "BufferView",
    "Position",
    "Selection",
    "SelectionBoundaries",
    "TextBuffer",
    "Transaction",
    "clip_offset",
    "clip_position",
]
