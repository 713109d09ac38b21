"""Sentence-aware editing shortcuts over a pluggable text buffer."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "commands",
    "runtime",
    "settings",
]

__version__ = "0.1.0"
