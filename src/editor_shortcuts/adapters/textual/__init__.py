"""Textual host for the editing commands."""

from .host import TextAreaBuffer

__all__ = ["TextAreaBuffer"]
