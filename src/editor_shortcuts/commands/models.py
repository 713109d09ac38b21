"""Dataclasses describing commands and the hotkeys bound to them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

MODIFIER_ORDER = ("ctrl", "alt", "shift", "meta")


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = {m.strip().lower() for m in modifiers if m.strip()}
    unknown = values.difference(MODIFIER_ORDER)
    if unknown:
        raise ValueError(f"Unknown modifiers: {', '.join(sorted(unknown))}")
    return tuple(m for m in MODIFIER_ORDER if m in values)


@dataclass(frozen=True, slots=True)
class Hotkey:
    """Key plus modifiers, written as a token such as ``ctrl+shift+k``."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "key", self.key.strip().lower())
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @classmethod
    def parse(cls, token: str) -> "Hotkey":
        parts = [part for part in token.strip().split("+") if part]
        if not parts:
            raise ValueError("hotkey token cannot be empty")
        return cls(parts[-1], tuple(parts[:-1]))

    @property
    def token(self) -> str:
        return "+".join((*self.modifiers, self.key))


class CommandKind(str, Enum):
    """How the dispatcher feeds selections to a command's handler.

    ``editor`` handlers take ``(buffer, context)`` and return every selection.
    ``batch`` handlers run once per selection against the same buffer and
    their edits are applied together. ``selection`` handlers run once per
    selection, each against the buffer left by the previous one.
    """

    EDITOR = "editor"
    BATCH = "batch"
    SELECTION = "selection"


@dataclass(frozen=True, slots=True)
class Command:
    id: str
    name: str
    handler: Callable[..., object]
    kind: CommandKind = CommandKind.SELECTION
    hotkeys: tuple[Hotkey, ...] = ()
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Command id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "kind", CommandKind(self.kind))
        normalized = tuple(
            hotkey if isinstance(hotkey, Hotkey) else Hotkey.parse(str(hotkey))
            for hotkey in self.hotkeys
        )
        object.__setattr__(self, "hotkeys", tuple(dict.fromkeys(normalized)))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(hotkey.token for hotkey in self.hotkeys)


__all__ = ["Command", "CommandKind", "Hotkey", "MODIFIER_ORDER"]
