"""User-facing options consumed by the editing operations."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Mapping, Optional

ENV_PREFIX = "EDITOR_SHORTCUTS_"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


class CodeEditor(str, Enum):
    """Editor whose multi-cursor anchor convention is emulated."""

    VSCODE = "vscode"
    SUBLIME = "sublime"


def _parse_bool(name: str, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    value = str(raw).strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"Setting '{name}' expects a boolean, got {raw!r}")


def _parse_editor(raw: Any) -> CodeEditor:
    try:
        return CodeEditor(str(raw).strip().lower())
    except ValueError:
        choices = ", ".join(editor.value for editor in CodeEditor)
        raise ValueError(f"Setting 'emulate' expects one of {choices}, got {raw!r}") from None


@dataclass(frozen=True, slots=True)
class Settings:
    auto_insert_list_prefix: bool = True
    emulate: CodeEditor = CodeEditor.VSCODE

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Settings":
        known = {item.name for item in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(unknown)}")
        values: dict[str, Any] = {}
        if "auto_insert_list_prefix" in data:
            values["auto_insert_list_prefix"] = _parse_bool(
                "auto_insert_list_prefix", data["auto_insert_list_prefix"]
            )
        if "emulate" in data:
            values["emulate"] = _parse_editor(data["emulate"])
        return cls(**values)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        data: dict[str, str] = {}
        for item in fields(cls):
            raw = env.get(f"{ENV_PREFIX}{item.name.upper()}")
            if raw is not None:
                data[item.name] = raw
        return cls.from_mapping(data)

    def replace(self, **changes: Any) -> "Settings":
        return replace(self, **changes)


__all__ = ["CodeEditor", "Settings"]
