"""Command registry responsible for storing commands and their hotkeys."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterable, Iterator, Optional

from editor_shortcuts.runtime.telemetry import span

from .models import Command, Hotkey


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    command_count: int
    hotkey_count: int
    kinds: tuple[str, ...]


class CommandConflictError(RuntimeError):
    """Raised when a command claims a hotkey another command already owns."""

    def __init__(self, command: Command, conflicts: Iterable[Command]):
        conflicts_tuple = tuple(conflicts)
        message = (
            f"Command '{command.id}' hotkeys conflict with {[c.id for c in conflicts_tuple]}"
        )
        super().__init__(message)
        self.command = command
        self.conflicts = conflicts_tuple


class CommandRegistry:
    """Owns commands and the hotkey index used to look them up."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._commands: Dict[str, Command] = {}
        self._hotkeys: Dict[str, str] = {}
        self._logger_name = logger_name
        self._revision = 0

    def __contains__(self, command_id: object) -> bool:
        return command_id in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def revision(self) -> int:
        return self._revision

    def get(self, command_id: str) -> Command:
        try:
            return self._commands[command_id]
        except KeyError as exc:
            raise KeyError(f"Command '{command_id}' is not registered") from exc

    def find_by_hotkey(self, token: str | Hotkey) -> Optional[Command]:
        hotkey = token if isinstance(token, Hotkey) else Hotkey.parse(token)
        command_id = self._hotkeys.get(hotkey.token)
        return self._commands[command_id] if command_id else None

    def register(self, command: Command, *, replace: bool = False) -> Command:
        with span(
            "commands::register",
            logger_name=self._logger_name,
            component="commands",
            metadata={"command_id": command.id},
        ) as handle:
            if not replace and command.id in self._commands:
                raise ValueError(f"Command '{command.id}' already registered")

            conflicts = self.detect_conflicts(command)
            if conflicts and not replace:
                handle.add_metadata(
                    "conflicts", ",".join(conflict.id for conflict in conflicts)
                )
                raise CommandConflictError(command, conflicts)

            existing = self._commands.get(command.id)
            if existing:
                self._unindex(existing)
            # Replacing hands contested hotkeys over to the new command.
            for conflict in conflicts:
                self._release(conflict, command.hotkeys)

            self._commands[command.id] = command
            self._index(command)
            self._touch()
            return command

    def unregister(self, command_id: str) -> Optional[Command]:
        with span(
            "commands::unregister",
            logger_name=self._logger_name,
            component="commands",
            metadata={"command_id": command_id},
        ):
            command = self._commands.pop(command_id, None)
            if not command:
                return None
            self._unindex(command)
            self._touch()
            return command

    def rebind(self, command_id: str, *hotkeys: str | Hotkey) -> Command:
        with span(
            "commands::rebind",
            logger_name=self._logger_name,
            component="commands",
            metadata={"command_id": command_id},
        ) as handle:
            if command_id not in self._commands:
                handle.fail("missing_command")
                raise KeyError(f"Command '{command_id}' not found")

            current = self._commands[command_id]
            updated = replace(current, hotkeys=tuple(hotkeys))
            conflicts = self.detect_conflicts(updated)
            if conflicts:
                handle.add_metadata(
                    "conflicts", ",".join(conflict.id for conflict in conflicts)
                )
                raise CommandConflictError(updated, conflicts)

            self._unindex(current)
            self._commands[command_id] = updated
            self._index(updated)
            self._touch()
            return updated

    def iter_commands(self) -> Iterator[Command]:
        yield from self._commands.values()

    def bindings(self) -> Dict[str, str]:
        """Hotkey token to command id, for hosts that bind keys themselves."""

        return dict(self._hotkeys)

    def stats(self) -> RegistryStats:
        return RegistryStats(
            command_count=len(self._commands),
            hotkey_count=len(self._hotkeys),
            kinds=tuple(sorted({command.kind.value for command in self._commands.values()})),
        )

    def detect_conflicts(self, command: Command) -> list[Command]:
        conflicts: dict[str, Command] = {}
        for token in command.tokens:
            owner = self._hotkeys.get(token)
            if owner and owner != command.id:
                conflicts[owner] = self._commands[owner]
        return list(conflicts.values())

    def _index(self, command: Command) -> None:
        for token in command.tokens:
            self._hotkeys[token] = command.id

    def _unindex(self, command: Command) -> None:
        for token in command.tokens:
            if self._hotkeys.get(token) == command.id:
                del self._hotkeys[token]

    def _release(self, command: Command, hotkeys: Iterable[Hotkey]) -> None:
        taken = set(hotkeys)
        remaining = tuple(hotkey for hotkey in command.hotkeys if hotkey not in taken)
        self._unindex(command)
        self._commands[command.id] = replace(command, hotkeys=remaining)
        self._index(self._commands[command.id])

    def _touch(self) -> None:
        self._revision += 1


__all__ = [
    "CommandConflictError",
    "CommandRegistry",
    "RegistryStats",
]
