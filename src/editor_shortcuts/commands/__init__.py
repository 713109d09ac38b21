"""Command registry, built-in command table and dispatcher."""

from .defaults import DEFAULT_COMMANDS, load_default_commands
from .dispatch import CommandDispatcher
from .models import Command, CommandKind, Hotkey
from .registry import CommandConflictError, CommandRegistry, RegistryStats

__all__ = [
    "Command",
    "CommandConflictError",
    "CommandDispatcher",
    "CommandKind",
    "CommandRegistry",
    "DEFAULT_COMMANDS",
    "Hotkey",
    "RegistryStats",
    "load_default_commands",
]
