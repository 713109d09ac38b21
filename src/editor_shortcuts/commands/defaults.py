"""Built-in commands and their default hotkeys."""

from __future__ import annotations

from typing import Callable, Iterable, Sequence

from editor_shortcuts import actions
from editor_shortcuts.actions import BatchContext, Case, EditResult
from editor_shortcuts.buffer import Selection, TextBuffer

from .models import Command, CommandKind
from .registry import CommandRegistry

SelectionHandler = Callable[[TextBuffer, Selection, BatchContext], EditResult]
EditorHandler = Callable[[TextBuffer, BatchContext], list]


def per_selection(operation: Callable[..., EditResult], *args: object) -> SelectionHandler:
    """Adapt ``operation(buffer, selection, *args)`` to the handler signature."""

    def handler(buffer: TextBuffer, selection: Selection, context: BatchContext) -> EditResult:
        return operation(buffer, selection, *args)

    handler.__name__ = getattr(operation, "__name__", "handler")
    return handler


def whole_buffer(operation: Callable[..., list], *args: object) -> EditorHandler:
    def handler(buffer: TextBuffer, context: BatchContext) -> list:
        return operation(buffer, *args)

    handler.__name__ = getattr(operation, "__name__", "handler")
    return handler


def _add_cursors(buffer: TextBuffer, context: BatchContext) -> list:
    return actions.add_cursors_to_selection_ends(buffer, context.settings.emulate)


def _command(
    command_id: str,
    name: str,
    handler: Callable[..., object],
    kind: CommandKind = CommandKind.SELECTION,
    *hotkeys: str,
) -> Command:
    return Command(id=command_id, name=name, handler=handler, kind=kind, hotkeys=hotkeys)


SELECTION = CommandKind.SELECTION
BATCH = CommandKind.BATCH
EDITOR = CommandKind.EDITOR

DEFAULT_COMMANDS: tuple[Command, ...] = (
    _command("insert-line-above", "Insert line above", actions.insert_line_above, BATCH, "ctrl+shift+enter"),
    _command("insert-line-below", "Insert line below", actions.insert_line_below, BATCH, "ctrl+enter"),
    _command("delete-line", "Delete line", actions.delete_line, BATCH, "ctrl+shift+k"),
    _command("delete-to-start-of-line", "Delete to start of line", per_selection(actions.delete_to_start_of_line)),
    _command("delete-to-end-of-line", "Delete to end of line", per_selection(actions.delete_to_end_of_line)),
    _command("delete-to-start-of-sentence", "Delete to start of sentence", per_selection(actions.delete_to_start_of_sentence)),
    _command("delete-to-end-of-sentence", "Delete to end of sentence", per_selection(actions.delete_to_end_of_sentence)),
    _command("join-lines", "Join lines", per_selection(actions.join_lines), SELECTION, "ctrl+j"),
    _command("duplicate-line-up", "Copy line up", per_selection(actions.copy_line, "up"), SELECTION, "alt+shift+up"),
    _command("duplicate-line-down", "Copy line down", per_selection(actions.copy_line, "down"), SELECTION, "alt+shift+down"),
    _command("select-word-or-next-occurrence", "Select word or next occurrence", actions.select_word_or_next_occurrence, EDITOR, "ctrl+d"),
    _command("select-all-occurrences", "Select all occurrences", whole_buffer(actions.select_all_occurrences), EDITOR, "ctrl+shift+l"),
    _command("select-line", "Select line", per_selection(actions.select_line), SELECTION, "ctrl+l"),
    _command("select-sentence", "Select sentence", per_selection(actions.select_sentence), SELECTION, "alt+s"),
    _command("expand-sentence-selection", "Expand sentence selection", per_selection(actions.expand_sentence_selection), SELECTION, "alt+shift+s"),
    _command("reduce-sentence-selection", "Reduce sentence selection", per_selection(actions.reduce_sentence_selection), SELECTION, "alt+shift+r"),
    _command("select-to-start-of-sentence", "Select to start of sentence", per_selection(actions.select_to_start_of_sentence)),
    _command("select-to-end-of-sentence", "Select to end of sentence", per_selection(actions.select_to_end_of_sentence)),
    _command("shift-to-next-sentence", "Shift selection to next sentence", per_selection(actions.shift_selection_to_next_sentence), SELECTION, "alt+right"),
    _command("shift-to-previous-sentence", "Shift selection to previous sentence", per_selection(actions.shift_selection_to_previous_sentence), SELECTION, "alt+left"),
    _command("move-sentence-down", "Move sentence down", per_selection(actions.move_sentence_down), SELECTION, "alt+down"),
    _command("move-sentence-up", "Move sentence up", per_selection(actions.move_sentence_up), SELECTION, "alt+up"),
    _command("add-cursors-to-selection-ends", "Add cursors to selection ends", _add_cursors, EDITOR, "alt+shift+i"),
    _command("insert-cursor-above", "Insert cursor above", whole_buffer(actions.insert_cursor_above), EDITOR, "ctrl+alt+up"),
    _command("insert-cursor-below", "Insert cursor below", whole_buffer(actions.insert_cursor_below), EDITOR, "ctrl+alt+down"),
    _command("go-to-line-start", "Go to start of line", per_selection(actions.go_to_line_boundary, "start")),
    _command("go-to-line-end", "Go to end of line", per_selection(actions.go_to_line_boundary, "end")),
    _command("go-to-previous-line", "Go to previous line", per_selection(actions.navigate_line, "prev")),
    _command("go-to-next-line", "Go to next line", per_selection(actions.navigate_line, "next")),
    _command("go-to-first-line", "Go to first line", per_selection(actions.navigate_line, "first")),
    _command("go-to-last-line", "Go to last line", per_selection(actions.navigate_line, "last")),
    _command("transform-to-uppercase", "Transform selection to uppercase", per_selection(actions.transform_case, Case.UPPER)),
    _command("transform-to-lowercase", "Transform selection to lowercase", per_selection(actions.transform_case, Case.LOWER)),
    _command("transform-to-titlecase", "Transform selection to title case", per_selection(actions.transform_case, Case.TITLE)),
    _command("toggle-case", "Toggle case of selection", per_selection(actions.transform_case, Case.NEXT), SELECTION, "ctrl+shift+u"),
    _command("expand-selection-to-brackets", "Expand selection to brackets", per_selection(actions.expand_selection_to_brackets)),
    _command("expand-selection-to-quotes", "Expand selection to quotes", per_selection(actions.expand_selection_to_quotes)),
    _command("expand-selection-to-quotes-or-brackets", "Expand selection to quotes or brackets", whole_buffer(actions.expand_selection_to_quotes_or_brackets), EDITOR, "ctrl+shift+a"),
)


def load_default_commands(
    registry: CommandRegistry,
    *,
    replace: bool = False,
    extra_commands: Iterable[Command] | None = None,
    include: Sequence[str] | None = None,
    exclude: Sequence[str] | None = None,
) -> CommandRegistry:
    """Register the built-in commands, optionally filtered, plus any extras."""

    allowed = _build_filters(include, exclude)
    for command in DEFAULT_COMMANDS:
        if _selected(command.id, allowed):
            registry.register(command, replace=replace)
    for command in extra_commands or ():
        registry.register(command, replace=replace)
    return registry


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    return item_id not in exclude


__all__ = [
    "DEFAULT_COMMANDS",
    "load_default_commands",
    "per_selection",
    "whole_buffer",
]
