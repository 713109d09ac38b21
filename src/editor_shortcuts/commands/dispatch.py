"""Run registered commands against a buffer and apply what they return."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from editor_shortcuts.actions.positions import selection_boundaries
from editor_shortcuts.actions.result import (
    BatchContext,
    EditResult,
    TextEdit,
    apply_changes,
    map_offset,
)
from editor_shortcuts.buffer import Selection, TextBuffer
from editor_shortcuts.runtime.telemetry import SpanHandle, record_event, span
from editor_shortcuts.settings import Settings

from .models import Command, CommandKind
from .registry import CommandRegistry


def _overlaps(left: TextEdit, right: TextEdit) -> bool:
    return left.start < right.end and right.start < left.end


def _document_order(selections: Sequence[Selection]) -> List[int]:
    return sorted(range(len(selections)), key=lambda index: selection_boundaries(selections[index])[:2])


class CommandDispatcher:
    """Feeds a buffer's selections to commands and applies their results.

    The dispatcher owns the ``BatchContext`` shared by consecutive commands.
    Hosts call ``notify_selection_changed`` whenever the user moves the
    selection so occurrence search knows whether it was set by hand.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        *,
        settings: Optional[Settings] = None,
        logger_name: str | None = None,
    ) -> None:
        self.registry = registry
        self.context = BatchContext(settings=settings or Settings())
        self._logger_name = logger_name

    @property
    def settings(self) -> Settings:
        return self.context.settings

    @settings.setter
    def settings(self, value: Settings) -> None:
        self.context.settings = value

    def notify_selection_changed(self) -> None:
        if not self.context.programmatic_change:
            self.context.manual_selection = True
        self.context.programmatic_change = False

    def execute_hotkey(self, buffer: TextBuffer, token: str) -> Optional[List[Selection]]:
        command = self.registry.find_by_hotkey(token)
        if command is None:
            return None
        return self.execute(buffer, command.id)

    def execute(self, buffer: TextBuffer, command_id: str) -> List[Selection]:
        command = self.registry.get(command_id)
        before = buffer.list_selections()
        with span(
            f"command::{command.id}",
            logger_name=self._logger_name,
            component="commands",
            metadata={"kind": command.kind.value, "selections": len(before)},
        ) as handle:
            if command.kind is CommandKind.EDITOR:
                selections = list(command.handler(buffer, self.context))
                changed = False
            elif command.kind is CommandKind.BATCH:
                selections, changed = self._run_batch(buffer, command, before, handle)
            else:
                selections, changed = self._run_each(buffer, command, before)

            if not changed and selections == before:
                record_event(
                    "command.noop",
                    level="debug",
                    data={"command": command.id},
                    logger_name=self._logger_name,
                )
            buffer.set_selections(selections)
            return buffer.list_selections()

    def _run_batch(
        self,
        buffer: TextBuffer,
        command: Command,
        selections: Sequence[Selection],
        handle: SpanHandle,
    ) -> Tuple[List[Selection], bool]:
        """Compute every result on the unmodified buffer, then apply once.

        Edits that overlap an edit from an earlier selection are dropped.
        """

        order = _document_order(selections)
        accepted: List[TextEdit] = []
        results: List[Tuple[int, EditResult]] = []
        dropped = 0
        for iteration, index in enumerate(order):
            self.context.iteration = iteration
            result = command.handler(buffer, selections[index], self.context)
            for edit in result.changes:
                if any(_overlaps(edit, other) for other in accepted):
                    dropped += 1
                    continue
                accepted.append(edit)
            results.append((index, result))
        if dropped:
            handle.add_metadata("dropped_edits", dropped)

        if accepted:
            apply_changes(buffer, accepted)
        resolved: Dict[int, Selection] = {}
        for index, result in results:
            resolved[index] = result.resolve_selection(buffer) or selections[index]
        return [resolved[index] for index in order], bool(accepted)

    def _run_each(
        self, buffer: TextBuffer, command: Command, selections: Sequence[Selection]
    ) -> Tuple[List[Selection], bool]:
        """Apply each selection's result before computing the next one.

        Selections are handled last-in-document first so later edits never
        move a selection that is still waiting its turn; offsets already
        resolved are carried through every subsequent edit.
        """

        order = list(reversed(_document_order(selections)))
        resolved: Dict[int, Tuple[int, int]] = {}
        changed = False
        for iteration, index in enumerate(order):
            self.context.iteration = iteration
            result = command.handler(buffer, selections[index], self.context)
            if result.changes:
                applied = apply_changes(buffer, result.changes)
                changed = True
                resolved = {
                    key: (map_offset(anchor, applied), map_offset(head, applied))
                    for key, (anchor, head) in resolved.items()
                }
            selection = result.resolve_selection(buffer) or selections[index]
            resolved[index] = (
                buffer.pos_to_offset(selection.anchor),
                buffer.pos_to_offset(selection.head),
            )
        return [
            Selection(buffer.offset_to_pos(anchor), buffer.offset_to_pos(head))
            for anchor, head in (resolved[index] for index in reversed(order))
        ], changed


__all__ = ["CommandDispatcher"]
