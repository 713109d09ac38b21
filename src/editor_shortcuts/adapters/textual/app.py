"""Executable Textual app that runs the editing commands on a TextArea."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import List, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.widgets import Footer, Header, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use editor_shortcuts.adapters.textual.app"
    ) from exc

from editor_shortcuts.commands import (
    DEFAULT_COMMANDS,
    CommandDispatcher,
    CommandRegistry,
    load_default_commands,
)
from editor_shortcuts.runtime import telemetry
from editor_shortcuts.settings import ENV_PREFIX, CodeEditor, Settings

from .host import TextAreaBuffer

SAMPLE_TEXT = """\
Sentences move as units. Try alt+down here! Then alt+up brings it back.

A second paragraph. Moving its first sentence up hops over the blank line.

1. numbered items
2. continue with ctrl+enter
"""


def command_bindings() -> List[Binding]:
    bindings = [Binding("ctrl+q", "quit", "Quit", priority=True)]
    for command in DEFAULT_COMMANDS:
        for index, token in enumerate(command.tokens):
            bindings.append(
                Binding(
                    token,
                    f"run_command('{command.id}')",
                    command.name,
                    show=index == 0 and len(bindings) < 8,
                    priority=True,
                )
            )
    return bindings


class EditorShortcutsApp(App[None]):
    """TextArea with every default command bound to its hotkey."""

    CSS = """
	#editor {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = command_bindings()

    def __init__(self, *, text: str = SAMPLE_TEXT, settings: Optional[Settings] = None) -> None:
        super().__init__()
        self._initial_text = text
        self.registry = load_default_commands(CommandRegistry())
        self.dispatcher = CommandDispatcher(self.registry, settings=settings or Settings.from_env())
        self.buffer: TextAreaBuffer | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        text_area = TextArea(self._initial_text, id="editor")
        self.buffer = TextAreaBuffer(text_area, name="demo")
        yield text_area
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def action_run_command(self, command_id: str) -> None:
        if self.buffer is None:
            return
        selections = self.dispatcher.execute(self.buffer, command_id)
        self._update_status(f"{command_id} -> {len(selections)} selection(s)")

    def on_text_area_selection_changed(self, event: TextArea.SelectionChanged) -> None:
        self.dispatcher.notify_selection_changed()

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the editor shortcuts Textual demo.")
    parser.add_argument("path", nargs="?", help="File to open (default: sample text)")
    parser.add_argument(
        "--emulate",
        choices=[editor.value for editor in CodeEditor],
        default=None,
        help="Multi-cursor convention for 'add cursors to selection ends'",
    )
    parser.add_argument(
        "--no-list-prefix",
        action="store_true",
        help="Do not continue list markers on inserted lines",
    )
    parser.add_argument(
        "--telemetry-preset",
        default=os.environ.get(f"{ENV_PREFIX}TELEMETRY_PRESET", "quiet"),
        help="Telemetry preset: development, production or quiet (default: quiet)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.telemetry_preset)
    settings = Settings.from_env()
    if args.emulate:
        settings = settings.replace(emulate=CodeEditor(args.emulate))
    if args.no_list_prefix:
        settings = settings.replace(auto_insert_list_prefix=False)
    text = Path(args.path).read_text(encoding="utf-8") if args.path else SAMPLE_TEXT
    EditorShortcutsApp(text=text, settings=settings).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
