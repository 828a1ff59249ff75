"""Executable Textual app hosting the transliteration editor."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Literal, Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.widgets import Footer, Input, Static, TextArea
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use transed_engine.adapters.textual.app"
    ) from exc

from transed_engine.engine import Location
from transed_engine.rules import load_default_table
from transed_engine.runtime import telemetry
from transed_engine.runtime.settings import EditorSettings, SettingsError
from transed_engine.session import EditorSession

from .controller import TextualEditorAdapter, TextualUIHooks

PromptKind = Literal["open", "save"]


class TransedApp(App[None]):
    """Plain-text pad that rewrites ASCII mnemonics as you type."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor {
		height: 1fr;
		border: round $accent;
	}

	#path-prompt {
		display: none;
	}

	#path-prompt.visible {
		display: block;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        Binding("ctrl+z", "undo", "Undo", priority=True),
        Binding("ctrl+y", "redo", "Redo", priority=True),
        Binding("ctrl+n", "new_document", "New", priority=True),
        Binding("ctrl+o", "open_document", "Open", priority=True),
        Binding("ctrl+s", "save_document", "Save", priority=True),
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(
        self,
        *,
        settings: Optional[EditorSettings] = None,
        path: Optional[Path] = None,
    ) -> None:
        super().__init__()
        self.settings = settings or EditorSettings.from_env()
        self._initial_path = path
        self.session: EditorSession | None = None
        self.adapter: TextualEditorAdapter | None = None
        self._editor: TextArea | None = None
        self._status: Static | None = None
        self._prompt: Input | None = None
        self._prompt_kind: PromptKind | None = None
        self._confirm_discard: str | None = None
        self.logger = telemetry.get_logger("transed_engine.app")

    def compose(self) -> ComposeResult:
        self._editor = TextArea("", id="editor", soft_wrap=self.settings.word_wrap)
        self._prompt = Input(placeholder="File path", id="path-prompt")
        self._status = Static("", id="status-line")
        self._status.display = self.settings.status_bar
        yield self._editor
        yield self._prompt
        yield self._status
        yield Footer()

    async def on_mount(self) -> None:
        table = load_default_table(exclude_groups=self.settings.exclude_groups)
        self.session = EditorSession(table, settings=self.settings)
        hooks = TextualUIHooks(
            install_text=self._install_text,
            move_cursor=self._move_cursor,
            update_status=self._update_status,
            update_title=self._update_title,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.session, hooks)
        if self._initial_path is not None:
            self._open_path(self._initial_path, missing_ok=True)
        self.set_interval(0.1, self._process_timeouts)
        if self._editor:
            self._editor.focus()

    async def on_unmount(self) -> None:
        if self.adapter:
            self.adapter.close()

    # --- widget events --------------------------------------------------------
    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if not self.adapter:
            return
        self._confirm_discard = None
        area = event.text_area
        self.adapter.handle_text_changed(area.text, area.cursor_location)

    def on_text_area_selection_changed(self, event: TextArea.SelectionChanged) -> None:
        if self.adapter:
            self.adapter.handle_selection_changed(event.text_area.cursor_location)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        kind = self._prompt_kind
        self._hide_prompt()
        raw = event.value.strip()
        if not raw or kind is None:
            return
        path = Path(raw).expanduser()
        if kind == "open":
            self._open_path(path, missing_ok=False)
        else:
            self._save_path(path)

    # --- actions --------------------------------------------------------------
    def action_undo(self) -> None:
        if self.adapter:
            self.adapter.handle_undo()

    def action_redo(self) -> None:
        if self.adapter:
            self.adapter.handle_redo()

    def action_new_document(self) -> None:
        if self.adapter and self._may_discard("new"):
            self.adapter.new_document()

    def action_open_document(self) -> None:
        if self._may_discard("open"):
            self._show_prompt("open")

    async def action_quit(self) -> None:
        if self._may_discard("quit"):
            self.exit()

    def action_save_document(self) -> None:
        if not self.session:
            return
        if self.session.path is None:
            self._show_prompt("save")
        else:
            self._save_path(self.session.path)

    # --- file I/O -------------------------------------------------------------
    def _open_path(self, path: Path, *, missing_ok: bool) -> None:
        if not self.adapter:
            return
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            if not missing_ok:
                self._update_status(f"Not found: {path}")
                return
            text = ""
        except (OSError, UnicodeDecodeError) as exc:
            telemetry.record_event(
                "app.open_failed", level="warning", data={"path": path, "error": exc}
            )
            self._update_status(f"Cannot open {path}: {exc}")
            return
        self.adapter.load_document(text, path)

    def _save_path(self, path: Path) -> None:
        if not (self.adapter and self.session):
            return
        try:
            path.write_text(self.session.text, encoding="utf-8")
        except OSError as exc:
            telemetry.record_event(
                "app.save_failed", level="warning", data={"path": path, "error": exc}
            )
            self._update_status(f"Cannot save {path}: {exc}")
            return
        self.adapter.mark_saved(path)
        self._update_status(f"Saved {path}")

    def _may_discard(self, action: str) -> bool:
        if not self.session or not self.session.dirty:
            return True
        if self._confirm_discard == action:
            self._confirm_discard = None
            return True
        self._confirm_discard = action
        self._update_status(
            f"Unsaved changes in {self.session.filename}: repeat to discard"
        )
        return False

    def _show_prompt(self, kind: PromptKind) -> None:
        if not self._prompt:
            return
        self._prompt_kind = kind
        self._prompt.placeholder = "Open file…" if kind == "open" else "Save as…"
        self._prompt.value = ""
        self._prompt.add_class("visible")
        self._prompt.focus()

    def _hide_prompt(self) -> None:
        self._prompt_kind = None
        if self._prompt:
            self._prompt.remove_class("visible")
        if self._editor:
            self._editor.focus()

    # --- hooks ----------------------------------------------------------------
    def _install_text(self, text: str, location: Location) -> None:
        if not self._editor:
            return
        self._editor.load_text(text)
        self._editor.cursor_location = location

    def _move_cursor(self, location: Location) -> None:
        if self._editor:
            self._editor.cursor_location = location

    def _update_status(self, status: str) -> None:
        if self._status:
            self._status.update(status)

    def _update_title(self, title: str) -> None:
        self.title = title

    def _log_line(self, line: str) -> None:
        self.logger.debug(line)

    def _process_timeouts(self) -> None:
        if self.adapter:
            self.adapter.process_timeouts()


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Egyptian hieroglyph transliteration pad."
    )
    parser.add_argument("path", nargs="?", type=Path, help="Text file to open")
    parser.add_argument(
        "--debounce-ms",
        type=int,
        default=None,
        help="Quiet period before an undo checkpoint is taken (default: 500)",
    )
    parser.add_argument(
        "--history-limit",
        type=int,
        default=None,
        help="Maximum number of undo checkpoints (0 or unset: unbounded)",
    )
    parser.add_argument(
        "--no-wrap", action="store_true", help="Disable soft line wrapping"
    )
    parser.add_argument(
        "--no-status-bar", action="store_true", help="Hide the status line"
    )
    parser.add_argument(
        "--exclude-group",
        action="append",
        default=None,
        metavar="GROUP",
        help="Skip a rule group (replace, superscript, strip); repeatable",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "performance"),
        default=None,
        help="Telemetry preset to apply before start-up",
    )
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> EditorSettings:
    base = EditorSettings.from_env()
    return base.with_overrides(
        debounce_ms=args.debounce_ms,
        history_limit=args.history_limit,
        word_wrap=False if args.no_wrap else None,
        status_bar=False if args.no_status_bar else None,
        exclude_groups=tuple(args.exclude_group) if args.exclude_group else None,
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    try:
        settings = build_settings(args)
    except SettingsError as exc:
        raise SystemExit(str(exc)) from exc
    app = TransedApp(settings=settings, path=args.path)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
