"""Bridges an EditorSession to a Textual ``TextArea`` through callbacks."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterator, Optional

from transed_engine.engine import Location, location_to_offset, offset_to_location
from transed_engine.history import HistoryResult
from transed_engine.session import EditorSession


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    install_text: Callable[[str, Location], None]
    move_cursor: Callable[[Location], None] = _noop
    update_status: Callable[[str], None] = _noop
    update_title: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Forwards widget edits to the session and installs the rewritten text.

    Text installed by the adapter is a programmatic replacement: any change
    notification it provokes is ignored, either because an install is in
    progress or because the widget text already equals the session buffer.
    """

    def __init__(self, session: EditorSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._installing = False
        self._refresh_chrome()

    @property
    def installing(self) -> bool:
        return self._installing

    def handle_text_changed(self, text: str, location: Location) -> bool:
        """Process a widget change; return False when it was our own echo."""

        if self._installing or text == self.session.text:
            self._log_state("echo ->", length=len(text))
            return False

        cursor = location_to_offset(text, location)
        result = self.session.on_buffer_changed(text, cursor)
        new_location = offset_to_location(result.text, result.cursor)
        if result.text != text:
            self._install(result.text, new_location)
        elif new_location != location:
            self.hooks.move_cursor(new_location)
        self._log_state(
            "edit ->",
            replacements=result.replacements,
            phase=self.session.phase,
        )
        self._refresh_chrome()
        return True

    def handle_selection_changed(self, location: Location) -> None:
        if self._installing:
            return
        self.session.move_cursor(location_to_offset(self.session.text, location))
        self.hooks.update_status(self.session.status_text())

    def handle_undo(self) -> HistoryResult:
        return self._apply_history(self.session.undo(), "undo")

    def handle_redo(self) -> HistoryResult:
        return self._apply_history(self.session.redo(), "redo")

    def process_timeouts(self) -> bool:
        captured = self.session.process_timeouts()
        if captured:
            self._log_state("capture <-", undo_depth=len(self.session.history.undo_stack))
        return captured

    def new_document(self) -> None:
        self.session.new_document()
        self._install_session_buffer()

    def load_document(self, text: str, path: Optional[Path | str] = None) -> None:
        self.session.load_document(text, path)
        self._install_session_buffer()

    def mark_saved(self, path: Optional[Path | str] = None) -> None:
        self.session.mark_saved(path)
        self._refresh_chrome()

    def close(self) -> None:
        self.session.close()

    def _apply_history(self, result: HistoryResult, label: str) -> HistoryResult:
        if result:
            self._install_session_buffer()
        else:
            self.hooks.update_status(f"Nothing to {label}")
        self._log_state(f"{label} <-", status=result.status)
        return result

    def _install_session_buffer(self) -> None:
        location = offset_to_location(self.session.text, self.session.cursor)
        self._install(self.session.text, location)
        self._refresh_chrome()

    def _install(self, text: str, location: Location) -> None:
        with self._programmatic():
            self.hooks.install_text(text, location)

    @contextmanager
    def _programmatic(self) -> Iterator[None]:
        self._installing = True
        try:
            yield
        finally:
            self._installing = False

    def _refresh_chrome(self) -> None:
        self.hooks.update_title(self.session.title())
        self.hooks.update_status(self.session.status_text())

    def _log_state(self, prefix: str, **fields: object) -> None:
        try:
            snapshot = self._state_metadata()
            snapshot.update({k: v for k, v in fields.items() if v is not None})
            parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
            self.hooks.log(" ".join(parts))
        except Exception:
            pass

    def _state_metadata(self) -> Dict[str, object]:
        history = self.session.history.state()
        return {
            "cursor": self.session.cursor,
            "dirty": self.session.dirty,
            "undo": history.undo_depth,
            "redo": history.redo_depth,
            "capture": history.capture_enabled,
        }


__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
