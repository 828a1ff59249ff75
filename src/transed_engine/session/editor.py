"""Editor session composing the rewrite engine with coalesced history."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Sequence

from transed_engine.engine import RewriteEngine, RewriteResult, offset_to_location
from transed_engine.history import (
    NO_HISTORY,
    Clock,
    DebounceTimer,
    HistoryManager,
    HistoryResult,
    Snapshot,
)
from transed_engine.rules import SubstitutionTable, load_default_table
from transed_engine.runtime import telemetry
from transed_engine.runtime.settings import EditorSettings

from .state import DocumentInfo, EditKind, Phase


class EditorSession:
    """Owns the live buffer and routes edits, quiescence and undo/redo.

    Hosts call ``on_buffer_changed`` after every raw edit and install the
    returned text/cursor without reporting it back as a user edit. They poll
    ``process_timeouts`` from their event loop so that a quiet period after
    a burst of edits produces exactly one history snapshot.
    """

    def __init__(
        self,
        table: Optional[SubstitutionTable] = None,
        *,
        settings: Optional[EditorSettings] = None,
        history: Optional[HistoryManager] = None,
        timer: Optional[DebounceTimer] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.settings = settings or EditorSettings()
        if table is None:
            table = load_default_table(exclude_groups=self.settings.exclude_groups)
        self.engine = RewriteEngine(table, logger_name="transed_engine.engine")
        self.history = history or HistoryManager(limit=self.settings.history_limit)
        self.timer = timer or DebounceTimer(self.settings.debounce_ms, clock=clock)
        self.document = DocumentInfo()
        self._text = ""
        self._cursor = 0
        self._closed = False
        self.history.reset(Snapshot(""))

    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def table(self) -> SubstitutionTable:
        return self.engine.table

    @property
    def phase(self) -> Phase:
        return "pending_capture" if self.timer.pending else "idle"

    @property
    def dirty(self) -> bool:
        return self.document.dirty

    @property
    def filename(self) -> str:
        return self.document.filename

    @property
    def path(self) -> Optional[Path]:
        return self.document.path

    @property
    def closed(self) -> bool:
        return self._closed

    # --- edits ----------------------------------------------------------------
    def on_buffer_changed(
        self, text: str, cursor: int, kind: EditKind = EditKind.USER_EDIT
    ) -> RewriteResult:
        if kind is EditKind.PROGRAMMATIC:
            self._text = text
            self._cursor = max(0, min(cursor, len(text)))
            return RewriteResult(text=self._text, cursor=self._cursor)

        result = self.engine.rewrite(text, cursor)
        changed = result.text != self._text
        self._text = result.text
        self._cursor = result.cursor
        if not changed:
            return result

        self.document.dirty = True
        self.history.resume_capture()
        if not self._closed:
            self.timer.arm()
        return result

    def move_cursor(self, cursor: int) -> int:
        self._cursor = max(0, min(cursor, len(self._text)))
        return self._cursor

    # --- coalesced capture ----------------------------------------------------
    def on_quiescence(self) -> bool:
        self.timer.cancel()
        if self._closed:
            return False
        captured = self.history.capture(self._text, self._cursor)
        telemetry.record_event(
            "session.quiescence",
            level="debug",
            data={"captured": captured, "undo_depth": len(self.history.undo_stack)},
            logger_name="transed_engine.session",
        )
        return captured

    def process_timeouts(self, now: Optional[float] = None) -> bool:
        if self.timer.poll(now):
            return self.on_quiescence()
        return False

    # --- undo / redo ----------------------------------------------------------
    def can_undo(self) -> bool:
        return self._differs(self.history.undo_stack)

    def can_redo(self) -> bool:
        return self._differs(self.history.redo_stack)

    def undo(self) -> HistoryResult:
        return self._restore("undo", self.history.undo, self.can_undo)

    def redo(self) -> HistoryResult:
        return self._restore("redo", self.history.redo, self.can_redo)

    def on_undo_requested(self) -> str:
        self.undo()
        return self._text

    def on_redo_requested(self) -> str:
        self.redo()
        return self._text

    def _differs(self, stack: Sequence[Snapshot]) -> bool:
        return any(snapshot.text != self._text for snapshot in stack)

    def _restore(
        self,
        label: str,
        step: Callable[[str, int], HistoryResult],
        available: Callable[[], bool],
    ) -> HistoryResult:
        with telemetry.span(
            name=f"session::{label}",
            component="session",
            metadata={"length": len(self._text)},
        ) as handle:
            if not available():
                handle.add_metadata("status", NO_HISTORY.status)
                return NO_HISTORY
            self.timer.cancel()
            # The newest capture usually equals the live buffer; such steps
            # are skipped so every request visibly changes the text.
            result = step(self._text, self._cursor)
            while result and result.text == self._text:
                result = step(self._text, self._cursor)
            if not result or result.snapshot is None:
                handle.add_metadata("status", result.status)
                return result

            self._text = result.snapshot.text
            self._cursor = result.snapshot.cursor
            self.document.dirty = True
            handle.add_metadata("status", result.status)
            return result

    # --- document lifecycle ---------------------------------------------------
    def new_document(self) -> None:
        self.load_document("", path=None)

    def load_document(self, text: str, path: Optional[Path | str] = None) -> None:
        """Install ``text`` verbatim and start a fresh history rooted at it."""

        self.timer.cancel()
        self._closed = False
        self._text = text
        self._cursor = 0
        self.document = DocumentInfo(path=Path(path) if path is not None else None)
        self.history.reset(Snapshot(text))
        telemetry.record_event(
            "session.load",
            data={"file": self.document.filename, "length": len(text)},
            logger_name="transed_engine.session",
        )

    def mark_saved(self, path: Optional[Path | str] = None) -> None:
        if path is not None:
            self.document.path = Path(path)
        self.document.dirty = False

    def close(self) -> None:
        self.timer.cancel()
        self._closed = True

    # --- presentation ---------------------------------------------------------
    def title(self) -> str:
        return self.document.title()

    def caret_position(self) -> tuple[int, int]:
        """1-based ``(line, column)`` of the cursor."""

        row, col = offset_to_location(self._text, self._cursor)
        return (row + 1, col + 1)

    def status_text(self) -> str:
        line, col = self.caret_position()
        return f"Ln {line}, Col {col}"


__all__ = ["EditorSession"]
