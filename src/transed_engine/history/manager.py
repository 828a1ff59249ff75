"""Double-stack undo/redo history fed by coalesced captures."""

from __future__ import annotations

from typing import List, Optional

from transed_engine.runtime import telemetry

from .snapshot import NO_HISTORY, HistoryResult, HistoryState, Snapshot


class HistoryManager:
    """Undo and redo stacks of buffer snapshots.

    ``capture`` pushes onto the undo stack and discards the redo branch.
    ``undo``/``redo`` swap the live buffer with the top of one stack and
    switch capturing off, so the programmatic buffer replacement they cause
    is not recorded as a new step. Capturing stays off until
    ``resume_capture`` is called for the next user edit.
    """

    def __init__(self, *, limit: Optional[int] = None, logger_name: str | None = None) -> None:
        if limit is not None and limit <= 0:
            raise ValueError("limit must be positive")
        self.limit = limit
        self._undo: List[Snapshot] = []
        self._redo: List[Snapshot] = []
        self._capture_enabled = True
        self._logger_name = logger_name or "transed_engine.history"

    @property
    def capture_enabled(self) -> bool:
        return self._capture_enabled

    @property
    def undo_stack(self) -> tuple[Snapshot, ...]:
        return tuple(self._undo)

    @property
    def redo_stack(self) -> tuple[Snapshot, ...]:
        return tuple(self._redo)

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    def state(self) -> HistoryState:
        return HistoryState(
            undo_depth=len(self._undo),
            redo_depth=len(self._redo),
            capture_enabled=self._capture_enabled,
        )

    def capture(self, text: str, cursor: int = 0) -> bool:
        if not self._capture_enabled:
            return False
        self._undo.append(Snapshot(text, cursor))
        if self.limit is not None and len(self._undo) > self.limit:
            del self._undo[: len(self._undo) - self.limit]
        self._redo.clear()
        telemetry.record_event(
            "history.capture",
            level="debug",
            data={"undo_depth": len(self._undo), "length": len(text)},
            logger_name=self._logger_name,
        )
        return True

    def undo(self, current_text: str, current_cursor: int = 0) -> HistoryResult:
        return self._swap(self._undo, self._redo, current_text, current_cursor, "undo")

    def redo(self, current_text: str, current_cursor: int = 0) -> HistoryResult:
        return self._swap(self._redo, self._undo, current_text, current_cursor, "redo")

    def suspend_capture(self) -> None:
        self._capture_enabled = False

    def resume_capture(self) -> None:
        self._capture_enabled = True

    def reset(self, baseline: Optional[Snapshot] = None) -> None:
        """Forget all history, optionally keeping ``baseline`` as the only entry."""

        self._undo.clear()
        self._redo.clear()
        self._capture_enabled = True
        if baseline is not None:
            self._undo.append(baseline)

    def _swap(
        self,
        source: List[Snapshot],
        target: List[Snapshot],
        current_text: str,
        current_cursor: int,
        label: str,
    ) -> HistoryResult:
        if not source:
            telemetry.record_event(
                f"history.{label}",
                level="debug",
                data={"status": NO_HISTORY.status},
                logger_name=self._logger_name,
            )
            return NO_HISTORY

        restored = source.pop()
        target.append(Snapshot(current_text, current_cursor))
        self._capture_enabled = False
        telemetry.record_event(
            f"history.{label}",
            level="debug",
            data={"undo_depth": len(self._undo), "redo_depth": len(self._redo)},
            logger_name=self._logger_name,
        )
        return HistoryResult(status="ok", snapshot=restored)


__all__ = ["HistoryManager"]
