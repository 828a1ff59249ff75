"""Immutable history records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional


@dataclass(frozen=True, slots=True)
class Snapshot:
    text: str
    cursor: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "cursor", max(0, min(self.cursor, len(self.text))))


@dataclass(frozen=True, slots=True)
class HistoryResult:
    """Outcome of an undo or redo request.

    Falsy when there was nothing to restore; ``snapshot`` is then ``None``.
    """

    status: Literal["ok", "no_history"]
    snapshot: Optional[Snapshot] = None

    def __bool__(self) -> bool:
        return self.status == "ok"

    @property
    def text(self) -> Optional[str]:
        return self.snapshot.text if self.snapshot is not None else None


NO_HISTORY = HistoryResult(status="no_history")


@dataclass(frozen=True, slots=True)
class HistoryState:
    undo_depth: int
    redo_depth: int
    capture_enabled: bool


__all__ = ["HistoryResult", "HistoryState", "NO_HISTORY", "Snapshot"]
