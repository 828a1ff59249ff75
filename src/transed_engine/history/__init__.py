"""Edit history: snapshots, undo/redo stacks and capture debouncing."""

from .debounce import Clock, DebounceTimer
from .manager import HistoryManager
from .snapshot import NO_HISTORY, HistoryResult, HistoryState, Snapshot

__all__ = [
    "Clock",
    "DebounceTimer",
    "HistoryManager",
    "HistoryResult",
    "HistoryState",
    "NO_HISTORY",
    "Snapshot",
]
