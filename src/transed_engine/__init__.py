"""Live Egyptological transliteration engine with coalesced undo history."""

__all__ = [
    "adapters",
    "engine",
    "history",
    "rules",
    "runtime",
    "session",
]

__version__ = "0.1.0"
