"""Editor session composing rewriting, debouncing and history."""

from .editor import EditorSession
from .state import APP_TITLE, UNTITLED, DocumentInfo, EditKind, Phase

__all__ = [
    "APP_TITLE",
    "DocumentInfo",
    "EditKind",
    "EditorSession",
    "Phase",
    "UNTITLED",
]
