"""Edit kinds and document metadata tracked by a session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Literal, Optional

APP_TITLE = "Egyptian Hieroglyph Transliteration Pad"
UNTITLED = "Untitled.txt"

Phase = Literal["idle", "pending_capture"]


class EditKind(str, Enum):
    """Where a buffer change came from."""

    USER_EDIT = "user_edit"
    PROGRAMMATIC = "programmatic"


@dataclass(slots=True)
class DocumentInfo:
    path: Optional[Path] = None
    dirty: bool = False

    @property
    def filename(self) -> str:
        return self.path.name if self.path is not None else UNTITLED

    def title(self) -> str:
        name = f"{self.filename}*" if self.dirty else self.filename
        return f"{name} | {APP_TITLE}"


__all__ = ["APP_TITLE", "DocumentInfo", "EditKind", "Phase", "UNTITLED"]
