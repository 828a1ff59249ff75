"""Editor settings resolved from the environment and command-line flags."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

ENV_PREFIX = "TRANSED_"

DEFAULT_DEBOUNCE_MS = 500


class SettingsError(ValueError):
    """Raised when a configuration value cannot be interpreted."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        super().__init__(f"Invalid setting {key}={value!r}: {reason}")
        self.key = key
        self.value = value
        self.reason = reason


@dataclass(frozen=True, slots=True)
class EditorSettings:
    """Tunables for an editing session and its host."""

    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    history_limit: Optional[int] = None
    word_wrap: bool = True
    status_bar: bool = True
    exclude_groups: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.debounce_ms < 0:
            raise SettingsError("debounce_ms", self.debounce_ms, "must be >= 0")
        if self.history_limit is not None and self.history_limit <= 0:
            raise SettingsError(
                "history_limit", self.history_limit, "must be positive or unset"
            )
        object.__setattr__(self, "exclude_groups", tuple(self.exclude_groups))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EditorSettings":
        env = os.environ if environ is None else environ

        def lookup(name: str) -> Optional[str]:
            raw = env.get(f"{ENV_PREFIX}{name}")
            if raw is None or not raw.strip():
                return None
            return raw.strip()

        debounce = _parse_int("DEBOUNCE_MS", lookup("DEBOUNCE_MS"))
        limit = _parse_int("HISTORY_LIMIT", lookup("HISTORY_LIMIT"))
        groups = lookup("EXCLUDE_GROUPS")
        return cls(
            debounce_ms=DEFAULT_DEBOUNCE_MS if debounce is None else debounce,
            # 0 in the environment means "unbounded"
            history_limit=limit or None,
            word_wrap=_parse_flag("WORD_WRAP", lookup("WORD_WRAP"), True),
            status_bar=_parse_flag("STATUS_BAR", lookup("STATUS_BAR"), True),
            exclude_groups=tuple(
                part.strip() for part in (groups or "").split(",") if part.strip()
            ),
        )

    def with_overrides(self, **changes: object) -> "EditorSettings":
        """Return a copy with every non-``None`` override applied.

        A ``history_limit`` of 0 lifts the limit, matching ``TRANSED_HISTORY_LIMIT``.
        """

        applied = {key: value for key, value in changes.items() if value is not None}
        if not applied:
            return self
        if applied.get("history_limit") == 0:
            applied["history_limit"] = None
        return replace(self, **applied)  # type: ignore[arg-type]


def _parse_int(key: str, raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise SettingsError(key, raw, "expected an integer") from exc
    if value < 0:
        raise SettingsError(key, raw, "must be >= 0")
    return value


def _parse_flag(key: str, raw: Optional[str], default: bool) -> bool:
    if raw is None:
        return default
    lowered = raw.lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    raise SettingsError(key, raw, "expected a boolean flag")


__all__ = ["DEFAULT_DEBOUNCE_MS", "EditorSettings", "SettingsError"]
