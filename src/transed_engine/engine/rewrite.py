"""Rewrite engine: applies a substitution table and carries the cursor along."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from transed_engine.rules import Rule, SubstitutionTable, load_default_table
from transed_engine.runtime.telemetry import span

from .offsets import clamp_offset


@dataclass(frozen=True, slots=True)
class RewriteResult:
    """Rewritten text, the adjusted cursor and how many matches were replaced."""

    text: str
    cursor: int
    replacements: int = 0

    def __iter__(self) -> Iterator[object]:
        yield self.text
        yield self.cursor

    @property
    def changed(self) -> bool:
        return self.replacements > 0


def apply_rule(rule: Rule, text: str, cursor: int) -> tuple[str, int, int]:
    """Replace every non-overlapping occurrence of ``rule.pattern``.

    Matching is literal and left to right, exactly like ``str.replace``.
    Returns ``(text, cursor, count)``. A match ending at or before the cursor
    shifts it by the rule's length delta; a match straddling the cursor moves
    it to the end of the replacement; matches at or after it leave it alone.
    """

    pattern = rule.pattern
    replacement = rule.replacement
    width = len(pattern)
    pieces: list[str] = []
    new_cursor = cursor
    count = 0
    position = 0

    start = text.find(pattern)
    while start >= 0:
        end = start + width
        pieces.append(text[position:start])
        if end <= cursor:
            new_cursor += rule.delta
        elif start < cursor:
            # ``written`` is the output length before this replacement.
            written = sum(len(piece) for piece in pieces) + count * len(replacement)
            new_cursor = written + len(replacement)
        count += 1
        position = end
        start = text.find(pattern, position)

    if not count:
        return text, cursor, 0

    pieces.append(text[position:])
    return replacement.join(pieces), new_cursor, count


class RewriteEngine:
    """Pure ``(text, cursor) -> (text, cursor)`` transformation.

    Rules run sequentially in table order, each seeing the previous rule's
    output. The engine keeps no state between calls besides the table.
    """

    def __init__(
        self,
        table: Optional[SubstitutionTable] = None,
        *,
        logger_name: str | None = None,
    ) -> None:
        self.table = table if table is not None else load_default_table()
        self._logger_name = logger_name

    def rewrite(self, text: str, cursor: int) -> RewriteResult:
        cursor = clamp_offset(text, cursor)
        if not text:
            return RewriteResult(text=text, cursor=0)

        with span(
            "engine::rewrite",
            logger_name=self._logger_name,
            component="engine",
            metadata={"length": len(text), "cursor": cursor},
        ) as handle:
            total = 0
            for rule in self.table:
                text, cursor, count = apply_rule(rule, text, cursor)
                total += count
            cursor = clamp_offset(text, cursor)
            if total:
                handle.add_metadata("replacements", total)
            return RewriteResult(text=text, cursor=cursor, replacements=total)

    def rewrite_text(self, text: str) -> str:
        return self.rewrite(text, len(text)).text

    def __call__(self, text: str, cursor: int) -> RewriteResult:
        return self.rewrite(text, cursor)


__all__ = ["RewriteEngine", "RewriteResult", "apply_rule"]
