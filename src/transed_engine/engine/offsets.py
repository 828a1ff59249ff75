"""Conversions between flat offsets and ``(row, column)`` locations.

The rewrite engine works on flat offsets; widgets such as Textual's
``TextArea`` report carets as ``(row, column)``. Rows are separated by
``"\\n"``. Out-of-range inputs are clamped rather than rejected.
"""

from __future__ import annotations

from typing import Tuple

Location = Tuple[int, int]  # (row, column)


def clamp_offset(text: str, offset: int) -> int:
    return max(0, min(offset, len(text)))


def offset_to_location(text: str, offset: int) -> Location:
    offset = clamp_offset(text, offset)
    row = text.count("\n", 0, offset)
    line_start = text.rfind("\n", 0, offset) + 1
    return (row, offset - line_start)


def location_to_offset(text: str, location: Location) -> int:
    row, col = location
    if row < 0:
        return 0
    line_start = 0
    for _ in range(row):
        newline = text.find("\n", line_start)
        if newline < 0:
            return len(text)
        line_start = newline + 1
    line_end = text.find("\n", line_start)
    if line_end < 0:
        line_end = len(text)
    return line_start + max(0, min(col, line_end - line_start))


__all__ = ["Location", "clamp_offset", "location_to_offset", "offset_to_location"]
