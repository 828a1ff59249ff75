"""Rewrite engine and cursor/offset helpers."""

from .offsets import Location, clamp_offset, location_to_offset, offset_to_location
from .rewrite import RewriteEngine, RewriteResult, apply_rule

__all__ = [
    "Location",
    "RewriteEngine",
    "RewriteResult",
    "apply_rule",
    "clamp_offset",
    "location_to_offset",
    "offset_to_location",
]
