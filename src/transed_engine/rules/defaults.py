"""Built-in Egyptological transliteration table."""

from __future__ import annotations

from typing import Iterable, Optional

from .models import Rule
from .table import SubstitutionTable

REPLACE = "replace"
SUPERSCRIPT = "superscript"
STRIP = "strip"

# Two-character mnemonics (``H.``, ``d_``) must stay ahead of any
# single-character rule sharing their first letter.
REPLACE_RULES: tuple[Rule, ...] = (
    Rule("E", "Ꜣ", REPLACE),
    Rule("e", "ꜣ", REPLACE),
    Rule("I", "Ỉ", REPLACE),
    Rule("i", "ỉ", REPLACE),
    Rule("A", "Ꜥ", REPLACE),
    Rule("a", "Ꜥ", REPLACE),  # the upper form is used for both cases
    Rule("H.", "Ḥ", REPLACE),
    Rule("h.", "ḥ", REPLACE),
    Rule("X", "Ḫ", REPLACE),
    Rule("x", "ḫ", REPLACE),
    Rule("H_", "H̱", REPLACE),  # no precomposed form exists
    Rule("h_", "ẖ", REPLACE),
    Rule("S.", "Š", REPLACE),
    Rule("s.", "š", REPLACE),
    Rule("K.", "Ḳ", REPLACE),
    Rule("k.", "ḳ", REPLACE),
    Rule("Q", "Ḳ", REPLACE),
    Rule("q", "ḳ", REPLACE),
    Rule("T_", "Ṯ", REPLACE),
    Rule("t_", "ṯ", REPLACE),
    Rule("D_", "Ḏ", REPLACE),
    Rule("d_", "ḏ", REPLACE),
    Rule("J", "Ḏ", REPLACE),
    Rule("j", "ḏ", REPLACE),
)

SUPERSCRIPT_RULES: tuple[Rule, ...] = tuple(
    Rule(digit, superscript, SUPERSCRIPT)
    for digit, superscript in zip("0123456789", "⁰¹²³⁴⁵⁶⁷⁸⁹")
)

# Latin letters with no value in Egyptological transliteration.
STRIP_RULES: tuple[Rule, ...] = tuple(
    Rule(letter, "", STRIP) for letter in "CcLlOoUuVvYyZz"
)

DEFAULT_RULES: tuple[Rule, ...] = REPLACE_RULES + SUPERSCRIPT_RULES + STRIP_RULES


def load_default_table(
    *,
    include_groups: Optional[Iterable[str]] = None,
    exclude_groups: Iterable[str] = (),
    extra_rules: Iterable[Rule | tuple[str, str]] = (),
    logger_name: Optional[str] = None,
) -> SubstitutionTable:
    """Build the default table, optionally filtered by rule group.

    ``extra_rules`` are appended after the built-in rules and therefore run
    last.
    """

    included = set(include_groups) if include_groups is not None else None
    excluded = set(exclude_groups)
    rules: list[Rule | tuple[str, str]] = [
        rule
        for rule in DEFAULT_RULES
        if (included is None or rule.group in included) and rule.group not in excluded
    ]
    rules.extend(extra_rules)
    return SubstitutionTable(rules, allow_shadowed=False, logger_name=logger_name)


__all__ = [
    "DEFAULT_RULES",
    "REPLACE",
    "REPLACE_RULES",
    "STRIP",
    "STRIP_RULES",
    "SUPERSCRIPT",
    "SUPERSCRIPT_RULES",
    "load_default_table",
]
