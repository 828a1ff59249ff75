"""Dataclasses describing substitution rules."""

from __future__ import annotations

from dataclasses import dataclass


class InvalidRuleConfiguration(ValueError):
    """Raised when a rule or a rule table cannot be used safely."""

    def __init__(
        self,
        reason: str,
        *,
        rule: "Rule | None" = None,
        index: int | None = None,
    ) -> None:
        where = f" at index {index}" if index is not None else ""
        what = f" ({rule.pattern!r} -> {rule.replacement!r})" if rule else ""
        super().__init__(f"{reason}{where}{what}")
        self.reason = reason
        self.rule = rule
        self.index = index


@dataclass(frozen=True, slots=True)
class Rule:
    """Literal ``pattern`` rewritten to ``replacement`` wherever it occurs."""

    pattern: str
    replacement: str
    group: str = "replace"

    def __post_init__(self) -> None:
        if not isinstance(self.pattern, str) or not isinstance(self.replacement, str):
            raise TypeError("pattern and replacement must be strings")
        if not self.pattern:
            # An empty pattern matches between every pair of characters.
            raise InvalidRuleConfiguration("empty pattern")

    @property
    def delta(self) -> int:
        """Length change caused by a single application of this rule."""

        return len(self.replacement) - len(self.pattern)

    @property
    def strips(self) -> bool:
        return not self.replacement

    @classmethod
    def coerce(cls, value: "Rule | tuple[str, str]", *, group: str = "replace") -> "Rule":
        if isinstance(value, Rule):
            return value
        pattern, replacement = value
        return cls(pattern, replacement, group)


@dataclass(frozen=True, slots=True)
class ShadowedRule:
    """A rule that can never match because an earlier rule eats its pattern."""

    index: int
    rule: Rule
    shadowed_by_index: int
    shadowed_by: Rule

    def describe(self) -> str:
        return (
            f"rule #{self.index} {self.rule.pattern!r} is unreachable: "
            f"rule #{self.shadowed_by_index} {self.shadowed_by.pattern!r} runs first"
        )


__all__ = ["InvalidRuleConfiguration", "Rule", "ShadowedRule"]
