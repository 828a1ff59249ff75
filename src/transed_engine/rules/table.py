"""Ordered, immutable substitution table.

Rules are evaluated strictly in declaration order; the order is the only
priority mechanism. A rule whose pattern contains an earlier rule's pattern
never fires, because the earlier rule consumes the shared characters before
the later rule is applied. ``detect_shadowing`` reports those cases.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, overload

from transed_engine.runtime.telemetry import span

from .models import InvalidRuleConfiguration, Rule, ShadowedRule

RuleLike = Rule | tuple[str, str]


@dataclass(slots=True)
class TableStats:
    """Lightweight snapshot describing table contents."""

    rule_count: int
    groups: tuple[str, ...]
    strip_count: int
    shadowed_count: int


class SubstitutionTable(Sequence[Rule]):
    """Ordered list of rules, validated once at construction."""

    def __init__(
        self,
        rules: Iterable[RuleLike],
        *,
        allow_shadowed: bool = True,
        default_group: str = "replace",
        logger_name: str | None = None,
    ) -> None:
        self._logger_name = logger_name
        self._allow_shadowed = allow_shadowed
        self._rules: tuple[Rule, ...] = _coerce_all(rules, default_group)
        with span(
            "rules::build_table",
            logger_name=logger_name,
            component="rules",
            metadata={"rule_count": len(self._rules)},
        ) as handle:
            seen: dict[str, int] = {}
            for index, rule in enumerate(self._rules):
                if rule.pattern in seen:
                    handle.add_metadata("duplicate", rule.pattern)
                    raise InvalidRuleConfiguration(
                        f"duplicate pattern (first declared at index {seen[rule.pattern]})",
                        rule=rule,
                        index=index,
                    )
                seen[rule.pattern] = index

            self._shadowed = tuple(self._scan_shadowing())
            for shadowed in self._shadowed:
                if not allow_shadowed:
                    raise InvalidRuleConfiguration(
                        "shadowed pattern", rule=shadowed.rule, index=shadowed.index
                    )
                handle.warn("shadowed_rule", detail=shadowed.describe())

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[tuple[str, str]],
        *,
        group: str = "replace",
        allow_shadowed: bool = True,
    ) -> "SubstitutionTable":
        return cls(pairs, allow_shadowed=allow_shadowed, default_group=group)

    @overload
    def __getitem__(self, index: int) -> Rule: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Rule, ...]: ...

    def __getitem__(self, index):
        return self._rules[index]

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __repr__(self) -> str:
        return f"SubstitutionTable({len(self._rules)} rules)"

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    @property
    def patterns(self) -> tuple[str, ...]:
        return tuple(rule.pattern for rule in self._rules)

    @property
    def groups(self) -> tuple[str, ...]:
        return tuple(dict.fromkeys(rule.group for rule in self._rules))

    @property
    def allow_shadowed(self) -> bool:
        return self._allow_shadowed

    def detect_shadowing(self) -> tuple[ShadowedRule, ...]:
        return self._shadowed

    def extend(self, rules: Iterable[RuleLike]) -> "SubstitutionTable":
        """Return a new table with ``rules`` evaluated after the current ones."""

        return SubstitutionTable(
            (*self._rules, *rules),
            allow_shadowed=self._allow_shadowed,
            logger_name=self._logger_name,
        )

    def without_groups(self, groups: Iterable[str]) -> "SubstitutionTable":
        dropped = set(groups)
        return SubstitutionTable(
            (rule for rule in self._rules if rule.group not in dropped),
            allow_shadowed=self._allow_shadowed,
            logger_name=self._logger_name,
        )

    def only_groups(self, groups: Iterable[str]) -> "SubstitutionTable":
        kept = set(groups)
        return SubstitutionTable(
            (rule for rule in self._rules if rule.group in kept),
            allow_shadowed=self._allow_shadowed,
            logger_name=self._logger_name,
        )

    def stats(self) -> TableStats:
        return TableStats(
            rule_count=len(self._rules),
            groups=self.groups,
            strip_count=sum(1 for rule in self._rules if rule.strips),
            shadowed_count=len(self._shadowed),
        )

    def _scan_shadowing(self) -> Iterator[ShadowedRule]:
        for index, rule in enumerate(self._rules):
            for earlier_index in range(index):
                earlier = self._rules[earlier_index]
                if earlier.pattern in rule.pattern:
                    yield ShadowedRule(
                        index=index,
                        rule=rule,
                        shadowed_by_index=earlier_index,
                        shadowed_by=earlier,
                    )
                    break


def _coerce_all(rules: Iterable[RuleLike], group: str) -> tuple[Rule, ...]:
    coerced: list[Rule] = []
    for index, value in enumerate(rules):
        try:
            coerced.append(Rule.coerce(value, group=group))
        except InvalidRuleConfiguration as exc:
            raise InvalidRuleConfiguration(exc.reason, index=index) from exc
    return tuple(coerced)


__all__ = ["RuleLike", "SubstitutionTable", "TableStats"]
