import pytest

from transed_engine.rules import (
    DEFAULT_RULES,
    InvalidRuleConfiguration,
    Rule,
    SubstitutionTable,
    load_default_table,
)


def test_rule_rejects_empty_pattern() -> None:
    with pytest.raises(InvalidRuleConfiguration):
        Rule("", "x")


def test_rule_allows_empty_replacement() -> None:
    rule = Rule("c", "", "strip")

    assert rule.strips is True
    assert rule.delta == -1


def test_table_reports_index_of_empty_pattern() -> None:
    with pytest.raises(InvalidRuleConfiguration) as info:
        SubstitutionTable.from_pairs([("a", "b"), ("", "c")])

    assert info.value.index == 1


def test_from_pairs_applies_group_and_reports_index_of_later_rules() -> None:
    table = SubstitutionTable.from_pairs([("c", ""), ("l", "")], group="strip")

    assert table.groups == ("strip",)
    with pytest.raises(InvalidRuleConfiguration) as info:
        table.extend([("v", ""), ("", "x")])

    assert info.value.reason == "empty pattern"
    assert info.value.index == 3


def test_table_rejects_duplicate_patterns() -> None:
    with pytest.raises(InvalidRuleConfiguration) as info:
        SubstitutionTable.from_pairs([("H.", "Ḥ"), ("x", "ḫ"), ("H.", "H")])

    assert info.value.index == 2
    assert info.value.rule == Rule("H.", "H")


def test_table_keeps_declaration_order() -> None:
    table = SubstitutionTable.from_pairs([("b", "2"), ("a", "1"), ("ab", "3")])

    assert table.patterns == ("b", "a", "ab")
    assert table[0] == Rule("b", "2")


def test_detect_shadowing_flags_rule_behind_its_prefix() -> None:
    table = SubstitutionTable.from_pairs([("H", ""), ("H.", "Ḥ")])

    shadowed = table.detect_shadowing()

    assert len(shadowed) == 1
    assert shadowed[0].index == 1
    assert shadowed[0].shadowed_by_index == 0
    assert "unreachable" in shadowed[0].describe()


def test_combining_rule_first_is_not_shadowed() -> None:
    table = SubstitutionTable.from_pairs([("H.", "Ḥ"), ("H", "")])

    assert table.detect_shadowing() == ()


def test_strict_table_rejects_shadowing() -> None:
    with pytest.raises(InvalidRuleConfiguration) as info:
        SubstitutionTable.from_pairs([("h", "x"), ("h.", "ḥ")], allow_shadowed=False)

    assert info.value.reason == "shadowed pattern"
    assert info.value.index == 1


def test_default_table_layout() -> None:
    table = load_default_table()

    stats = table.stats()
    assert stats.rule_count == len(DEFAULT_RULES) == 48
    assert stats.groups == ("replace", "superscript", "strip")
    assert stats.strip_count == 14
    assert stats.shadowed_count == 0


def test_default_table_group_filters() -> None:
    without_strip = load_default_table(exclude_groups=("strip",))
    digits_only = load_default_table(include_groups=("superscript",))

    assert "c" not in without_strip.patterns
    assert digits_only.patterns == tuple("0123456789")


def test_extra_rules_run_after_defaults() -> None:
    table = load_default_table(extra_rules=[("w.", "ꞽ")])

    assert table.patterns[-1] == "w."


def test_extend_and_group_views_return_new_tables() -> None:
    base = SubstitutionTable.from_pairs([("a", "b")])

    extended = base.extend([Rule("c", "", "strip")])

    assert len(base) == 1
    assert len(extended) == 2
    assert extended.without_groups(["strip"]).patterns == ("a",)
    assert extended.only_groups(["strip"]).patterns == ("c",)


def test_derived_tables_keep_strictness() -> None:
    strict = load_default_table(include_groups=("replace",))

    assert strict.allow_shadowed is False
    assert strict.without_groups(["strip"]).allow_shadowed is False
    with pytest.raises(InvalidRuleConfiguration) as info:
        strict.extend([("h.t", "X")])

    assert info.value.reason == "shadowed pattern"
    assert info.value.index == len(strict)
