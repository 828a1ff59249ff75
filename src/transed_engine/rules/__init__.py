"""Substitution rules and the built-in transliteration table."""

from .models import InvalidRuleConfiguration, Rule, ShadowedRule
from .table import RuleLike, SubstitutionTable, TableStats
from .defaults import DEFAULT_RULES, load_default_table

__all__ = [
    "DEFAULT_RULES",
    "InvalidRuleConfiguration",
    "Rule",
    "RuleLike",
    "ShadowedRule",
    "SubstitutionTable",
    "TableStats",
    "load_default_table",
]
