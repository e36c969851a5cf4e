"""
Categorisation module for the ledger engine.

Contains:
- Classification Rule Engine (priority-ordered classification)
- Category Matcher (spending categories)
- Rule helpers (rule creation, corrections, manual overrides)
"""

from .category_matcher import CategoryMatcher
from .engine import (
    ClassificationEngine,
    count_by_priority,
    count_by_reason,
    count_uncategorized,
    reasons_in_priority_order,
)
from .rules import (
    apply_rule_to_matching,
    count_rule_matches,
    create_rule,
    derive_rule_payee,
    find_similar_rule,
    set_ignored,
    set_manual_category,
    upsert_rule_from_correction,
)

__all__ = [
    "CategoryMatcher",
    "ClassificationEngine",
    "count_by_priority",
    "count_by_reason",
    "count_uncategorized",
    "reasons_in_priority_order",
    "apply_rule_to_matching",
    "count_rule_matches",
    "create_rule",
    "derive_rule_payee",
    "find_similar_rule",
    "set_ignored",
    "set_manual_category",
    "upsert_rule_from_correction",
]
