"""
Rule models: payee classification rules and spending category rules.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Pattern

from ..matching.pattern_matching import (
    MATCH_CONTAINS,
    MATCH_MODES,
    MATCH_REGEX,
    compile_pattern,
    match_value,
)
from .classification import (
    REASON_PAYEE_RULE_PREFIX,
    ClassificationDecision,
    ClassificationPriority,
    ClassificationType,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ClassificationRule:
    """A payee -> classification mapping, highest automatic priority."""
    payee: str
    category: str
    classification_type: ClassificationType = ClassificationType.EXPENSE
    is_active: bool = True
    is_user_created: bool = True
    created_at: datetime = field(default_factory=_utcnow)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        self.classification_type = ClassificationType.parse(self.classification_type)

    @property
    def reason(self) -> str:
        return f"{REASON_PAYEE_RULE_PREFIX}{self.payee}"

    def matches(self, transaction) -> bool:
        """
        Check if this rule matches a transaction.

        The rule payee text must be contained, case-insensitively, in the
        transaction payee or description. Inactive or empty rules never match.
        """
        if not self.is_active:
            return False

        rule_payee = (self.payee or "").strip().lower()
        if not rule_payee:
            return False

        payee = (transaction.payee or "").lower()
        description = (transaction.description or "").lower()
        return rule_payee in payee or rule_payee in description

    def decision(self) -> ClassificationDecision:
        """Build the decision this rule applies."""
        return ClassificationDecision(
            category=self.category,
            reason=self.reason,
            priority=ClassificationPriority.PAYEE_RULE,
            classification_type=self.classification_type,
        )


# Fields a CategoryRule can inspect
FIELD_DESCRIPTION = "description"
FIELD_PAYEE = "payee"
FIELD_MEMO = "memo"

MATCH_FIELDS = (FIELD_DESCRIPTION, FIELD_PAYEE, FIELD_MEMO)


@dataclass
class CategoryRule:
    """
    A pattern -> spending category mapping on one transaction field.

    Regex patterns are compiled once here. A malformed regex marks the rule
    invalid and it reports no match from then on.
    """
    pattern: str
    match_field: str = FIELD_DESCRIPTION
    match_type: str = MATCH_CONTAINS
    _compiled: Optional[Pattern] = field(default=None, init=False, repr=False, compare=False)
    is_valid: bool = field(default=True, init=False, compare=False)

    def __post_init__(self):
        if self.match_field not in MATCH_FIELDS:
            logger.warning("Unknown category rule field %r, rule disabled", self.match_field)
            self.is_valid = False
        if self.match_type not in MATCH_MODES:
            logger.warning("Unknown category rule match type %r, rule disabled", self.match_type)
            self.is_valid = False
        if self.is_valid and self.match_type == MATCH_REGEX:
            self._compiled = compile_pattern(self.pattern)
            self.is_valid = self._compiled is not None

    def field_value(self, transaction) -> str:
        if self.match_field == FIELD_PAYEE:
            return transaction.payee or ""
        if self.match_field == FIELD_MEMO:
            return transaction.memo or ""
        return transaction.description or ""

    def matches(self, transaction) -> bool:
        if not self.is_valid:
            return False
        return match_value(
            self.field_value(transaction),
            self.pattern,
            self.match_type,
            compiled=self._compiled,
        )


@dataclass
class Category:
    """A user-defined spending category with its own matching rules."""
    name: str
    rules: List[CategoryRule] = field(default_factory=list)
    icon_name: str = "tag"
    color_hex: str = "#808080"
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def matches(self, transaction) -> bool:
        return any(rule.matches(transaction) for rule in self.rules)
