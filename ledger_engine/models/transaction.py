"""
Transaction model: one ledger entry from a linked account.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Union

from ..config.engine_config import ENGINE_CONFIG
from ..matching.preprocess import parse_decimal
from .classification import (
    REASON_DEFAULT,
    ClassificationDecision,
    ClassificationPriority,
    ClassificationType,
)

logger = logging.getLogger(__name__)

# Posted date used for pending transactions that have not posted yet
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass
class Transaction:
    """
    One ledger entry.

    The engine only mutates category, classification reason/priority and
    matched_transfer_id. is_ignored and classification_override belong to
    the user.
    """
    id: str
    account_id: str
    amount: Union[str, Decimal, int, float]
    description: str = ""
    posted: datetime = EPOCH
    payee: Optional[str] = None
    memo: Optional[str] = None
    pending: bool = False
    category: Optional[str] = None
    classification_reason: Optional[str] = REASON_DEFAULT
    classification_priority: Optional[ClassificationPriority] = None
    classification_override: Optional[ClassificationType] = None
    matched_transfer_id: Optional[str] = None
    is_ignored: bool = False
    transacted_at: Optional[datetime] = None

    @property
    def amount_value(self) -> Decimal:
        return parse_decimal(self.amount)

    @property
    def is_matched_transfer(self) -> bool:
        return bool(self.matched_transfer_id)

    @property
    def priority(self) -> ClassificationPriority:
        """Priority of the current classification."""
        if self.classification_priority is not None:
            return ClassificationPriority(self.classification_priority)
        return ClassificationPriority.from_reason(self.classification_reason)

    @property
    def has_category(self) -> bool:
        return bool(self.category and self.category.strip())

    def category_is(self, name: str) -> bool:
        """Case-insensitive category comparison."""
        return (self.category or "").strip().lower() == name.lower()

    @property
    def is_transfer_category(self) -> bool:
        return self.category_is(ENGINE_CONFIG["transfer_category"])

    @property
    def classification_type(self) -> ClassificationType:
        """Classification type for display badges and filtering."""
        if self.is_ignored:
            return ClassificationType.IGNORED
        if self.classification_override is not None:
            return ClassificationType.parse(self.classification_override)

        category = (self.category or "").strip().lower()
        if category in ENGINE_CONFIG["income_like_categories"]:
            return ClassificationType.INCOME
        if category == ENGINE_CONFIG["transfer_category"].lower():
            return ClassificationType.TRANSFER
        if self.amount_value >= 0:
            return ClassificationType.INCOME
        return ClassificationType.EXPENSE

    def apply_decision(self, decision: ClassificationDecision) -> None:
        """Write a decision's category, reason and priority onto this transaction."""
        if not decision.fill_only or not self.has_category:
            self.category = decision.category
        self.classification_reason = decision.reason
        self.classification_priority = decision.priority
        if decision.classification_type is not None:
            self.classification_override = decision.classification_type
        logger.debug(
            "Transaction %s classified as %r (%s)",
            self.id, self.category, decision.reason,
        )
