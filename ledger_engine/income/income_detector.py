"""
Pattern-based Income Detection Module.

Recognizes payroll, benefit, investment and refund-like credits from the
free text of a transaction. The pattern table is compiled once when the
detector is built; the amount and category gates live here too so callers
only need to ask whether a transaction is pattern income.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from ..config.engine_config import ENGINE_CONFIG
from ..matching.pattern_matching import compile_named_patterns, match_named_patterns
from ..matching.preprocess import combine_fields
from ..models.classification import (
    REASON_PATTERN_PREFIX,
    ClassificationDecision,
    ClassificationPriority,
)
from ..models.transaction import Transaction
from ..patterns.transaction_patterns import INCOME_PATTERNS

logger = logging.getLogger(__name__)


class IncomeDetector:
    """Detects income credits using an ordered table of named regex patterns."""

    def __init__(self, patterns: Optional[Sequence[Tuple[str, str]]] = None):
        """
        Initialize the detector.

        Args:
            patterns: Ordered (regex, display name) pairs; defaults to INCOME_PATTERNS
        """
        self.patterns = list(patterns if patterns is not None else INCOME_PATTERNS)
        self._compiled = compile_named_patterns(self.patterns)

    def match_text(self, text: Optional[str]) -> Optional[str]:
        """
        Return the display name of the first income pattern found in text.

        Example:
            >>> IncomeDetector().match_text("PAYROLL DEPOSIT ACME INC")
            "Payroll"
        """
        return match_named_patterns(text or "", self._compiled)

    def is_candidate(self, transaction: Transaction) -> bool:
        """
        Check the gates a transaction must pass before pattern matching.

        Only credits (amount > 0) that are not ignored and not already
        categorized as a transfer are considered. Zero is never income.
        """
        if transaction.amount_value <= 0:
            return False
        if transaction.is_ignored:
            return False
        if transaction.is_transfer_category:
            return False
        return True

    def detect(self, transaction: Transaction) -> Optional[str]:
        """
        Detect pattern income for a transaction.

        Description, payee and memo are searched in that order.

        Args:
            transaction: Transaction to inspect

        Returns:
            Matched pattern display name, or None
        """
        if not self.is_candidate(transaction):
            return None

        text = combine_fields(
            transaction.description,
            transaction.payee,
            transaction.memo,
        )
        name = self.match_text(text)
        if name:
            logger.debug("Income pattern %r matched transaction %s", name, transaction.id)
        return name

    def decide(self, transaction: Transaction) -> Optional[ClassificationDecision]:
        """Build the pattern-income decision for a transaction, if any."""
        name = self.detect(transaction)
        if name is None:
            return None
        return ClassificationDecision(
            category=ENGINE_CONFIG["income_category"],
            reason=f"{REASON_PATTERN_PREFIX}{name}",
            priority=ClassificationPriority.PATTERN_INCOME,
        )

    def pattern_names(self) -> List[str]:
        """Distinct pattern display names in table order."""
        names = []
        for _, name in self.patterns:
            if name not in names:
                names.append(name)
        return names

    def count_potential_income(self, transactions: Iterable[Transaction]) -> int:
        """
        Count credits that are not yet classified as income or transfer.

        Used to surface positive transactions the user may want to review.
        """
        income_category = ENGINE_CONFIG["income_category"]
        return sum(
            1 for txn in transactions
            if txn.amount_value > 0
            and not txn.is_ignored
            and not txn.category_is(income_category)
            and not txn.is_transfer_category
        )
