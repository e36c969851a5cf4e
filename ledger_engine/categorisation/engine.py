"""
Classification Rule Engine.

Resolves one (category, classification reason) pair per transaction from
user payee rules, credit card payment detection, transfer matches, income
patterns and the sign-based default. Detectors only propose decisions; the
engine is the single place that applies them, and only when the proposed
priority is strictly higher than the one already on the transaction.
"""

import logging
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence

from ..config.engine_config import ENGINE_CONFIG
from ..income.income_detector import IncomeDetector
from ..matching.pattern_matching import match_keywords
from ..models.classification import (
    REASON_AUTO_CC_PAYMENT,
    REASON_DEFAULT,
    ClassificationDecision,
    ClassificationPriority,
    can_override,
)
from ..models.rules import Category, ClassificationRule
from ..models.transaction import Transaction
from ..patterns.transaction_patterns import CC_PAYMENT_PATTERNS
from ..transfers.transfer_detector import TransferDetector
from .category_matcher import CategoryMatcher

logger = logging.getLogger(__name__)


class ClassificationEngine:
    """Priority-ordered transaction classifier."""

    def __init__(
        self,
        income_detector: Optional[IncomeDetector] = None,
        transfer_detector: Optional[TransferDetector] = None,
        category_matcher: Optional[CategoryMatcher] = None,
        categories: Optional[Sequence[Category]] = None,
    ):
        """
        Initialize the engine.

        Args:
            income_detector: Income pattern detector (default table if None)
            transfer_detector: Transfer detector (configured window if None)
            category_matcher: Spending category matcher (built from categories if None)
            categories: User categories for the default category matcher
        """
        self.income_detector = income_detector or IncomeDetector()
        self.transfer_detector = transfer_detector or TransferDetector()
        self.category_matcher = category_matcher or CategoryMatcher(categories=categories)

    # ----------------------------
    # Candidate decisions
    # ----------------------------
    @staticmethod
    def find_rule(transaction: Transaction, rules: Iterable[ClassificationRule]) -> Optional[ClassificationRule]:
        """First active rule matching the transaction, in rule order."""
        for rule in rules:
            if rule.matches(transaction):
                return rule
        return None

    @staticmethod
    def detect_cc_payment(transaction: Transaction) -> bool:
        """
        Check for an outgoing credit card payment.

        Matched transfers are left to the transfer classification.
        """
        if transaction.amount_value >= 0 or transaction.is_matched_transfer:
            return False
        return (
            match_keywords(transaction.description, CC_PAYMENT_PATTERNS) is not None
            or match_keywords(transaction.payee, CC_PAYMENT_PATTERNS) is not None
        )

    @staticmethod
    def default_decision(transaction: Transaction) -> ClassificationDecision:
        """Sign-based fallback; fills the category only when it is empty."""
        if transaction.amount_value >= 0:
            category = ENGINE_CONFIG["income_category"]
        else:
            category = ENGINE_CONFIG["expense_category"]
        return ClassificationDecision(
            category=category,
            reason=REASON_DEFAULT,
            priority=ClassificationPriority.DEFAULT,
            fill_only=True,
        )

    def decide(
        self,
        transaction: Transaction,
        rules: Iterable[ClassificationRule] = (),
    ) -> ClassificationDecision:
        """
        Build the highest-priority decision available for a transaction.

        Order: payee rule, auto-transfer (already matched), credit card
        payment, income pattern, default. Manual classifications are not
        produced here; they are protected by the override check instead.

        Args:
            transaction: Transaction to classify
            rules: Classification rules, first match wins

        Returns:
            ClassificationDecision (never None; the default always applies)
        """
        rule = self.find_rule(transaction, rules)
        if rule is not None:
            return rule.decision()

        if transaction.is_matched_transfer:
            return self.transfer_detector.transfer_decision()

        if self.detect_cc_payment(transaction):
            return ClassificationDecision(
                category=ENGINE_CONFIG["transfer_category"],
                reason=REASON_AUTO_CC_PAYMENT,
                priority=ClassificationPriority.AUTO_CC_PAYMENT,
            )

        income = self.income_detector.decide(transaction)
        if income is not None:
            return income

        return self.default_decision(transaction)

    # ----------------------------
    # Application
    # ----------------------------
    def apply(
        self,
        transaction: Transaction,
        decision: ClassificationDecision,
        force: bool = False,
    ) -> bool:
        """
        Apply a decision if it outranks the current classification.

        A default decision never overrides anything; it only fills an empty
        category on a transaction that has no higher classification.

        Returns:
            True if the transaction was changed
        """
        current = transaction.priority

        if decision.fill_only and not force:
            if transaction.has_category or current > decision.priority:
                return False
            transaction.apply_decision(decision)
            return True

        if not force and not can_override(decision.priority, current):
            logger.debug(
                "Kept %r on transaction %s over %r",
                transaction.classification_reason, transaction.id, decision.reason,
            )
            return False

        transaction.apply_decision(decision)

        # A matched transfer reclassified as something else loses its link
        if transaction.is_matched_transfer and not transaction.is_transfer_category:
            logger.debug("Transaction %s no longer a transfer, clearing link", transaction.id)
            transaction.matched_transfer_id = None
        return True

    def classify(
        self,
        transaction: Transaction,
        rules: Iterable[ClassificationRule] = (),
        force: bool = False,
    ) -> ClassificationPriority:
        """
        Classify one transaction.

        Args:
            transaction: Transaction to classify (mutated in place)
            rules: Classification rules
            force: Apply the best decision regardless of the current priority

        Returns:
            Priority of the classification the transaction ends up with
        """
        decision = self.decide(transaction, rules)
        self.apply(transaction, decision, force=force)
        return transaction.priority

    def classify_all(
        self,
        transactions: Sequence[Transaction],
        rules: Sequence[ClassificationRule] = (),
    ) -> Dict[str, int]:
        """
        Run the full classification pass over a set of transactions.

        Transfers are detected across the whole set first, then every
        transaction is classified, then spending categories are assigned.
        Re-running the pass over its own output changes nothing.

        Args:
            transactions: All transactions (needed for transfer pairing)
            rules: Classification rules

        Returns:
            Dict with counts of transfers matched, classifications changed
            and categories assigned
        """
        transactions = list(transactions)
        rules = list(rules)
        before = [(txn.category, txn.classification_reason) for txn in transactions]

        # Payee rules first so a rule-owned transaction is paired only as a transfer
        for txn in transactions:
            rule = self.find_rule(txn, rules)
            if rule is not None:
                self.apply(txn, rule.decision())

        transfers = self.transfer_detector.process_transfers(transactions)

        for txn in transactions:
            self.classify(txn, rules)

        for txn in self.transfer_detector.find_broken_links(transactions):
            self.transfer_detector.release_link(txn)
            self.classify(txn, rules)

        changed = sum(
            1 for txn, previous in zip(transactions, before)
            if (txn.category, txn.classification_reason) != previous
        )

        categorized = self.category_matcher.apply_all(transactions)

        logger.info(
            "Classified %d transactions: %d transfers matched, %d changed, %d categorized",
            len(transactions), transfers, changed, categorized,
        )
        return {
            "transactions": len(transactions),
            "transfers_matched": transfers,
            "classifications_changed": changed,
            "categories_assigned": categorized,
        }


# ----------------------------
# Statistics
# ----------------------------
def count_by_reason(transactions: Iterable[Transaction]) -> Dict[str, int]:
    """Count transactions by classification reason ("Default" when unset)."""
    counts = Counter(txn.classification_reason or REASON_DEFAULT for txn in transactions)
    return dict(counts)


def count_by_priority(transactions: Iterable[Transaction]) -> Dict[ClassificationPriority, int]:
    """Count transactions by classification priority, every level included."""
    counts = {priority: 0 for priority in ClassificationPriority}
    for txn in transactions:
        counts[txn.priority] += 1
    return counts


def count_uncategorized(transactions: Iterable[Transaction]) -> int:
    """Count non-ignored debits with no category label."""
    return sum(
        1 for txn in transactions
        if not txn.is_ignored and txn.amount_value < 0 and not txn.has_category
    )


def reasons_in_priority_order(transactions: Iterable[Transaction]) -> List[str]:
    """Distinct reasons, highest priority first."""
    reasons = {txn.classification_reason or REASON_DEFAULT: txn.priority for txn in transactions}
    return sorted(reasons, key=lambda reason: (-reasons[reason], reason))
