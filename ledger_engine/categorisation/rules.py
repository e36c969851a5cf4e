"""
Rule helpers: creating payee rules from user corrections and recording
manual interventions.
"""

import logging
from typing import Iterable, List, Optional, Union

from ..config.engine_config import ENGINE_CONFIG
from ..matching.pattern_matching import fuzzy_best_match
from ..models.classification import (
    REASON_MANUAL,
    ClassificationDecision,
    ClassificationPriority,
    ClassificationType,
)
from ..models.rules import ClassificationRule
from ..models.transaction import Transaction

logger = logging.getLogger(__name__)


def derive_rule_payee(transaction: Transaction) -> Optional[str]:
    """
    Pick the payee text a reusable rule should match on.

    The transaction payee is used verbatim when present. Otherwise the first
    word of the description is used, provided it is long enough to be
    meaningful.

    Args:
        transaction: Transaction the user corrected

    Returns:
        Payee text, or None if no usable text exists

    Example:
        >>> derive_rule_payee(Transaction(id="1", account_id="a", amount="-5",
        ...                               description="STARBUCKS #123"))
        "STARBUCKS"
    """
    if transaction.payee and transaction.payee.strip():
        return transaction.payee

    words = (transaction.description or "").split()
    if not words:
        return None

    first_word = words[0]
    if len(first_word) < ENGINE_CONFIG["rule_min_word_length"]:
        return None
    return first_word


def create_rule(
    transaction: Transaction,
    category: str,
    classification_type: Union[ClassificationType, str] = ClassificationType.EXPENSE,
) -> Optional[ClassificationRule]:
    """
    Create a payee rule from a transaction (the "apply to all" action).

    Returns:
        New ClassificationRule, or None when no payee text can be derived;
        the correction then stays a one-off override
    """
    payee = derive_rule_payee(transaction)
    if payee is None:
        logger.debug("No rule created for transaction %s: no usable payee text", transaction.id)
        return None

    return ClassificationRule(
        payee=payee,
        category=category,
        classification_type=classification_type,
    )


def find_similar_rule(
    payee: str,
    rules: List[ClassificationRule],
    threshold: Optional[int] = None,
) -> Optional[ClassificationRule]:
    """
    Find an existing rule covering the same payee.

    A rule whose payee contains the new payee (case-insensitively) wins.
    Otherwise rapidfuzz looks for a near-duplicate payee spelling.

    Args:
        payee: Payee text of the correction
        rules: Existing rules
        threshold: Minimum similarity (0-100); defaults to ENGINE_CONFIG["rule_fuzzy_threshold"]

    Returns:
        Matching rule or None
    """
    lowered = (payee or "").strip().lower()
    if not lowered or not rules:
        return None

    for rule in rules:
        if lowered in (rule.payee or "").lower():
            return rule

    if threshold is None:
        threshold = ENGINE_CONFIG["rule_fuzzy_threshold"]

    match = fuzzy_best_match(lowered, [rule.payee for rule in rules], threshold=threshold)
    if match is None:
        return None

    _, score, index = match
    logger.debug("Rule payee %r is a near duplicate of %r (score %.1f)", payee, rules[index].payee, score)
    return rules[index]


def upsert_rule_from_correction(
    payee: str,
    category: str,
    rules: List[ClassificationRule],
    classification_type: Union[ClassificationType, str] = ClassificationType.EXPENSE,
) -> ClassificationRule:
    """
    Record a user correction as a payee rule.

    An existing rule for the same payee is updated and reactivated instead
    of adding a duplicate. New rules are appended to ``rules``.

    Returns:
        The updated or created rule
    """
    existing = find_similar_rule(payee, rules)
    if existing is not None:
        existing.category = category
        existing.classification_type = ClassificationType.parse(classification_type)
        existing.is_active = True
        logger.debug("Updated rule %s for payee %r", existing.id, existing.payee)
        return existing

    rule = ClassificationRule(
        payee=payee,
        category=category,
        classification_type=classification_type,
    )
    rules.append(rule)
    logger.debug("Created rule %s for payee %r", rule.id, payee)
    return rule


def count_rule_matches(rule: ClassificationRule, transactions: Iterable[Transaction]) -> int:
    """Count transactions a rule would match."""
    return sum(1 for txn in transactions if rule.matches(txn))


def apply_rule_to_matching(rule: ClassificationRule, transactions: Iterable[Transaction]) -> int:
    """
    Force a rule onto every transaction it matches.

    This is a user-initiated action, so it replaces any existing
    classification regardless of priority.

    Returns:
        Number of transactions updated
    """
    decision = rule.decision()
    count = 0
    for txn in transactions:
        if rule.matches(txn):
            txn.apply_decision(decision)
            count += 1
    return count


def set_manual_category(
    transaction: Transaction,
    category: str,
    classification_type: Optional[Union[ClassificationType, str]] = None,
) -> None:
    """Record a one-off manual category choice."""
    decision = ClassificationDecision(
        category=category,
        reason=REASON_MANUAL,
        priority=ClassificationPriority.MANUAL,
        classification_type=(
            ClassificationType.parse(classification_type)
            if classification_type is not None else None
        ),
    )
    transaction.apply_decision(decision)


def set_ignored(transaction: Transaction, ignored: bool = True) -> None:
    """
    Toggle the ignored flag.

    Ignoring is a manual intervention, so the reason becomes "Manual" and
    no automatic step may override it afterwards. Rule-based
    classifications keep their reason.
    """
    transaction.is_ignored = ignored
    if transaction.priority < ClassificationPriority.MANUAL:
        transaction.classification_reason = REASON_MANUAL
        transaction.classification_priority = ClassificationPriority.MANUAL
