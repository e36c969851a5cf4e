"""
Domain models for the ledger engine.

Accounts, transactions, classification rules and the snapshot records
produced by the aggregators.
"""

from .classification import (
    REASON_AUTO_CC_PAYMENT,
    REASON_AUTO_TRANSFER,
    REASON_DEFAULT,
    REASON_MANUAL,
    REASON_PATTERN_PREFIX,
    REASON_PAYEE_RULE_PREFIX,
    ClassificationDecision,
    ClassificationPriority,
    ClassificationType,
    can_override,
    to_priority,
)
from .account import Account, AccountType, BalanceDelta, LIABILITY_TYPES, calculate_delta
from .transaction import EPOCH, Transaction
from .rules import (
    FIELD_DESCRIPTION,
    FIELD_MEMO,
    FIELD_PAYEE,
    MATCH_FIELDS,
    Category,
    CategoryRule,
    ClassificationRule,
)
from .snapshots import DailySnapshot, MonthlySnapshot

__all__ = [
    "REASON_AUTO_CC_PAYMENT",
    "REASON_AUTO_TRANSFER",
    "REASON_DEFAULT",
    "REASON_MANUAL",
    "REASON_PATTERN_PREFIX",
    "REASON_PAYEE_RULE_PREFIX",
    "ClassificationDecision",
    "ClassificationPriority",
    "ClassificationType",
    "can_override",
    "to_priority",
    "Account",
    "AccountType",
    "BalanceDelta",
    "LIABILITY_TYPES",
    "calculate_delta",
    "EPOCH",
    "Transaction",
    "FIELD_DESCRIPTION",
    "FIELD_MEMO",
    "FIELD_PAYEE",
    "MATCH_FIELDS",
    "Category",
    "CategoryRule",
    "ClassificationRule",
    "DailySnapshot",
    "MonthlySnapshot",
]
