"""
Ledger Engine - Transaction Classification & Reconciliation.

Turns raw bank-account transactions and balances pulled from a read-only
financial-data bridge into classified, reconciled and aggregated facts.

Main Components:
    - patterns: Declarative income, category, transfer and account type tables
    - models: Accounts, transactions, rules and snapshots
    - categorisation: Classification rule engine and spending category matcher
    - income: Income pattern detection
    - transfers: Transfer pairing between the user's own accounts
    - aggregation: Net worth, monthly income, snapshots and trend frames
    - sync: Sync rate limiter, bridge normalization and bridge errors
"""

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

# Models
from .models import (
    Account,
    AccountType,
    Category,
    CategoryRule,
    ClassificationDecision,
    ClassificationPriority,
    ClassificationRule,
    ClassificationType,
    DailySnapshot,
    MonthlySnapshot,
    Transaction,
    can_override,
)

# Classification
from .categorisation import (
    CategoryMatcher,
    ClassificationEngine,
    count_by_priority,
    count_by_reason,
    create_rule,
    set_ignored,
    set_manual_category,
    upsert_rule_from_correction,
)
from .income import IncomeDetector
from .transfers import TransferDetector, TransferMatch

# Aggregation
from .aggregation import (
    NetWorthResult,
    MonthlyIncomeResult,
    SnapshotLedger,
    accounts_for_totals,
    calculate_monthly_income,
    calculate_net_worth,
)

# Sync
from .sync import SyncRateLimiter, ingest_account_set

# Configuration
from .config import ENGINE_CONFIG, SYNC_CONFIG

logger = logging.getLogger(__name__)

__version__ = "1.0.0"
__all__ = [
    # Models
    "Account",
    "AccountType",
    "Category",
    "CategoryRule",
    "ClassificationDecision",
    "ClassificationPriority",
    "ClassificationRule",
    "ClassificationType",
    "DailySnapshot",
    "MonthlySnapshot",
    "Transaction",
    "can_override",
    # Classification
    "CategoryMatcher",
    "ClassificationEngine",
    "IncomeDetector",
    "TransferDetector",
    "TransferMatch",
    "count_by_priority",
    "count_by_reason",
    "create_rule",
    "set_ignored",
    "set_manual_category",
    "upsert_rule_from_correction",
    # Aggregation
    "NetWorthResult",
    "MonthlyIncomeResult",
    "SnapshotLedger",
    "accounts_for_totals",
    "calculate_monthly_income",
    "calculate_net_worth",
    # Sync
    "SyncRateLimiter",
    "ingest_account_set",
    # Configuration
    "ENGINE_CONFIG",
    "SYNC_CONFIG",
    # Main function
    "run_classification_pass",
]


def run_classification_pass(
    transactions: Sequence[Transaction],
    rules: Sequence[ClassificationRule] = (),
    accounts: Optional[Iterable[Account]] = None,
    month: Optional[date] = None,
    categories: Optional[Sequence[Category]] = None,
) -> Dict:
    """
    Main entry point for a classification pass.

    This function orchestrates the complete pipeline:
    1. Pair internal transfers across accounts
    2. Classify every transaction by priority
    3. Assign spending categories
    4. Aggregate net worth and monthly income

    Transactions are mutated in place. The pass is idempotent: running it
    again over its own output changes nothing unless a rule newly matches.

    Args:
        transactions: All known transactions
        rules: Classification rules, first match wins
        accounts: Accounts for the net worth total (skipped if None)
        month: Any date in the month to total (skipped if None)
        categories: User spending categories checked before the curated table

    Returns:
        Dictionary containing:
            - counts: transfers matched, classifications changed, categories assigned
            - by_reason: transaction count per classification reason
            - net_worth: NetWorthResult or None
            - monthly_income: MonthlyIncomeResult or None

    Example:
        >>> txn = Transaction(id="t1", account_id="chk", amount="2500.00",
        ...                   description="PAYROLL DEPOSIT ACME INC")
        >>> result = run_classification_pass([txn])
        >>> txn.category, txn.classification_reason
        ('Income', 'Pattern: Payroll')
    """
    transactions: List[Transaction] = list(transactions)

    engine = ClassificationEngine(categories=categories)
    counts = engine.classify_all(transactions, rules)

    net_worth = None
    if accounts is not None:
        net_worth = calculate_net_worth(accounts_for_totals(accounts))

    monthly_income = None
    if month is not None:
        monthly_income = calculate_monthly_income(transactions, month)

    return {
        "counts": counts,
        "by_reason": count_by_reason(transactions),
        "net_worth": net_worth,
        "monthly_income": monthly_income,
    }
