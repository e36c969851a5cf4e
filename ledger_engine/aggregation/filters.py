"""
Transaction filtering for list views: free-text search, account and
classification filters, date ranges and quick filters.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable, List, Optional, Set

from ..models.classification import ClassificationType
from ..models.transaction import Transaction
from .months import month_key, previous_month


class QuickFilter(Enum):
    ALL = "All"
    THIS_MONTH = "This Month"
    LAST_MONTH = "Last Month"
    INCOME_ONLY = "Income"
    EXPENSES_ONLY = "Expenses"


@dataclass
class FilterOptions:
    """Filter settings; empty sets and None dates mean "no restriction"."""
    search_text: str = ""
    account_ids: Set[str] = field(default_factory=set)
    classification_types: Set[ClassificationType] = field(default_factory=set)
    start: Optional[date] = None
    end: Optional[date] = None
    quick_filter: QuickFilter = QuickFilter.ALL

    @property
    def is_empty(self) -> bool:
        return (
            not self.search_text.strip()
            and not self.account_ids
            and not self.classification_types
            and self.start is None
            and self.end is None
            and self.quick_filter is QuickFilter.ALL
        )


def matches_search(transaction: Transaction, text: str) -> bool:
    """
    Case-insensitive search over payee, description, amount and category.

    The amount is searched both as stored and formatted to two decimals,
    so "45.6" finds "-45.60" stored as "-45.6".
    """
    needle = (text or "").strip().lower()
    if not needle:
        return True

    haystacks = [
        transaction.payee or "",
        transaction.description or "",
        str(transaction.amount),
        "%.2f" % transaction.amount_value,
        transaction.category or "",
    ]
    return any(needle in haystack.lower() for haystack in haystacks)


def apply_quick_filter(
    quick_filter: QuickFilter,
    transactions: Iterable[Transaction],
    today: Optional[date] = None,
) -> List[Transaction]:
    today = today or date.today()
    transactions = list(transactions)

    if quick_filter is QuickFilter.THIS_MONTH:
        return [txn for txn in transactions if month_key(txn.posted) == month_key(today)]
    if quick_filter is QuickFilter.LAST_MONTH:
        last = month_key(previous_month(today))
        return [txn for txn in transactions if month_key(txn.posted) == last]
    if quick_filter is QuickFilter.INCOME_ONLY:
        return [txn for txn in transactions if txn.classification_type is ClassificationType.INCOME]
    if quick_filter is QuickFilter.EXPENSES_ONLY:
        return [txn for txn in transactions if txn.classification_type is ClassificationType.EXPENSE]
    return transactions


def apply_filter(
    options: FilterOptions,
    transactions: Iterable[Transaction],
    today: Optional[date] = None,
) -> List[Transaction]:
    """
    Apply every filter in options, preserving input order.

    Args:
        options: Filter settings
        transactions: Transactions to filter
        today: Reference date for the month quick filters (defaults to today)

    Returns:
        Filtered list of transactions
    """
    result = list(transactions)

    if options.search_text.strip():
        result = [txn for txn in result if matches_search(txn, options.search_text)]

    if options.account_ids:
        result = [txn for txn in result if txn.account_id in options.account_ids]

    if options.classification_types:
        result = [txn for txn in result if txn.classification_type in options.classification_types]

    if options.start is not None:
        result = [txn for txn in result if txn.posted.date() >= options.start]
    if options.end is not None:
        result = [txn for txn in result if txn.posted.date() <= options.end]

    return apply_quick_filter(options.quick_filter, result, today=today)
