"""
Monthly Income Calculator.

Totals income and expenses for one calendar month, leaving transfers out of
both sides so money moved between the user's own accounts is not counted.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Union

from ..matching.preprocess import ZERO
from ..models.transaction import Transaction
from .months import month_key, month_start


@dataclass(frozen=True)
class MonthlyIncomeResult:
    """Income, expenses and net income for one month."""
    year: int
    month: int
    total_income: Decimal
    total_expenses: Decimal
    net_income: Decimal

    @property
    def month_start(self) -> date:
        return date(self.year, self.month, 1)


def is_transfer(transaction: Transaction) -> bool:
    return transaction.is_transfer_category


def calculate_monthly_income(
    transactions: Iterable[Transaction],
    month: Union[date, datetime],
    exclude_ignored: bool = False,
) -> MonthlyIncomeResult:
    """
    Calculate income, expenses and net income for a calendar month.

    Pending transactions are included. Transfer-categorized transactions
    (case-insensitive) count toward neither side. Unparseable amounts
    count as zero.

    Args:
        transactions: Transactions to total
        month: Any date inside the target month
        exclude_ignored: Also leave out transactions the user ignored

    Returns:
        MonthlyIncomeResult
    """
    target = month_key(month)
    total_income = ZERO
    total_expenses = ZERO

    for txn in transactions:
        if month_key(txn.posted) != target:
            continue
        if is_transfer(txn):
            continue
        if exclude_ignored and txn.is_ignored:
            continue

        amount = txn.amount_value
        if amount > 0:
            total_income += amount
        elif amount < 0:
            total_expenses += abs(amount)

    start = month_start(month)
    return MonthlyIncomeResult(
        year=start.year,
        month=start.month,
        total_income=total_income,
        total_expenses=total_expenses,
        net_income=total_income - total_expenses,
    )
