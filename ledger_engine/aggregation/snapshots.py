"""
Snapshot builders, the snapshot ledger and pandas trend frames.

Daily snapshots record net worth, monthly snapshots record income and
expenses. Once written for a key, a snapshot is never replaced.
"""

import logging
from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

from ..config.engine_config import ENGINE_CONFIG
from ..matching.preprocess import ZERO
from ..models.account import Account, BalanceDelta, calculate_delta
from ..models.snapshots import DailySnapshot, MonthlySnapshot
from ..models.transaction import Transaction
from .monthly_income import calculate_monthly_income
from .months import month_key
from .net_worth import calculate_net_worth

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Uncategorized"

MONTHLY_SUMMARY_COLUMNS = ["month", "income", "expenses", "net"]
NET_WORTH_COLUMNS = ["date", "net_worth", "total_assets", "total_liabilities"]
CATEGORY_BREAKDOWN_COLUMNS = ["category", "total", "count", "share"]


def build_daily_snapshot(accounts: Iterable[Account], on: date) -> DailySnapshot:
    """Net worth snapshot for one day from the accounts that count toward totals."""
    result = calculate_net_worth(
        account for account in accounts if account.counts_toward_totals
    )
    return DailySnapshot(
        date=on,
        net_worth=result.net_worth,
        total_assets=result.total_assets,
        total_liabilities=result.total_liabilities,
    )


def build_monthly_snapshot(
    transactions: Iterable[Transaction],
    year: int,
    month: int,
) -> MonthlySnapshot:
    """Income/expense snapshot for one calendar month."""
    result = calculate_monthly_income(transactions, date(year, month, 1))
    return MonthlySnapshot(
        year=year,
        month=month,
        total_income=result.total_income,
        total_expenses=result.total_expenses,
        net_income=result.net_income,
    )


class SnapshotLedger:
    """In-memory store of write-once daily and monthly snapshots."""

    def __init__(self):
        self._daily: Dict[date, DailySnapshot] = {}
        self._monthly: Dict[Tuple[int, int], MonthlySnapshot] = {}

    def add_daily(self, snapshot: DailySnapshot) -> bool:
        """Store a daily snapshot. Returns False if one exists for that date."""
        if snapshot.date in self._daily:
            logger.debug("Daily snapshot %s already recorded", snapshot.key)
            return False
        self._daily[snapshot.date] = snapshot
        return True

    def add_monthly(self, snapshot: MonthlySnapshot) -> bool:
        """Store a monthly snapshot. Returns False if one exists for that month."""
        key = (snapshot.year, snapshot.month)
        if key in self._monthly:
            logger.debug("Monthly snapshot %s already recorded", snapshot.key)
            return False
        self._monthly[key] = snapshot
        return True

    def record_daily(self, accounts: Iterable[Account], on: date) -> DailySnapshot:
        """Build and store today's snapshot, returning the stored one."""
        if on not in self._daily:
            self.add_daily(build_daily_snapshot(accounts, on))
        return self._daily[on]

    def record_monthly(self, transactions: Iterable[Transaction], year: int, month: int) -> MonthlySnapshot:
        """Build and store a month's snapshot, returning the stored one."""
        key = (year, month)
        if key not in self._monthly:
            self.add_monthly(build_monthly_snapshot(transactions, year, month))
        return self._monthly[key]

    def daily(self, on: date) -> Optional[DailySnapshot]:
        return self._daily.get(on)

    def monthly(self, year: int, month: int) -> Optional[MonthlySnapshot]:
        return self._monthly.get((year, month))

    def daily_range(self, start: date, end: date) -> List[DailySnapshot]:
        """Daily snapshots with start <= date <= end, oldest first."""
        return [
            self._daily[day] for day in sorted(self._daily)
            if start <= day <= end
        ]

    def monthly_range(self, start: date, end: date) -> List[MonthlySnapshot]:
        """Monthly snapshots whose month lies between start's and end's months."""
        first, last = month_key(start), month_key(end)
        return [
            self._monthly[key] for key in sorted(self._monthly)
            if first <= key <= last
        ]

    def latest_daily(self) -> Optional[DailySnapshot]:
        if not self._daily:
            return None
        return self._daily[max(self._daily)]

    def latest_monthly(self) -> Optional[MonthlySnapshot]:
        if not self._monthly:
            return None
        return self._monthly[max(self._monthly)]

    def net_worth_change(self, start: date, end: date) -> Optional[BalanceDelta]:
        """
        Net worth change between the first and last snapshot in a range.

        Returns:
            BalanceDelta, or None with fewer than two snapshots in range
        """
        snapshots = self.daily_range(start, end)
        if len(snapshots) < 2:
            return None
        return calculate_delta(snapshots[-1].net_worth, snapshots[0].net_worth)

    def average_net_income(self, months: Optional[int] = None) -> Decimal:
        """Average net income over the most recent ``months`` snapshots (all if None)."""
        snapshots = [self._monthly[key] for key in sorted(self._monthly)]
        if months is not None:
            snapshots = snapshots[-months:] if months > 0 else []
        if not snapshots:
            return ZERO
        total = sum((snapshot.net_income for snapshot in snapshots), ZERO)
        return total / len(snapshots)

    @property
    def daily_snapshots(self) -> List[DailySnapshot]:
        return [self._daily[day] for day in sorted(self._daily)]

    @property
    def monthly_snapshots(self) -> List[MonthlySnapshot]:
        return [self._monthly[key] for key in sorted(self._monthly)]


# ----------------------------
# Trend frames
# ----------------------------
def monthly_summary_frame(
    transactions: Iterable[Transaction],
    exclude_ignored: bool = False,
) -> pd.DataFrame:
    """
    One row per calendar month present in the transactions.

    Columns: month ("YYYY-MM"), income, expenses, net (floats), oldest first.
    """
    transactions = list(transactions)
    months = sorted({month_key(txn.posted) for txn in transactions})

    rows = []
    for year, month in months:
        result = calculate_monthly_income(
            transactions, date(year, month, 1), exclude_ignored=exclude_ignored
        )
        rows.append({
            "month": "%04d-%02d" % (year, month),
            "income": float(result.total_income),
            "expenses": float(result.total_expenses),
            "net": float(result.net_income),
        })

    return pd.DataFrame(rows, columns=MONTHLY_SUMMARY_COLUMNS)


def net_worth_frame(snapshots: Iterable[DailySnapshot]) -> pd.DataFrame:
    """Net worth trend from daily snapshots, oldest first."""
    rows = [
        {
            "date": pd.Timestamp(snapshot.date),
            "net_worth": float(snapshot.net_worth),
            "total_assets": float(snapshot.total_assets),
            "total_liabilities": float(snapshot.total_liabilities),
        }
        for snapshot in sorted(snapshots, key=lambda s: s.date)
    ]
    return pd.DataFrame(rows, columns=NET_WORTH_COLUMNS)


def category_breakdown(
    transactions: Iterable[Transaction],
    year: int,
    month: int,
) -> pd.DataFrame:
    """
    Spending per category for one month.

    Only outgoing transactions count; transfers, income-like categories and
    ignored transactions are left out. Columns: category, total (float),
    count, share (percent of the month's spending), largest total first.
    """
    totals: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    counts: Dict[str, int] = defaultdict(int)
    excluded = {ENGINE_CONFIG["transfer_category"].lower()}
    excluded.update(ENGINE_CONFIG["income_like_categories"])

    for txn in transactions:
        if month_key(txn.posted) != (year, month):
            continue
        if txn.is_ignored or txn.amount_value >= 0:
            continue
        category = (txn.category or "").strip() or UNCATEGORIZED
        if category.lower() in excluded:
            continue
        totals[category] += abs(txn.amount_value)
        counts[category] += 1

    grand_total = sum(totals.values(), ZERO)
    rows = [
        {
            "category": category,
            "total": float(total),
            "count": counts[category],
            "share": float(total / grand_total * 100) if grand_total else 0.0,
        }
        for category, total in totals.items()
    ]
    frame = pd.DataFrame(rows, columns=CATEGORY_BREAKDOWN_COLUMNS)
    if frame.empty:
        return frame
    return frame.sort_values(["total", "category"], ascending=[False, True]).reset_index(drop=True)
