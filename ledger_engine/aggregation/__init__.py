"""
Aggregation module for the ledger engine.

Contains:
- Net worth and monthly income calculators
- Snapshot builders, the snapshot ledger and pandas trend frames
- Month navigation helpers
- Transaction filtering
"""

from .net_worth import (
    NetWorthResult,
    accounts_for_totals,
    calculate_net_worth,
    net_worth_delta,
)
from .monthly_income import MonthlyIncomeResult, calculate_monthly_income, is_transfer
from .months import (
    is_current_month,
    is_future_month,
    is_same_month,
    month_key,
    month_label,
    month_start,
    next_month,
    previous_month,
)
from .snapshots import (
    SnapshotLedger,
    build_daily_snapshot,
    build_monthly_snapshot,
    category_breakdown,
    monthly_summary_frame,
    net_worth_frame,
)
from .filters import FilterOptions, QuickFilter, apply_filter, apply_quick_filter, matches_search

__all__ = [
    "NetWorthResult",
    "accounts_for_totals",
    "calculate_net_worth",
    "net_worth_delta",
    "MonthlyIncomeResult",
    "calculate_monthly_income",
    "is_transfer",
    "is_current_month",
    "is_future_month",
    "is_same_month",
    "month_key",
    "month_label",
    "month_start",
    "next_month",
    "previous_month",
    "SnapshotLedger",
    "build_daily_snapshot",
    "build_monthly_snapshot",
    "category_breakdown",
    "monthly_summary_frame",
    "net_worth_frame",
    "FilterOptions",
    "QuickFilter",
    "apply_filter",
    "apply_quick_filter",
    "matches_search",
]
