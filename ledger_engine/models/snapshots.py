"""
Immutable point-in-time aggregates stored for trend charts.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class DailySnapshot:
    """Net worth and its asset/liability split for one calendar day."""
    date: date
    net_worth: Decimal
    total_assets: Decimal
    total_liabilities: Decimal

    @property
    def key(self) -> str:
        return self.date.isoformat()


@dataclass(frozen=True)
class MonthlySnapshot:
    """Income, expenses and net income for one calendar month."""
    year: int
    month: int
    total_income: Decimal
    total_expenses: Decimal
    net_income: Decimal

    @property
    def key(self) -> str:
        return "%04d-%02d" % (self.year, self.month)

    @property
    def savings_rate(self) -> Decimal:
        """Share of income kept, as a percentage (0 when there is no income)."""
        if self.total_income <= 0:
            return Decimal("0")
        return self.net_income / self.total_income * 100
