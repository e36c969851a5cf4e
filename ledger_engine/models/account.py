"""
Account model for linked financial accounts.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from ..matching.preprocess import parse_decimal


class AccountType(Enum):
    """Account type tag inferred once at ingestion."""
    CHECKING = "checking"
    SAVINGS = "savings"
    CREDIT_CARD = "credit card"
    INVESTMENT = "investment"
    BROKERAGE = "brokerage"
    LOAN = "loan"
    MORTGAGE = "mortgage"
    UNKNOWN = "unknown"

    @property
    def display_name(self) -> str:
        if self is AccountType.UNKNOWN:
            return "Other"
        return self.value.title()

    @property
    def is_liability(self) -> bool:
        return self in LIABILITY_TYPES

    @property
    def is_asset(self) -> bool:
        return not self.is_liability

    @classmethod
    def parse(cls, value: Union[str, "AccountType", None]) -> "AccountType":
        """Parse a stored account type, falling back to UNKNOWN."""
        if isinstance(value, cls):
            return value
        normalized = str(value or "").strip().lower().replace("_", " ").replace("-", " ")
        if normalized == "creditcard":
            normalized = "credit card"
        try:
            return cls(normalized)
        except ValueError:
            return cls.UNKNOWN


LIABILITY_TYPES = frozenset({AccountType.CREDIT_CARD, AccountType.LOAN, AccountType.MORTGAGE})


@dataclass(frozen=True)
class BalanceDelta:
    """Change between a current and a previous value."""
    amount: Decimal
    is_positive: bool
    percentage_change: Optional[Decimal]

    @property
    def is_zero(self) -> bool:
        return self.amount == 0


def calculate_delta(current: Decimal, previous: Decimal) -> BalanceDelta:
    """
    Calculate the change between two values.

    Args:
        current: Current value
        previous: Previous value

    Returns:
        BalanceDelta; percentage_change is None when previous is zero
    """
    current = parse_decimal(current)
    previous = parse_decimal(previous)
    amount = current - previous

    percentage_change = None
    if previous != 0:
        percentage_change = amount / previous * 100

    return BalanceDelta(
        amount=amount,
        is_positive=amount >= 0,
        percentage_change=percentage_change,
    )


@dataclass
class Account:
    """One linked financial account."""
    id: str
    name: str
    balance: Union[str, Decimal] = "0"
    organization_name: Optional[str] = None
    organization_id: Optional[str] = None
    currency: Optional[str] = "USD"
    available_balance: Optional[Union[str, Decimal]] = None
    balance_date: Optional[datetime] = None
    account_type: AccountType = AccountType.UNKNOWN
    previous_balance: Optional[Union[str, Decimal]] = None

    # User-owned fields, never touched by a refresh
    nickname: Optional[str] = None
    is_hidden: bool = False
    is_tracking_only: bool = False
    sort_order: int = 0

    def __post_init__(self):
        self.account_type = AccountType.parse(self.account_type)

    @property
    def display_name(self) -> str:
        if self.nickname and self.nickname.strip():
            return self.nickname.strip()
        return self.name

    @property
    def balance_value(self) -> Decimal:
        return parse_decimal(self.balance)

    @property
    def available_balance_value(self) -> Optional[Decimal]:
        if self.available_balance is None:
            return None
        return parse_decimal(self.available_balance)

    @property
    def previous_balance_value(self) -> Optional[Decimal]:
        if self.previous_balance is None:
            return None
        return parse_decimal(self.previous_balance)

    @property
    def is_asset(self) -> bool:
        return self.account_type.is_asset

    @property
    def is_liability(self) -> bool:
        return self.account_type.is_liability

    @property
    def counts_toward_totals(self) -> bool:
        """Hidden and tracking-only accounts are excluded from totals."""
        return not self.is_hidden and not self.is_tracking_only

    def balance_delta(self) -> Optional[BalanceDelta]:
        """Change since the previous refresh, or None without a previous balance."""
        previous = self.previous_balance_value
        if previous is None:
            return None
        return calculate_delta(self.balance_value, previous)
