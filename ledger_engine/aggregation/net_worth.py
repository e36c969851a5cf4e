"""
Net Worth Calculator.

Net worth is the sum of asset balances minus the absolute value of
liability balances. Hidden accounts never count. Tracking-only accounts
are filtered by the caller (see accounts_for_totals) so the calculator
works on exactly the accounts it is given.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List

from ..matching.preprocess import ZERO
from ..models.account import Account, BalanceDelta, calculate_delta

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NetWorthResult:
    """Net worth with its asset/liability split."""
    net_worth: Decimal
    total_assets: Decimal
    total_liabilities: Decimal

    def delta_from(self, previous: "NetWorthResult") -> BalanceDelta:
        """Change in net worth since a previous result."""
        return calculate_delta(self.net_worth, previous.net_worth)


def accounts_for_totals(accounts: Iterable[Account]) -> List[Account]:
    """Drop hidden and tracking-only accounts before totalling."""
    return [account for account in accounts if account.counts_toward_totals]


def calculate_net_worth(accounts: Iterable[Account]) -> NetWorthResult:
    """
    Calculate net worth from account balances.

    Liability accounts (credit card, loan, mortgage) contribute the absolute
    value of their balance to total liabilities regardless of sign. A
    negative balance on an asset account is an overdraft and counts as a
    liability too.

    Args:
        accounts: Accounts to total; hidden accounts are skipped

    Returns:
        NetWorthResult
    """
    total_assets = ZERO
    total_liabilities = ZERO

    for account in accounts:
        if account.is_hidden:
            continue

        balance = account.balance_value
        if account.is_liability:
            total_liabilities += abs(balance)
        elif balance >= 0:
            total_assets += balance
        else:
            logger.debug("Account %s overdrawn, counted as liability", account.id)
            total_liabilities += abs(balance)

    return NetWorthResult(
        net_worth=total_assets - total_liabilities,
        total_assets=total_assets,
        total_liabilities=total_liabilities,
    )


def net_worth_delta(current: Decimal, previous: Decimal) -> BalanceDelta:
    """
    Change between two net worth totals.

    Example:
        >>> net_worth_delta(Decimal("1100"), Decimal("1000")).percentage_change
        Decimal("10")
    """
    return calculate_delta(current, previous)
