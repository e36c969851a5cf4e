"""
Calendar month helpers used by the monthly aggregations and trend views.
"""

from datetime import date, datetime
from typing import Optional, Tuple, Union

DateLike = Union[date, datetime]


def month_key(value: DateLike) -> Tuple[int, int]:
    """(year, month) of a date or datetime."""
    return (value.year, value.month)


def month_start(value: DateLike) -> date:
    """First day of the month containing value."""
    return date(value.year, value.month, 1)


def previous_month(value: DateLike) -> date:
    """First day of the month before value's month."""
    if value.month == 1:
        return date(value.year - 1, 12, 1)
    return date(value.year, value.month - 1, 1)


def next_month(value: DateLike) -> date:
    """First day of the month after value's month."""
    if value.month == 12:
        return date(value.year + 1, 1, 1)
    return date(value.year, value.month + 1, 1)


def is_same_month(first: DateLike, second: DateLike) -> bool:
    return month_key(first) == month_key(second)


def is_current_month(value: DateLike, today: Optional[date] = None) -> bool:
    return is_same_month(value, today or date.today())


def is_future_month(value: DateLike, today: Optional[date] = None) -> bool:
    """True if value falls in a month after today's month."""
    return month_key(value) > month_key(today or date.today())


def month_label(value: DateLike) -> str:
    """Display label such as "October 2026"."""
    return month_start(value).strftime("%B %Y")
