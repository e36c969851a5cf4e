"""
Preprocessing utilities for transaction classification.
Handles text normalization, field combination and lenient decimal parsing.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional, Union


ZERO = Decimal("0")


def normalize_text(text: Optional[str]) -> str:
    """
    Normalize text for matching.

    Args:
        text: Raw text to normalize

    Returns:
        Lower-case, stripped text ("" for None)
    """
    if not text:
        return ""
    return str(text).lower().strip()


def combine_fields(*fields: Optional[str]) -> str:
    """
    Combine free-text fields into one normalized string.

    Empty and None fields are skipped; the rest are joined with single spaces
    in the order given.

    Example:
        >>> combine_fields("PAYROLL ACME", None, "Memo")
        "payroll acme memo"
    """
    parts = [normalize_text(field) for field in fields]
    return " ".join(part for part in parts if part)


def parse_decimal(value: Union[str, int, float, Decimal, None]) -> Decimal:
    """
    Parse a monetary value, coercing anything unusable to zero.

    A corrupt amount on one record must never abort a batch, so invalid
    strings, None, NaN and infinities all become Decimal("0").

    Args:
        value: Raw amount (string from the bridge, or a numeric type)

    Returns:
        Parsed Decimal, or Decimal("0") if the value cannot be parsed
    """
    if value is None or isinstance(value, bool):
        return ZERO

    if isinstance(value, Decimal):
        result = value
    else:
        text = str(value).strip().replace(",", "")
        if not text:
            return ZERO
        try:
            result = Decimal(text)
        except (InvalidOperation, ValueError):
            return ZERO

    if not result.is_finite():
        return ZERO
    return result
