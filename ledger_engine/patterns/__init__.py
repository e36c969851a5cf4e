"""
Transaction Pattern Definitions for the Ledger Classification Engine.

Contains all keyword and regex patterns for:
- Income detection (payroll, benefits, dividends, refunds)
- Spending categories (dining, groceries, shopping, ...)
- Credit card payments and transfers
- Account type inference at ingestion
"""

from .transaction_patterns import (
    INCOME_PATTERNS,
    CATEGORY_PATTERNS,
    CC_PAYMENT_PATTERNS,
    TRANSFER_KEYWORDS,
    ACCOUNT_TYPE_KEYWORDS,
)

__all__ = [
    "INCOME_PATTERNS",
    "CATEGORY_PATTERNS",
    "CC_PAYMENT_PATTERNS",
    "TRANSFER_KEYWORDS",
    "ACCOUNT_TYPE_KEYWORDS",
]
