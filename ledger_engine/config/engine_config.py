"""
Engine configuration for transaction classification and reconciliation.
Contains thresholds, canonical category labels and sync quota settings.
"""

# Classification Engine Configuration
ENGINE_CONFIG = {
    # Canonical category labels written by the engine
    "income_category": "Income",
    "expense_category": "Expense",
    "transfer_category": "Transfer",

    # Transfer pairing window (calendar days, inclusive)
    "transfer_max_days": 3,

    # Rule creation: minimum length of a description word used as payee text
    "rule_min_word_length": 3,

    # Near-duplicate rule detection (rapidfuzz ratio, 0-100)
    "rule_fuzzy_threshold": 90,

    # Categories treated as income when deriving the classification type
    "income_like_categories": ["income", "salary", "payroll"],
}

# Sync Quota Configuration
# The bridge allows 24 refreshes per rolling 24 hours
SYNC_CONFIG = {
    "max_daily_syncs": 24,
    "reset_interval_seconds": 24 * 60 * 60,
}
