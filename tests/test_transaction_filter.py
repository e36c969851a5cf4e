"""
Tests for transaction list filtering.
"""

import unittest
from datetime import date, datetime, timezone

from ledger_engine.aggregation.filters import (
    FilterOptions,
    QuickFilter,
    apply_filter,
    apply_quick_filter,
    matches_search,
)
from ledger_engine.models.classification import ClassificationType
from ledger_engine.models.transaction import Transaction

TODAY = date(2026, 3, 15)


def make_txn(id, amount, posted, account_id="checking", **kwargs):
    return Transaction(id=id, account_id=account_id, amount=amount, posted=posted, **kwargs)


class TestTransactionFilter(unittest.TestCase):
    """Test search, account, type, date and quick filters."""

    def setUp(self):
        """Set up test fixtures."""
        self.salary = make_txn("a", "3000.00", datetime(2026, 3, 1, tzinfo=timezone.utc),
                               description="ACME PAYROLL", category="Income")
        self.groceries = make_txn("b", "-45.6", datetime(2026, 3, 3, tzinfo=timezone.utc),
                                  payee="Grocery Mart", category="Groceries")
        self.transfer = make_txn("c", "-500", datetime(2026, 3, 4, tzinfo=timezone.utc),
                                 account_id="savings", category="Transfer")
        self.old_rent = make_txn("d", "-1200", datetime(2026, 2, 1, tzinfo=timezone.utc),
                                 description="RENT FEBRUARY")
        self.ignored = make_txn("e", "-10", datetime(2026, 3, 5, tzinfo=timezone.utc),
                                description="FEE", is_ignored=True)
        self.transactions = [self.salary, self.groceries, self.transfer, self.old_rent, self.ignored]

    def test_search_fields(self):
        self.assertTrue(matches_search(self.groceries, "grocery"))
        self.assertTrue(matches_search(self.groceries, "45.60"))
        self.assertTrue(matches_search(self.groceries, "-45.6"))
        self.assertTrue(matches_search(self.salary, "income"))
        self.assertTrue(matches_search(self.salary, "  "))
        self.assertFalse(matches_search(self.salary, "rent"))

    def test_empty_options_keep_everything(self):
        options = FilterOptions()
        self.assertTrue(options.is_empty)
        self.assertEqual(apply_filter(options, self.transactions, today=TODAY), self.transactions)

    def test_account_filter(self):
        options = FilterOptions(account_ids={"savings"})
        self.assertEqual(apply_filter(options, self.transactions, today=TODAY), [self.transfer])

    def test_classification_type_filter(self):
        options = FilterOptions(classification_types={ClassificationType.EXPENSE})
        self.assertEqual(
            apply_filter(options, self.transactions, today=TODAY),
            [self.groceries, self.old_rent],
        )

    def test_date_range_inclusive(self):
        options = FilterOptions(start=date(2026, 3, 3), end=date(2026, 3, 4))
        self.assertEqual(
            apply_filter(options, self.transactions, today=TODAY),
            [self.groceries, self.transfer],
        )

    def test_quick_filters(self):
        this_month = apply_quick_filter(QuickFilter.THIS_MONTH, self.transactions, today=TODAY)
        self.assertNotIn(self.old_rent, this_month)
        self.assertEqual(len(this_month), 4)

        last_month = apply_quick_filter(QuickFilter.LAST_MONTH, self.transactions, today=TODAY)
        self.assertEqual(last_month, [self.old_rent])

        income = apply_quick_filter(QuickFilter.INCOME_ONLY, self.transactions, today=TODAY)
        self.assertEqual(income, [self.salary])

    def test_filters_combine(self):
        options = FilterOptions(search_text="mart", quick_filter=QuickFilter.EXPENSES_ONLY)
        self.assertFalse(options.is_empty)
        self.assertEqual(apply_filter(options, self.transactions, today=TODAY), [self.groceries])


if __name__ == "__main__":
    unittest.main()
