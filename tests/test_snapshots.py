"""
Tests for snapshot builders, the snapshot ledger and pandas trend frames.
"""

import unittest
from datetime import date, datetime, timezone
from decimal import Decimal

from ledger_engine.aggregation.snapshots import (
    SnapshotLedger,
    build_daily_snapshot,
    build_monthly_snapshot,
    category_breakdown,
    monthly_summary_frame,
    net_worth_frame,
)
from ledger_engine.models.account import Account, AccountType
from ledger_engine.models.snapshots import DailySnapshot, MonthlySnapshot
from ledger_engine.models.transaction import Transaction


def make_txn(id, amount, posted, category=None, **kwargs):
    return Transaction(id=id, account_id="checking", amount=amount,
                       posted=posted, category=category, **kwargs)


def utc(year, month, day):
    return datetime(year, month, day, 12, tzinfo=timezone.utc)


def daily(day, net_worth):
    return DailySnapshot(date=day, net_worth=Decimal(net_worth),
                         total_assets=Decimal(net_worth), total_liabilities=Decimal("0"))


def monthly(year, month, net):
    return MonthlySnapshot(year=year, month=month, total_income=Decimal(net),
                           total_expenses=Decimal("0"), net_income=Decimal(net))


class TestSnapshotBuilders(unittest.TestCase):
    """Test building snapshots from accounts and transactions."""

    def test_daily_snapshot_skips_hidden_and_tracking(self):
        accounts = [
            Account(id="a", name="Checking", balance="1000", account_type=AccountType.CHECKING),
            Account(id="b", name="Card", balance="-250", account_type=AccountType.CREDIT_CARD),
            Account(id="c", name="Old", balance="999", account_type=AccountType.SAVINGS, is_hidden=True),
            Account(id="d", name="401k", balance="5000", account_type=AccountType.INVESTMENT,
                    is_tracking_only=True),
        ]
        snapshot = build_daily_snapshot(accounts, date(2026, 3, 1))
        self.assertEqual(snapshot.net_worth, Decimal("750"))
        self.assertEqual(snapshot.total_liabilities, Decimal("250"))
        self.assertEqual(snapshot.key, "2026-03-01")

    def test_monthly_snapshot(self):
        transactions = [
            make_txn("a", "2000", utc(2026, 3, 1)),
            make_txn("b", "-500", utc(2026, 3, 2)),
            make_txn("c", "-100", utc(2026, 3, 3), "Transfer"),
        ]
        snapshot = build_monthly_snapshot(transactions, 2026, 3)
        self.assertEqual(snapshot.net_income, Decimal("1500"))
        self.assertEqual(snapshot.key, "2026-03")
        self.assertEqual(snapshot.savings_rate, Decimal("75"))

    def test_savings_rate_without_income(self):
        self.assertEqual(monthly(2026, 3, "0").savings_rate, Decimal("0"))


class TestSnapshotLedger(unittest.TestCase):
    """Test the write-once snapshot ledger."""

    def setUp(self):
        """Set up test fixtures."""
        self.ledger = SnapshotLedger()
        for day, value in ((1, "1000"), (2, "1100"), (5, "1210")):
            self.ledger.add_daily(daily(date(2026, 3, day), value))
        for month, net in ((1, "100"), (2, "300"), (3, "-100")):
            self.ledger.add_monthly(monthly(2026, month, net))

    def test_existing_key_not_overwritten(self):
        """Test that a snapshot is never replaced once written."""
        self.assertFalse(self.ledger.add_daily(daily(date(2026, 3, 1), "0")))
        self.assertEqual(self.ledger.daily(date(2026, 3, 1)).net_worth, Decimal("1000"))
        self.assertFalse(self.ledger.add_monthly(monthly(2026, 1, "0")))
        self.assertEqual(self.ledger.monthly(2026, 1).net_income, Decimal("100"))

    def test_record_daily_returns_stored(self):
        accounts = [Account(id="a", name="x", balance="1", account_type=AccountType.CHECKING)]
        stored = self.ledger.record_daily(accounts, date(2026, 3, 1))
        self.assertEqual(stored.net_worth, Decimal("1000"))
        fresh = self.ledger.record_daily(accounts, date(2026, 3, 6))
        self.assertEqual(fresh.net_worth, Decimal("1"))

    def test_record_monthly_builds_missing_month(self):
        transactions = [make_txn("a", "800", utc(2026, 4, 2)), make_txn("b", "-200", utc(2026, 4, 9))]
        snapshot = self.ledger.record_monthly(transactions, 2026, 4)
        self.assertEqual(snapshot.net_income, Decimal("600"))
        self.assertEqual(self.ledger.record_monthly([], 2026, 4).net_income, Decimal("600"))

    def test_snapshots_listed_oldest_first(self):
        self.assertEqual([s.date.day for s in self.ledger.daily_snapshots], [1, 2, 5])
        self.assertEqual([s.month for s in self.ledger.monthly_snapshots], [1, 2, 3])

    def test_ranges_and_latest(self):
        days = [s.date.day for s in self.ledger.daily_range(date(2026, 3, 2), date(2026, 3, 31))]
        self.assertEqual(days, [2, 5])
        months = [s.month for s in self.ledger.monthly_range(date(2026, 2, 15), date(2026, 3, 1))]
        self.assertEqual(months, [2, 3])
        self.assertEqual(self.ledger.latest_daily().date, date(2026, 3, 5))
        self.assertEqual(self.ledger.latest_monthly().month, 3)

    def test_net_worth_change(self):
        delta = self.ledger.net_worth_change(date(2026, 3, 1), date(2026, 3, 31))
        self.assertEqual(delta.amount, Decimal("210"))
        self.assertEqual(delta.percentage_change, Decimal("21"))
        self.assertIsNone(self.ledger.net_worth_change(date(2026, 3, 5), date(2026, 3, 31)))

    def test_average_net_income(self):
        self.assertEqual(self.ledger.average_net_income(), Decimal("100"))
        self.assertEqual(self.ledger.average_net_income(months=2), Decimal("100"))
        self.assertEqual(self.ledger.average_net_income(months=1), Decimal("-100"))
        self.assertEqual(SnapshotLedger().average_net_income(), Decimal("0"))

    def test_empty_ledger(self):
        ledger = SnapshotLedger()
        self.assertIsNone(ledger.latest_daily())
        self.assertIsNone(ledger.latest_monthly())


class TestTrendFrames(unittest.TestCase):
    """Test pandas trend frames."""

    def setUp(self):
        """Set up test fixtures."""
        self.transactions = [
            make_txn("a", "2000", utc(2026, 2, 1), "Income"),
            make_txn("b", "-300", utc(2026, 2, 3), "Groceries"),
            make_txn("c", "-100", utc(2026, 3, 3), "Dining"),
            make_txn("d", "-300", utc(2026, 3, 4), "Groceries"),
            make_txn("e", "-500", utc(2026, 3, 5), "Transfer"),
            make_txn("f", "-100", utc(2026, 3, 6), None),
            make_txn("g", "-999", utc(2026, 3, 7), "Dining", is_ignored=True),
            make_txn("h", "50", utc(2026, 3, 8), "Refund"),
        ]

    def test_monthly_summary_frame(self):
        frame = monthly_summary_frame(self.transactions)
        self.assertEqual(list(frame.columns), ["month", "income", "expenses", "net"])
        self.assertEqual(list(frame["month"]), ["2026-02", "2026-03"])
        self.assertAlmostEqual(frame.iloc[0]["net"], 1700.0)
        self.assertAlmostEqual(frame.iloc[1]["expenses"], 1499.0)

    def test_monthly_summary_frame_excluding_ignored(self):
        frame = monthly_summary_frame(self.transactions, exclude_ignored=True)
        self.assertAlmostEqual(frame.iloc[1]["expenses"], 500.0)

    def test_empty_frames_keep_columns(self):
        self.assertEqual(list(monthly_summary_frame([]).columns), ["month", "income", "expenses", "net"])
        self.assertTrue(net_worth_frame([]).empty)
        self.assertEqual(list(category_breakdown([], 2026, 3).columns), ["category", "total", "count", "share"])

    def test_net_worth_frame_sorted(self):
        frame = net_worth_frame([daily(date(2026, 3, 2), "20"), daily(date(2026, 3, 1), "10")])
        self.assertEqual(list(frame["net_worth"]), [10.0, 20.0])

    def test_category_breakdown(self):
        """Test spending share per category for one month."""
        frame = category_breakdown(self.transactions, 2026, 3)
        self.assertEqual(list(frame["category"]), ["Groceries", "Dining", "Uncategorized"])
        self.assertEqual(list(frame["count"]), [1, 1, 1])
        self.assertAlmostEqual(frame["share"].sum(), 100.0)
        self.assertAlmostEqual(frame.iloc[0]["share"], 60.0)


if __name__ == "__main__":
    unittest.main()
