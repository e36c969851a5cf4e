"""
Tests for rule creation from user corrections and manual interventions.
"""

import unittest

from ledger_engine.categorisation.engine import ClassificationEngine
from ledger_engine.categorisation.rules import (
    apply_rule_to_matching,
    count_rule_matches,
    create_rule,
    derive_rule_payee,
    find_similar_rule,
    set_ignored,
    set_manual_category,
    upsert_rule_from_correction,
)
from ledger_engine.models.classification import ClassificationPriority, ClassificationType
from ledger_engine.models.rules import ClassificationRule
from ledger_engine.models.transaction import Transaction


def make_txn(amount, description="", payee=None, id="t1", **kwargs):
    return Transaction(id=id, account_id="checking", amount=amount,
                       description=description, payee=payee, **kwargs)


class TestCreateRule(unittest.TestCase):
    """Test deriving reusable rules from a transaction."""

    def test_payee_used_verbatim(self):
        """Test that the transaction payee is preferred."""
        txn = make_txn("-5", "SQ *BLUE BOTTLE 123", payee="Blue Bottle Coffee")
        rule = create_rule(txn, "Coffee")
        self.assertEqual(rule.payee, "Blue Bottle Coffee")
        self.assertEqual(rule.category, "Coffee")
        self.assertEqual(rule.classification_type, ClassificationType.EXPENSE)
        self.assertTrue(rule.is_user_created)

    def test_first_description_word_fallback(self):
        txn = make_txn("-5", "STARBUCKS STORE 1234")
        self.assertEqual(derive_rule_payee(txn), "STARBUCKS")

    def test_short_first_word_rejected(self):
        """Test that 1-2 character words never become rules."""
        self.assertIsNone(create_rule(make_txn("-5", "SQ *BLUE BOTTLE"), "Coffee"))
        self.assertIsNone(create_rule(make_txn("-5", ""), "Coffee"))
        self.assertIsNotNone(create_rule(make_txn("-5", "ATM WITHDRAWAL"), "Cash"))

    def test_blank_payee_falls_back(self):
        txn = make_txn("-5", "NETFLIX.COM", payee="  ")
        self.assertEqual(derive_rule_payee(txn), "NETFLIX.COM")

    def test_classification_type_from_string(self):
        rule = create_rule(make_txn("5", "ACME PAYROLL"), "Salary", "income")
        self.assertEqual(rule.classification_type, ClassificationType.INCOME)


class TestUpsertRule(unittest.TestCase):
    """Test recording corrections without duplicating rules."""

    def setUp(self):
        """Set up test fixtures."""
        self.rules = [
            ClassificationRule(payee="Netflix Inc", category="Entertainment", is_active=False),
            ClassificationRule(payee="Whole Foods Market", category="Groceries"),
        ]

    def test_contained_payee_updates_existing(self):
        """Test that a payee contained in an existing rule updates that rule."""
        rule = upsert_rule_from_correction("netflix", "Streaming", self.rules)
        self.assertIs(rule, self.rules[0])
        self.assertEqual(rule.category, "Streaming")
        self.assertTrue(rule.is_active)
        self.assertEqual(len(self.rules), 2)

    def test_near_duplicate_updates_existing(self):
        """Test that a near-duplicate spelling is caught by fuzzy matching."""
        rule = upsert_rule_from_correction("Whole Foods Markets", "Food", self.rules)
        self.assertIs(rule, self.rules[1])
        self.assertEqual(rule.category, "Food")

    def test_new_payee_appends(self):
        rule = upsert_rule_from_correction("Spotify", "Music", self.rules, "expense")
        self.assertEqual(len(self.rules), 3)
        self.assertIs(self.rules[-1], rule)

    def test_find_similar_rule_none(self):
        self.assertIsNone(find_similar_rule("Shell", self.rules))
        self.assertIsNone(find_similar_rule("", self.rules))
        self.assertIsNone(find_similar_rule("Netflix", []))


class TestApplyRule(unittest.TestCase):
    """Test the apply-to-all action."""

    def setUp(self):
        """Set up test fixtures."""
        self.rule = ClassificationRule(payee="uber", category="Rideshare")
        self.transactions = [
            make_txn("-20", "UBER *TRIP", id="a"),
            make_txn("-30", "UBER EATS", id="b", category="Dinner", classification_reason="Manual"),
            make_txn("-40", "LYFT RIDE", id="c"),
        ]

    def test_count_rule_matches(self):
        self.assertEqual(count_rule_matches(self.rule, self.transactions), 2)

    def test_apply_forces_over_manual(self):
        """Test that a user-initiated apply-to-all replaces manual choices."""
        self.assertEqual(apply_rule_to_matching(self.rule, self.transactions), 2)
        self.assertEqual(self.transactions[1].category, "Rideshare")
        self.assertEqual(self.transactions[1].classification_reason, "Payee Rule: uber")
        self.assertIsNone(self.transactions[2].category)


class TestManualIntervention(unittest.TestCase):
    """Test manual category and ignore toggles."""

    def setUp(self):
        """Set up test fixtures."""
        self.engine = ClassificationEngine()

    def test_manual_category(self):
        txn = make_txn("2500", "PAYROLL DEPOSIT")
        set_manual_category(txn, "Gift", ClassificationType.INCOME)
        self.assertEqual(txn.classification_reason, "Manual")
        self.assertEqual(txn.priority, ClassificationPriority.MANUAL)
        self.assertEqual(txn.classification_type, ClassificationType.INCOME)

        self.engine.classify(txn)
        self.assertEqual(txn.category, "Gift")

    def test_set_ignored(self):
        """Test that ignoring is a manual intervention automatic steps respect."""
        txn = make_txn("2500", "PAYROLL DEPOSIT")
        set_ignored(txn)
        self.assertTrue(txn.is_ignored)
        self.assertEqual(txn.classification_reason, "Manual")
        self.assertEqual(txn.classification_type, ClassificationType.IGNORED)

        self.engine.classify(txn)
        self.assertNotEqual(txn.classification_reason, "Pattern: Payroll")

    def test_set_ignored_keeps_rule_reason(self):
        txn = make_txn("-5", "NETFLIX", classification_reason="Payee Rule: Netflix")
        set_ignored(txn)
        self.assertEqual(txn.classification_reason, "Payee Rule: Netflix")

    def test_unignore(self):
        txn = make_txn("-5", "NETFLIX")
        set_ignored(txn)
        set_ignored(txn, False)
        self.assertFalse(txn.is_ignored)


if __name__ == "__main__":
    unittest.main()
