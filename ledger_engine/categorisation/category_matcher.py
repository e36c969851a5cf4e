"""
Spending Category Matcher.

Assigns a spending category (Dining, Groceries, ...) to outgoing
transactions. User categories with their own CategoryRules are consulted
first, then the curated keyword table in iteration order. Only the category
label is written; the classification reason is left to the rule engine.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..config.engine_config import ENGINE_CONFIG
from ..matching.pattern_matching import compile_keyword_table, match_keyword_table
from ..matching.preprocess import combine_fields
from ..models.classification import ClassificationPriority
from ..models.rules import Category
from ..models.transaction import Transaction
from ..patterns.transaction_patterns import CATEGORY_PATTERNS

logger = logging.getLogger(__name__)


class CategoryMatcher:
    """Auto-categorizes outgoing transactions from merchant patterns."""

    def __init__(
        self,
        categories: Optional[Sequence[Category]] = None,
        patterns: Optional[Dict[str, Sequence[str]]] = None,
    ):
        """
        Initialize the matcher.

        Args:
            categories: User-defined categories, checked before the curated table
            patterns: Ordered {category: [keyword, ...]}; defaults to CATEGORY_PATTERNS
        """
        self.categories = list(categories or [])
        self.patterns = dict(patterns if patterns is not None else CATEGORY_PATTERNS)
        self._table = compile_keyword_table(self.patterns)

    def is_candidate(self, transaction: Transaction) -> bool:
        """
        Check whether a transaction may receive a spending category.

        Manual and rule-based classifications are never touched, nor are
        transfers, income-tagged transactions or credits.
        """
        if transaction.priority >= ClassificationPriority.MANUAL:
            return False

        category = (transaction.category or "").strip().lower()
        if category == ENGINE_CONFIG["transfer_category"].lower():
            return False
        if category in ENGINE_CONFIG["income_like_categories"]:
            return False

        return transaction.amount_value < 0

    def match_text(self, text: Optional[str]) -> Optional[Tuple[str, str]]:
        """
        Match free text against the curated table.

        Returns:
            Tuple of (category, keyword) or None

        Example:
            >>> CategoryMatcher().match_text("AMAZON.COM*123ABC")
            ("Shopping", "amazon")
        """
        return match_keyword_table((text or "").lower(), self._table)

    def detect(self, transaction: Transaction) -> Optional[str]:
        """
        Detect the spending category for a transaction.

        Args:
            transaction: Transaction to categorize

        Returns:
            Category name, or None if the transaction is not eligible or nothing matches
        """
        if not self.is_candidate(transaction):
            return None

        for category in self.categories:
            if category.matches(transaction):
                logger.debug("User category %r matched transaction %s", category.name, transaction.id)
                return category.name

        text = combine_fields(
            transaction.description,
            transaction.payee,
            transaction.memo,
        )
        match = self.match_text(text)
        if match is None:
            return None

        category_name, keyword = match
        logger.debug(
            "Category %r matched transaction %s on %r",
            category_name, transaction.id, keyword,
        )
        return category_name

    def apply(self, transaction: Transaction) -> bool:
        """Set the detected category on a transaction. Returns True if changed."""
        category = self.detect(transaction)
        if category is None or transaction.category == category:
            return False
        transaction.category = category
        return True

    def apply_all(self, transactions: Iterable[Transaction]) -> int:
        """Categorize every eligible transaction. Returns the number changed."""
        return sum(1 for txn in transactions if self.apply(txn))

    def all_categories(self) -> List[str]:
        """User category names followed by the curated category names."""
        names = [category.name for category in self.categories]
        for name in self.patterns:
            if name not in names:
                names.append(name)
        return names

    def patterns_for(self, category: str) -> List[str]:
        """Curated keywords for a category (case-insensitive name), empty if unknown."""
        for name, keywords in self.patterns.items():
            if name.lower() == category.lower():
                return list(keywords)
        return []
