"""
Transfer Detection Module.

Pairs an outgoing and an incoming transaction on two different accounts
that represent one internal movement of money, and links both sides.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Set

from ..config.engine_config import ENGINE_CONFIG
from ..matching.pattern_matching import match_keywords
from ..models.classification import (
    REASON_AUTO_TRANSFER,
    REASON_DEFAULT,
    ClassificationDecision,
    ClassificationPriority,
    can_override,
)
from ..models.transaction import Transaction
from ..patterns.transaction_patterns import TRANSFER_KEYWORDS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransferMatch:
    """An outgoing/incoming pair representing one internal transfer."""
    outgoing: Transaction
    incoming: Transaction

    @property
    def days_apart(self) -> int:
        return calendar_days_between(self.outgoing.posted, self.incoming.posted)


def calendar_days_between(first: datetime, second: datetime) -> int:
    """Absolute difference in calendar days, ignoring time of day."""
    return abs((first.date() - second.date()).days)


class TransferDetector:
    """Detects and links internal transfers between the user's accounts."""

    def __init__(self, max_days_difference: Optional[int] = None):
        """
        Initialize the detector.

        Args:
            max_days_difference: Pairing window in calendar days (inclusive);
                defaults to ENGINE_CONFIG["transfer_max_days"]
        """
        if max_days_difference is None:
            max_days_difference = ENGINE_CONFIG["transfer_max_days"]
        self.max_days_difference = max_days_difference

    @staticmethod
    def can_link(transaction: Transaction) -> bool:
        """
        Check if linking would leave the transaction classified as a transfer.

        Either auto-transfer may take it over, or a higher classification
        (such as a credit card payment) already put it in the transfer
        category and is kept as is.
        """
        if can_override(ClassificationPriority.AUTO_TRANSFER, transaction.priority):
            return True
        return transaction.is_transfer_category

    def is_eligible(self, transaction: Transaction) -> bool:
        """
        Check if a transaction may take part in a new transfer match.

        Pending, already matched and zero-amount transactions are skipped,
        as is anything classified above auto-transfer priority outside the
        transfer category.
        """
        if transaction.pending or transaction.is_matched_transfer:
            return False
        if transaction.amount_value == 0:
            return False
        return self.can_link(transaction)

    def is_within_window(self, first: datetime, second: datetime) -> bool:
        return calendar_days_between(first, second) <= self.max_days_difference

    def is_pair(self, outgoing: Transaction, incoming: Transaction) -> bool:
        """Check the pairing rule for one outgoing/incoming candidate pair."""
        if outgoing.account_id == incoming.account_id:
            return False
        if outgoing.amount_value != -incoming.amount_value:
            return False
        return self.is_within_window(outgoing.posted, incoming.posted)

    def detect_transfers(self, transactions: Iterable[Transaction]) -> List[TransferMatch]:
        """
        Find transfer pairs among a set of transactions.

        Outgoing transactions are visited in (posted, id) order. Each takes
        the unclaimed incoming candidate closest in calendar days, breaking
        ties on the lowest id, so the result never depends on input order.
        A transaction is consumed by at most one match.

        Args:
            transactions: Transactions to scan (any order)

        Returns:
            List of TransferMatch
        """
        eligible = [txn for txn in transactions if self.is_eligible(txn)]

        outgoing = sorted(
            (txn for txn in eligible if txn.amount_value < 0),
            key=lambda txn: (txn.posted, txn.id),
        )
        incoming = sorted(
            (txn for txn in eligible if txn.amount_value > 0),
            key=lambda txn: txn.id,
        )

        matches = []
        claimed: Set[str] = set()

        for out in outgoing:
            candidates = [
                txn for txn in incoming
                if txn.id not in claimed and self.is_pair(out, txn)
            ]
            if not candidates:
                continue

            best = min(
                candidates,
                key=lambda txn: (calendar_days_between(out.posted, txn.posted), txn.id),
            )
            claimed.add(best.id)
            matches.append(TransferMatch(outgoing=out, incoming=best))
            logger.debug(
                "Transfer match %s -> %s (%s, %d days apart)",
                out.id, best.id, best.amount, calendar_days_between(out.posted, best.posted),
            )

        return matches

    @staticmethod
    def transfer_decision() -> ClassificationDecision:
        return ClassificationDecision(
            category=ENGINE_CONFIG["transfer_category"],
            reason=REASON_AUTO_TRANSFER,
            priority=ClassificationPriority.AUTO_TRANSFER,
        )

    def apply_matches(self, matches: Sequence[TransferMatch]) -> int:
        """
        Link both sides of each match and classify them as a transfer.

        A side that already carries a higher transfer classification keeps
        it and is only linked. A match is skipped if either side picked up
        a non-transfer classification above auto-transfer since detection.

        Returns:
            Number of matches applied
        """
        decision = self.transfer_decision()
        applied = 0
        for match in matches:
            sides = (match.outgoing, match.incoming)
            if not all(self.can_link(txn) for txn in sides):
                logger.debug(
                    "Skipping transfer match %s -> %s: higher priority classification present",
                    match.outgoing.id, match.incoming.id,
                )
                continue

            match.outgoing.matched_transfer_id = match.incoming.id
            match.incoming.matched_transfer_id = match.outgoing.id
            for txn in sides:
                if can_override(decision.priority, txn.priority):
                    txn.apply_decision(decision)
            applied += 1
        return applied

    def process_transfers(self, transactions: Iterable[Transaction]) -> int:
        """Detect and apply transfers in one step. Returns matches applied."""
        return self.apply_matches(self.detect_transfers(list(transactions)))

    @staticmethod
    def release_link(transaction: Transaction) -> None:
        """Clear one side of a transfer link, resetting an auto-transfer classification."""
        transaction.matched_transfer_id = None
        if transaction.priority == ClassificationPriority.AUTO_TRANSFER:
            transaction.category = None
            transaction.classification_reason = REASON_DEFAULT
            transaction.classification_priority = ClassificationPriority.DEFAULT

    @staticmethod
    def unmatch(first: Transaction, second: Transaction) -> None:
        """
        Break a transfer link (user override).

        Both links are cleared. A side still carrying the auto-transfer
        classification is reset to no category so the pipeline re-runs on it.
        """
        for txn in (first, second):
            TransferDetector.release_link(txn)
        logger.debug("Transfer link %s <-> %s removed", first.id, second.id)

    @staticmethod
    def looks_like_transfer(transaction: Transaction) -> bool:
        """Flag transfer-shaped text without requiring a counterpart."""
        return (
            match_keywords(transaction.description, TRANSFER_KEYWORDS) is not None
            or match_keywords(transaction.payee, TRANSFER_KEYWORDS) is not None
        )

    def count_unmatched_transfers(self, transactions: Iterable[Transaction]) -> int:
        """Count transfer-shaped transactions that have no matched counterpart."""
        return sum(
            1 for txn in transactions
            if self.looks_like_transfer(txn) and not txn.is_matched_transfer
        )

    @staticmethod
    def matched_transfer_ids(transactions: Iterable[Transaction]) -> Set[str]:
        """Ids of every transaction on either side of a transfer link."""
        ids = set()
        for txn in transactions:
            if txn.matched_transfer_id:
                ids.add(txn.id)
                ids.add(txn.matched_transfer_id)
        return ids

    @staticmethod
    def find_broken_links(transactions: Sequence[Transaction]) -> List[Transaction]:
        """
        Transactions whose counterpart no longer links back to them.

        Happens when a payee rule reclassifies one side of a transfer.
        """
        by_id: Dict[str, Transaction] = {txn.id: txn for txn in transactions}
        broken = []
        for txn in transactions:
            if not txn.matched_transfer_id:
                continue
            counterpart = by_id.get(txn.matched_transfer_id)
            if counterpart is not None and counterpart.matched_transfer_id != txn.id:
                broken.append(txn)
        return broken
