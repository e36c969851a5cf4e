"""
Bridge payload normalization.

Turns the raw account-set JSON returned by the financial-data bridge into
Account and Transaction models. Account type is inferred once, when an
account is first discovered. Refreshes update bridge-owned fields only and
leave everything the user or the classifier set untouched.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from ..matching.preprocess import normalize_text
from ..models.account import Account, AccountType
from ..models.transaction import EPOCH, Transaction
from ..patterns.transaction_patterns import ACCOUNT_TYPE_KEYWORDS
from .errors import InvalidResponseError

logger = logging.getLogger(__name__)


def _get(raw: Mapping[str, Any], key: str, default: Any = None) -> Any:
    """Read a payload key written with either hyphens or underscores."""
    if key in raw:
        return raw[key]
    alternate = key.replace("-", "_") if "-" in key else key.replace("_", "-")
    return raw.get(alternate, default)


def timestamp_to_datetime(value: Any) -> Optional[datetime]:
    """Unix seconds to an aware UTC datetime; None for missing or invalid values."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        return None


def infer_account_type(name: Optional[str]) -> AccountType:
    """
    Infer the account type from its name by keyword.

    Example:
        >>> infer_account_type("Premier Savings")
        <AccountType.SAVINGS: 'savings'>
    """
    lowered = normalize_text(name)
    for keyword, type_value in ACCOUNT_TYPE_KEYWORDS:
        if keyword in lowered:
            return AccountType(type_value)
    return AccountType.UNKNOWN


def normalize_transaction(raw: Mapping[str, Any], account_id: str) -> Optional[Transaction]:
    """
    Build a Transaction from a raw bridge transaction.

    Returns:
        Transaction, or None when the record has no id
    """
    if not isinstance(raw, Mapping):
        logger.warning("Skipping malformed transaction on account %s", account_id)
        return None

    txn_id = raw.get("id")
    if not txn_id:
        logger.warning("Skipping transaction without id on account %s", account_id)
        return None

    posted = timestamp_to_datetime(raw.get("posted"))
    return Transaction(
        id=str(txn_id),
        account_id=account_id,
        amount=str(raw.get("amount", "0")),
        description=raw.get("description") or "",
        posted=posted if posted is not None else EPOCH,
        payee=raw.get("payee"),
        memo=raw.get("memo"),
        pending=bool(raw.get("pending") or False),
        transacted_at=timestamp_to_datetime(_get(raw, "transacted_at")),
    )


def normalize_account(raw: Mapping[str, Any]) -> Account:
    """
    Build an Account from a raw bridge account.

    Raises:
        InvalidResponseError: When the account has no id
    """
    if not isinstance(raw, Mapping) or not raw.get("id"):
        raise InvalidResponseError("Received an account without an id from the bridge.")

    org = raw.get("org")
    if not isinstance(org, Mapping):
        org = {}
    name = raw.get("name") or ""
    return Account(
        id=str(raw["id"]),
        name=name,
        balance=str(raw.get("balance", "0")),
        organization_name=org.get("name"),
        organization_id=org.get("domain") or _get(org, "sfin-url"),
        currency=raw.get("currency") or "USD",
        available_balance=_get(raw, "available-balance"),
        balance_date=timestamp_to_datetime(_get(raw, "balance-date")),
        account_type=infer_account_type(name),
    )


@dataclass
class IngestResult:
    """Summary of one bridge refresh."""
    new_accounts: List[str] = field(default_factory=list)
    updated_accounts: List[str] = field(default_factory=list)
    new_transactions: List[str] = field(default_factory=list)
    updated_transactions: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


def _refresh_account(existing: Account, fresh: Account) -> None:
    existing.previous_balance = existing.balance
    existing.balance = fresh.balance
    existing.available_balance = fresh.available_balance
    existing.balance_date = fresh.balance_date
    existing.name = fresh.name
    existing.currency = fresh.currency
    existing.organization_name = fresh.organization_name
    existing.organization_id = fresh.organization_id


def _refresh_transaction(existing: Transaction, fresh: Transaction) -> None:
    existing.posted = fresh.posted
    existing.amount = fresh.amount
    existing.description = fresh.description
    existing.payee = fresh.payee
    existing.memo = fresh.memo
    existing.pending = fresh.pending
    existing.transacted_at = fresh.transacted_at


def ingest_account_set(
    payload: Any,
    accounts: Dict[str, Account],
    transactions: Dict[str, Transaction],
) -> IngestResult:
    """
    Merge a raw account-set payload into the account and transaction stores.

    New accounts and transactions are created; known ones are refreshed in
    place, rolling the current balance into previous_balance. A transaction
    id is never stored twice. Accounts without an id are skipped and
    reported in the result errors.

    Args:
        payload: Decoded bridge JSON
        accounts: Accounts by id (updated in place)
        transactions: Transactions by id (updated in place)

    Returns:
        IngestResult

    Raises:
        InvalidResponseError: When the payload is not a mapping or its
            accounts are not a list
    """
    if not isinstance(payload, Mapping):
        raise InvalidResponseError()

    raw_accounts = payload.get("accounts", [])
    if not isinstance(raw_accounts, list):
        raise InvalidResponseError()

    result = IngestResult(errors=[str(error) for error in payload.get("errors") or []])
    for error in result.errors:
        logger.warning("Bridge reported: %s", error)

    for index, raw_account in enumerate(raw_accounts):
        try:
            fresh = normalize_account(raw_account)
        except InvalidResponseError as e:
            logger.warning("Skipping malformed account at position %d: %s", index, e)
            result.errors.append("Account %d skipped: %s" % (index, e))
            continue

        existing = accounts.get(fresh.id)
        if existing is None:
            accounts[fresh.id] = fresh
            result.new_accounts.append(fresh.id)
            logger.info("Discovered account %s (%s)", fresh.id, fresh.account_type.value)
        else:
            _refresh_account(existing, fresh)
            result.updated_accounts.append(fresh.id)

        for raw_txn in raw_account.get("transactions") or []:
            txn = normalize_transaction(raw_txn, fresh.id)
            if txn is None:
                continue
            known = transactions.get(txn.id)
            if known is None:
                transactions[txn.id] = txn
                result.new_transactions.append(txn.id)
            else:
                _refresh_transaction(known, txn)
                result.updated_transactions.append(txn.id)

    logger.debug(
        "Ingested %d new / %d updated accounts, %d new / %d updated transactions",
        len(result.new_accounts), len(result.updated_accounts),
        len(result.new_transactions), len(result.updated_transactions),
    )
    return result
