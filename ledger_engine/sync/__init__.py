"""
Sync module for the ledger engine.

Contains:
- Sync Rate Limiter (daily bridge quota)
- Bridge payload normalization
- Bridge error taxonomy
"""

from .errors import (
    BridgeError,
    ClaimFailedError,
    FetchFailedError,
    InvalidAccessURLError,
    InvalidCredentialsError,
    InvalidResponseError,
    InvalidSetupTokenError,
    NoAccessTokenError,
    RateLimitedError,
    ServerError,
    SubscriptionRequiredError,
    TokenAlreadyClaimedError,
    error_for_status,
    raise_for_status,
)
from .rate_limiter import SyncRateLimiter
from .bridge import (
    IngestResult,
    infer_account_type,
    ingest_account_set,
    normalize_account,
    normalize_transaction,
    timestamp_to_datetime,
)

__all__ = [
    "BridgeError",
    "ClaimFailedError",
    "FetchFailedError",
    "InvalidAccessURLError",
    "InvalidCredentialsError",
    "InvalidResponseError",
    "InvalidSetupTokenError",
    "NoAccessTokenError",
    "RateLimitedError",
    "ServerError",
    "SubscriptionRequiredError",
    "TokenAlreadyClaimedError",
    "error_for_status",
    "raise_for_status",
    "SyncRateLimiter",
    "IngestResult",
    "infer_account_type",
    "ingest_account_set",
    "normalize_account",
    "normalize_transaction",
    "timestamp_to_datetime",
]
