"""
Bridge error taxonomy.

Every error carries a user-visible message; failures from the bridge must
never be swallowed silently by the surrounding application.
"""

from datetime import timedelta
from typing import Optional


class BridgeError(Exception):
    """Base class for financial-data bridge failures."""

    message = "The financial data bridge returned an error."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)

    @property
    def user_message(self) -> str:
        return str(self)


class InvalidSetupTokenError(BridgeError):
    message = "The setup token is invalid or malformed."


class TokenAlreadyClaimedError(BridgeError):
    message = "This setup token has already been claimed. Please generate a new one."


class ClaimFailedError(BridgeError):
    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__("Failed to claim token (HTTP %d)." % status_code)


class NoAccessTokenError(BridgeError):
    message = "No bridge access token configured."


class InvalidAccessURLError(BridgeError):
    message = "The access URL is invalid."


class InvalidResponseError(BridgeError):
    message = "Received an invalid response from the bridge."


class FetchFailedError(BridgeError):
    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__("Failed to fetch accounts (HTTP %d)." % status_code)


class SubscriptionRequiredError(BridgeError):
    message = "A bridge subscription is required. Please activate or renew it."


class InvalidCredentialsError(BridgeError):
    message = "Bridge credentials are invalid. Please reconnect your account."


class ServerError(BridgeError):
    message = "The bridge is temporarily unavailable. Please try again later."


class RateLimitedError(BridgeError):
    """Daily sync quota exhausted; do not retry before reset_in elapses."""

    def __init__(self, reset_in: timedelta = timedelta(0), max_syncs: int = 24):
        self.reset_in = reset_in
        minutes = int(reset_in.total_seconds()) // 60
        super().__init__(
            "Rate limit exceeded. The bridge allows %d requests per day; "
            "try again in %dh %dm." % (max_syncs, minutes // 60, minutes % 60)
        )


SERVER_ERROR_CODES = (500, 502, 503, 504)


def error_for_status(status_code: int) -> Optional[BridgeError]:
    """
    Map a bridge HTTP status code to an error.

    Returns:
        None for 200, otherwise the matching BridgeError instance
    """
    if status_code == 200:
        return None
    if status_code == 402:
        return SubscriptionRequiredError()
    if status_code == 403:
        return InvalidCredentialsError()
    if status_code in SERVER_ERROR_CODES:
        return ServerError()
    return FetchFailedError(status_code)


def raise_for_status(status_code: int) -> None:
    """Raise the mapped error for a non-200 status code."""
    error = error_for_status(status_code)
    if error is not None:
        raise error
