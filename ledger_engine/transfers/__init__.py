"""
Transfer detection module for the ledger engine.
"""

from .transfer_detector import TransferDetector, TransferMatch, calendar_days_between

__all__ = ["TransferDetector", "TransferMatch", "calendar_days_between"]
