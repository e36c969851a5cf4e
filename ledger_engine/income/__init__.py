"""
Income detection module for the ledger engine.
"""

from .income_detector import IncomeDetector

__all__ = ["IncomeDetector"]
