"""
Configuration module for the Ledger Classification Engine.

This module contains all configuration dictionaries for classification and sync quotas.
"""

from .engine_config import ENGINE_CONFIG, SYNC_CONFIG

__all__ = [
    "ENGINE_CONFIG",
    "SYNC_CONFIG",
]
