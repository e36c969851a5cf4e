"""
Sync Rate Limiter.

Bounds refreshes from the financial-data bridge to a fixed number per
rolling reset interval (24 per 24 hours by default). State is persisted as
JSON and merges across devices without ever under-counting usage.
"""

import json
import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional

from ..config.engine_config import SYNC_CONFIG
from .errors import RateLimitedError

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _format_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class SyncRateLimiter:
    """
    Daily sync quota tracker.

    States are quota available (remaining_syncs > 0) and quota exhausted
    (remaining_syncs == 0). The counter never goes negative.
    """

    def __init__(
        self,
        max_syncs: Optional[int] = None,
        reset_interval: Optional[timedelta] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize a fresh limiter with a full quota.

        Args:
            max_syncs: Syncs allowed per interval; defaults to SYNC_CONFIG["max_daily_syncs"]
            reset_interval: Quota window; defaults to SYNC_CONFIG["reset_interval_seconds"]
            clock: Callable returning the current aware datetime (for tests)
        """
        self.max_syncs = max_syncs if max_syncs is not None else SYNC_CONFIG["max_daily_syncs"]
        self.reset_interval = reset_interval or timedelta(seconds=SYNC_CONFIG["reset_interval_seconds"])
        self._clock = clock or _utcnow

        self.remaining_syncs = self.max_syncs
        self.last_reset_date = self._clock()
        self.last_sync_time: Optional[datetime] = None
        self.sync_times: List[datetime] = []

    def now(self) -> datetime:
        return self._clock()

    # ----------------------------
    # Queries
    # ----------------------------
    @property
    def can_sync(self) -> bool:
        return self.remaining_syncs > 0

    @property
    def syncs_used(self) -> int:
        return self.max_syncs - self.remaining_syncs

    @property
    def time_since_last_sync(self) -> Optional[timedelta]:
        if self.last_sync_time is None:
            return None
        return self.now() - self.last_sync_time

    @property
    def time_until_reset(self) -> timedelta:
        """Time left until the quota window resets, never negative."""
        remaining = self.reset_interval - (self.now() - self.last_reset_date)
        return max(remaining, timedelta(0))

    @property
    def formatted_remaining_syncs(self) -> str:
        return "%d/%d" % (self.remaining_syncs, self.max_syncs)

    @property
    def formatted_time_until_reset(self) -> Optional[str]:
        """Time until reset as "Xh Ym" or "Ym", None once the window has elapsed."""
        seconds = int(self.time_until_reset.total_seconds())
        if seconds <= 0:
            return None
        hours, minutes = seconds // 3600, (seconds % 3600) // 60
        if hours > 0:
            return "%dh %dm" % (hours, minutes)
        return "%dm" % minutes

    # ----------------------------
    # Transitions
    # ----------------------------
    def record_sync(self) -> bool:
        """
        Consume one sync from the quota.

        Returns:
            True if recorded; False (no change) when the quota is exhausted
        """
        if not self.can_sync:
            logger.warning("Sync quota exhausted, %s until reset", self.time_until_reset)
            return False

        now = self.now()
        self.remaining_syncs -= 1
        self.last_sync_time = now
        self.sync_times.append(now)
        logger.debug("Sync recorded, %s remaining", self.formatted_remaining_syncs)
        return True

    def check_and_reset_if_needed(self) -> bool:
        """
        Restore the full quota once the reset interval has elapsed.

        Returns:
            True if the quota was reset
        """
        if self.now() - self.last_reset_date >= self.reset_interval:
            self.reset()
            return True
        return False

    def reset(self) -> None:
        self.remaining_syncs = self.max_syncs
        self.last_reset_date = self.now()
        self.sync_times = []
        logger.debug("Sync quota reset")

    def ensure_can_sync(self) -> None:
        """
        Gate a bridge request.

        Raises:
            RateLimitedError: When the quota is exhausted after any due reset
        """
        self.check_and_reset_if_needed()
        if not self.can_sync:
            raise RateLimitedError(self.time_until_reset, max_syncs=self.max_syncs)

    def merge(self, other: "SyncRateLimiter") -> None:
        """
        Merge state recorded on another device into this limiter.

        The merge is monotonic: usage is the larger of the two counts (or
        the number of distinct syncs seen in the merged window, if higher),
        the reset date is the earlier one and the last sync the later one.
        """
        reset_date = min(self.last_reset_date, other.last_reset_date)
        sync_times = sorted(
            {time for time in self.sync_times + other.sync_times if time >= reset_date}
        )
        used = max(self.syncs_used, other.syncs_used, len(sync_times))

        self.last_reset_date = reset_date
        self.sync_times = sync_times
        self.remaining_syncs = max(self.max_syncs - used, 0)

        last_syncs = [time for time in (self.last_sync_time, other.last_sync_time) if time is not None]
        self.last_sync_time = max(last_syncs) if last_syncs else None

    # ----------------------------
    # Persistence
    # ----------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "remaining_syncs": self.remaining_syncs,
            "last_reset_date": _format_datetime(self.last_reset_date),
            "last_sync_time": _format_datetime(self.last_sync_time),
            "sync_times": [_format_datetime(time) for time in self.sync_times],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], clock: Optional[Clock] = None, **kwargs) -> "SyncRateLimiter":
        """Restore a limiter from to_dict() output. Missing keys keep fresh defaults."""
        limiter = cls(clock=clock, **kwargs)
        if "remaining_syncs" in data:
            limiter.remaining_syncs = min(max(int(data["remaining_syncs"]), 0), limiter.max_syncs)
        limiter.last_reset_date = _parse_datetime(data.get("last_reset_date")) or limiter.last_reset_date
        limiter.last_sync_time = _parse_datetime(data.get("last_sync_time"))
        limiter.sync_times = [
            parsed for parsed in (_parse_datetime(value) for value in data.get("sync_times", []))
            if parsed is not None
        ]
        return limiter

    def save(self, path: str) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: str, clock: Optional[Clock] = None, **kwargs) -> "SyncRateLimiter":
        """Load persisted state, starting fresh if the file does not exist."""
        if not os.path.exists(path):
            return cls(clock=clock, **kwargs)
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data, clock=clock, **kwargs)
