"""
Tests for the sync rate limiter: quota, reset window, merge and persistence.
"""

import os
import tempfile
import unittest
from datetime import datetime, timedelta, timezone

from ledger_engine.sync.errors import RateLimitedError
from ledger_engine.sync.rate_limiter import SyncRateLimiter


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start=None):
        self.current = start or datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.current

    def advance(self, **kwargs):
        self.current += timedelta(**kwargs)


class TestSyncQuota(unittest.TestCase):
    """Test consuming and resetting the daily quota."""

    def setUp(self):
        """Set up test fixtures."""
        self.clock = FakeClock()
        self.limiter = SyncRateLimiter(clock=self.clock)

    def test_fresh_limiter(self):
        self.assertEqual(self.limiter.remaining_syncs, 24)
        self.assertTrue(self.limiter.can_sync)
        self.assertIsNone(self.limiter.time_since_last_sync)
        self.assertEqual(self.limiter.formatted_remaining_syncs, "24/24")

    def test_quota_exhausted_after_24_syncs(self):
        """Test that the counter stops at zero."""
        for _ in range(24):
            self.assertTrue(self.limiter.record_sync())
        self.assertEqual(self.limiter.remaining_syncs, 0)
        self.assertFalse(self.limiter.can_sync)

        self.assertFalse(self.limiter.record_sync())
        self.assertEqual(self.limiter.remaining_syncs, 0)
        self.assertEqual(self.limiter.syncs_used, 24)
        self.assertEqual(len(self.limiter.sync_times), 24)

    def test_no_reset_before_interval(self):
        self.limiter.record_sync()
        self.clock.advance(hours=23, minutes=59)
        self.assertFalse(self.limiter.check_and_reset_if_needed())
        self.assertEqual(self.limiter.remaining_syncs, 23)

    def test_reset_after_interval(self):
        """Test that 24 hours after the last reset the quota is full again."""
        for _ in range(24):
            self.limiter.record_sync()
        self.clock.advance(hours=24)
        self.assertTrue(self.limiter.check_and_reset_if_needed())
        self.assertEqual(self.limiter.remaining_syncs, 24)
        self.assertEqual(self.limiter.last_reset_date, self.clock())
        self.assertEqual(self.limiter.sync_times, [])

    def test_time_since_last_sync(self):
        self.limiter.record_sync()
        self.clock.advance(minutes=5)
        self.assertEqual(self.limiter.time_since_last_sync, timedelta(minutes=5))

    def test_time_until_reset(self):
        self.clock.advance(hours=20, minutes=30)
        self.assertEqual(self.limiter.time_until_reset, timedelta(hours=3, minutes=30))
        self.assertEqual(self.limiter.formatted_time_until_reset, "3h 30m")

        self.clock.advance(hours=3, minutes=15)
        self.assertEqual(self.limiter.formatted_time_until_reset, "15m")

    def test_time_until_reset_never_negative(self):
        self.clock.advance(hours=30)
        self.assertEqual(self.limiter.time_until_reset, timedelta(0))
        self.assertIsNone(self.limiter.formatted_time_until_reset)

    def test_ensure_can_sync_raises_when_exhausted(self):
        for _ in range(24):
            self.limiter.record_sync()
        self.clock.advance(hours=2)

        with self.assertRaises(RateLimitedError) as ctx:
            self.limiter.ensure_can_sync()
        self.assertEqual(ctx.exception.reset_in, timedelta(hours=22))
        self.assertIn("22h 0m", ctx.exception.user_message)

    def test_ensure_can_sync_resets_when_due(self):
        for _ in range(24):
            self.limiter.record_sync()
        self.clock.advance(hours=25)
        self.limiter.ensure_can_sync()
        self.assertEqual(self.limiter.remaining_syncs, 24)

    def test_custom_quota(self):
        limiter = SyncRateLimiter(max_syncs=2, reset_interval=timedelta(hours=1), clock=self.clock)
        limiter.record_sync()
        limiter.record_sync()
        self.assertFalse(limiter.can_sync)
        self.clock.advance(hours=1)
        self.assertTrue(limiter.check_and_reset_if_needed())
        self.assertEqual(limiter.formatted_remaining_syncs, "2/2")


class TestSyncMerge(unittest.TestCase):
    """Test merging limiter state recorded on two devices."""

    def setUp(self):
        """Set up test fixtures."""
        self.clock = FakeClock()
        self.local = SyncRateLimiter(clock=self.clock)
        self.remote = SyncRateLimiter(clock=self.clock)

    def test_merge_counts_distinct_syncs(self):
        for _ in range(3):
            self.clock.advance(minutes=1)
            self.local.record_sync()
        for _ in range(5):
            self.clock.advance(minutes=1)
            self.remote.record_sync()

        self.local.merge(self.remote)
        self.assertEqual(self.local.remaining_syncs, 16)
        self.assertEqual(self.local.last_sync_time, self.remote.last_sync_time)

    def test_merge_same_history_is_stable(self):
        for _ in range(3):
            self.clock.advance(minutes=1)
            self.local.record_sync()
        copy = SyncRateLimiter.from_dict(self.local.to_dict(), clock=self.clock)

        self.local.merge(copy)
        self.assertEqual(self.local.remaining_syncs, 21)

    def test_merge_keeps_earlier_reset_date(self):
        earlier = self.local.last_reset_date
        self.clock.advance(hours=1)
        self.remote.reset()
        self.remote.merge(self.local)
        self.assertEqual(self.remote.last_reset_date, earlier)


class TestSyncPersistence(unittest.TestCase):
    """Test JSON persistence of limiter state."""

    def setUp(self):
        """Set up test fixtures."""
        self.clock = FakeClock()
        self.limiter = SyncRateLimiter(clock=self.clock)
        self.limiter.record_sync()
        self.limiter.record_sync()

    def test_dict_round_trip(self):
        restored = SyncRateLimiter.from_dict(self.limiter.to_dict(), clock=self.clock)
        self.assertEqual(restored.remaining_syncs, 22)
        self.assertEqual(restored.last_reset_date, self.limiter.last_reset_date)
        self.assertEqual(restored.last_sync_time, self.limiter.last_sync_time)
        self.assertEqual(len(restored.sync_times), 2)

    def test_from_dict_clamps_remaining(self):
        restored = SyncRateLimiter.from_dict({"remaining_syncs": -3}, clock=self.clock)
        self.assertEqual(restored.remaining_syncs, 0)
        restored = SyncRateLimiter.from_dict({"remaining_syncs": 99}, clock=self.clock)
        self.assertEqual(restored.remaining_syncs, 24)

    def test_naive_datetimes_read_as_utc(self):
        restored = SyncRateLimiter.from_dict(
            {"last_reset_date": "2026-03-01T08:00:00"}, clock=self.clock
        )
        self.assertEqual(restored.last_reset_date, self.clock())

    def test_save_and_load(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "sync_state.json")
            self.limiter.save(path)
            loaded = SyncRateLimiter.load(path, clock=self.clock)
        self.assertEqual(loaded.remaining_syncs, 22)

    def test_load_missing_file_starts_fresh(self):
        with tempfile.TemporaryDirectory() as tmp:
            loaded = SyncRateLimiter.load(os.path.join(tmp, "missing.json"), clock=self.clock)
        self.assertEqual(loaded.remaining_syncs, 24)


if __name__ == "__main__":
    unittest.main()
