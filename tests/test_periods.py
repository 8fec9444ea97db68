import unittest
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from ledgerboard.core.errors import ValidationError
from ledgerboard.core.periods import (
    Window,
    day_window,
    month_window,
    period_window,
    previous_window,
    weekly_buckets,
)

UTC = timezone.utc


class PeriodWindowTest(unittest.TestCase):
    def setUp(self):
        self.now = datetime(2024, 3, 31, 15, 30, tzinfo=UTC)

    def test_week_window(self):
        window = period_window("week", self.now, UTC)
        self.assertEqual(window.start, self.now - timedelta(days=7))
        self.assertTrue(window.contains(self.now))

    def test_month_window_clamps_day(self):
        window = period_window("month", self.now, UTC)
        self.assertEqual(window.start, datetime(2024, 2, 29, 15, 30, tzinfo=UTC))

    def test_year_window(self):
        window = period_window("year", self.now, UTC)
        self.assertEqual(window.start, datetime(2023, 3, 31, 15, 30, tzinfo=UTC))

    def test_today_uses_business_timezone(self):
        jakarta = ZoneInfo("Asia/Jakarta")
        # 20:00 UTC is already the next day in Jakarta (UTC+7)
        now = datetime(2024, 3, 31, 20, 0, tzinfo=UTC)
        window = period_window("today", now, jakarta)
        self.assertEqual(window.start, datetime(2024, 4, 1, 0, 0, tzinfo=jakarta))

    def test_unknown_period_is_rejected(self):
        with self.assertRaises(ValidationError):
            period_window("decade", self.now, UTC)

    def test_previous_window_has_same_duration(self):
        current = period_window("week", self.now, UTC)
        previous = previous_window(current)
        self.assertEqual(previous.duration, current.duration)
        self.assertEqual(previous.end, current.start)
        self.assertFalse(previous.contains(current.start))

    def test_day_and_month_windows_are_half_open(self):
        day = day_window(self.now, UTC)
        self.assertEqual(day.start, datetime(2024, 3, 31, tzinfo=UTC))
        self.assertEqual(day.end, datetime(2024, 4, 1, tzinfo=UTC))
        self.assertTrue(day.contains(datetime(2024, 3, 31, 23, 59, 59, tzinfo=UTC)))
        self.assertFalse(day.contains(day.end))

        month = month_window(self.now, UTC)
        self.assertEqual(month.start, datetime(2024, 3, 1, tzinfo=UTC))
        self.assertEqual(month.end, datetime(2024, 4, 1, tzinfo=UTC))
        self.assertTrue(month.contains(datetime(2024, 3, 31, 23, 0, tzinfo=UTC)))

    def test_naive_timestamps_are_read_as_utc(self):
        window = Window(
            start=datetime(2024, 1, 1, tzinfo=UTC),
            end=datetime(2024, 1, 2, tzinfo=UTC),
        )
        self.assertTrue(window.contains(datetime(2024, 1, 1, 12, 0)))
        self.assertFalse(window.contains(None))


class WeeklyBucketTest(unittest.TestCase):
    def test_buckets_slide_from_now(self):
        now = datetime(2024, 5, 29, 12, 0, tzinfo=UTC)
        buckets = weekly_buckets(now)

        self.assertEqual([b.label for b in buckets], ["4", "3", "2", "1"])
        newest = buckets[-1].window
        self.assertEqual(newest.start, now)
        self.assertEqual(newest.end, now + timedelta(days=6))
        oldest = buckets[0].window
        self.assertEqual(oldest.start, now - timedelta(days=21))
        self.assertTrue(buckets[2].window.contains(now - timedelta(days=1)))


if __name__ == "__main__":
    unittest.main()
