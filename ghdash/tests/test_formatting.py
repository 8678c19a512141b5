from __future__ import annotations

import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from ghdash.formatting import parse_iso_timestamp, time_ago  # noqa: E402

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class TimeAgoTests(unittest.TestCase):
    def test_years_win_over_months(self):
        self.assertEqual(time_ago(NOW - timedelta(days=400), NOW), "1y ago")
        self.assertEqual(time_ago(NOW - timedelta(days=800), NOW), "2y ago")

    def test_months_are_thirty_days(self):
        self.assertEqual(time_ago(NOW - timedelta(days=30), NOW), "1mo ago")
        self.assertEqual(time_ago(NOW - timedelta(days=364), NOW), "12mo ago")

    def test_smaller_units(self):
        self.assertEqual(time_ago(NOW - timedelta(days=29, hours=23), NOW), "29d ago")
        self.assertEqual(time_ago(NOW - timedelta(hours=5, minutes=59), NOW), "5h ago")
        self.assertEqual(time_ago(NOW - timedelta(minutes=3, seconds=59), NOW), "3m ago")

    def test_now(self):
        self.assertEqual(time_ago(NOW - timedelta(seconds=59), NOW), "now")
        self.assertEqual(time_ago(NOW + timedelta(minutes=5), NOW), "now")

    def test_naive_timestamp_is_utc(self):
        naive = (NOW - timedelta(hours=2)).replace(tzinfo=None)
        self.assertEqual(time_ago(naive, NOW), "2h ago")


class ParseTests(unittest.TestCase):
    def test_parse_iso_timestamp(self):
        parsed = parse_iso_timestamp("2024-05-01T10:00:00Z")
        self.assertEqual(parsed, datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc))
        self.assertIsNone(parse_iso_timestamp("not a date"))
        self.assertIsNone(parse_iso_timestamp(""))


if __name__ == "__main__":
    unittest.main()
