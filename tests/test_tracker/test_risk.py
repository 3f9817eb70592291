"""Tests for EOL risk classification and time-remaining formatting."""

import unittest
from datetime import date, datetime, timedelta

from tracker.risk import RiskTier, classify, days_remaining, humanize_remaining, tier_for


class TestClassify(unittest.TestCase):

    TODAY = date(2025, 1, 1)

    def test_same_day_is_zero_and_warning(self):
        self.assertEqual(classify(self.TODAY, self.TODAY), (0, RiskTier.WARNING))

    def test_unknown_date_is_expired(self):
        self.assertEqual(classify(None, self.TODAY), (None, RiskTier.EXPIRED))

    def test_past_date_is_expired(self):
        days, tier = classify(date(2024, 10, 14), self.TODAY)
        self.assertEqual(days, -79)
        self.assertEqual(tier, RiskTier.EXPIRED)

    def test_yesterday_is_expired(self):
        days, tier = classify(self.TODAY - timedelta(days=1), self.TODAY)
        self.assertEqual(days, -1)
        self.assertEqual(tier, RiskTier.EXPIRED)

    def test_within_a_year_is_warning(self):
        self.assertEqual(classify(self.TODAY + timedelta(days=364), self.TODAY)[1], RiskTier.WARNING)

    def test_a_year_or_more_is_safe(self):
        self.assertEqual(classify(self.TODAY + timedelta(days=365), self.TODAY), (365, RiskTier.SAFE))
        self.assertEqual(classify(self.TODAY + timedelta(days=2000), self.TODAY)[1], RiskTier.SAFE)

    def test_time_of_day_is_ignored(self):
        eol = datetime(2025, 1, 1, 0, 0, 1)
        today = datetime(2025, 1, 1, 23, 59, 59)
        self.assertEqual(days_remaining(eol, today), 0)

    def test_risk_never_increases_with_more_days(self):
        order = {RiskTier.EXPIRED: 2, RiskTier.WARNING: 1, RiskTier.SAFE: 0}
        previous = None
        for offset in range(-400, 800, 7):
            _, tier = classify(self.TODAY + timedelta(days=offset), self.TODAY)
            if previous is not None:
                self.assertLessEqual(order[tier], order[previous])
            previous = tier

    def test_custom_warning_window(self):
        self.assertEqual(tier_for(100, warning_days=90), RiskTier.SAFE)
        self.assertEqual(tier_for(89, warning_days=90), RiskTier.WARNING)


class TestHumanizeRemaining(unittest.TestCase):

    def test_examples(self):
        cases = {
            -3: "3 days overdue",
            0: "0 days",
            10: "10 days",
            29: "29 days",
            30: "1 month",
            45: "1 month",
            60: "2 months",
            364: "12 months",
            365: "1 year",
            400: "1 year, 35 days",
            730: "2 years",
            731: "2 years, 1 days",
        }
        for days, expected in cases.items():
            with self.subTest(days=days):
                self.assertEqual(humanize_remaining(days), expected)

    def test_none(self):
        self.assertEqual(humanize_remaining(None), "N/A")


if __name__ == "__main__":
    unittest.main()
