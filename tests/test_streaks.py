"""Tests for writing-streak logic."""

from datetime import date, timedelta

import pytest

from daybook.core.streaks import calculate_streaks, current_streak, iter_days, longest_streak


@pytest.fixture
def d1():
    return date(2025, 3, 1)


class TestIterDays:
    def test_inclusive(self, d1):
        days = list(iter_days(d1, d1 + timedelta(days=2)))
        assert days == [d1, d1 + timedelta(days=1), d1 + timedelta(days=2)]

    def test_single_day(self, d1):
        assert list(iter_days(d1, d1)) == [d1]

    def test_empty_when_reversed(self, d1):
        assert list(iter_days(d1, d1 - timedelta(days=1))) == []


class TestCalculateStreaks:
    def test_gap_in_middle(self, d1):
        d2, d3 = d1 + timedelta(days=1), d1 + timedelta(days=2)

        report = calculate_streaks([d1, d3], d1, d3)

        assert report.longest_streak == 1
        assert report.missed_days == [d2]
        assert report.current_streak == 1

    def test_current_streak_zero_when_end_has_no_entry(self, d1):
        d3 = d1 + timedelta(days=2)

        report = calculate_streaks([d1, d3], d1, d3 + timedelta(days=1))

        assert report.current_streak == 0
        assert report.longest_streak == 1

    def test_consecutive_run(self, d1):
        dates = [d1 + timedelta(days=i) for i in range(4)]

        report = calculate_streaks(dates, d1, dates[-1])

        assert report.current_streak == 4
        assert report.longest_streak == 4
        assert report.missed_days == []

    def test_longest_run_picks_the_longer_one(self, d1):
        dates = [d1, d1 + timedelta(days=1), d1 + timedelta(days=2), d1 + timedelta(days=5)]

        report = calculate_streaks(dates, d1, d1 + timedelta(days=5))

        assert report.longest_streak == 3
        assert report.current_streak == 1
        assert report.missed_days == [d1 + timedelta(days=3), d1 + timedelta(days=4)]

    def test_reversed_range_is_swapped(self, d1):
        d3 = d1 + timedelta(days=2)

        report = calculate_streaks([d1, d3], d3, d1)

        assert report.range_start == d1
        assert report.range_end == d3
        assert report.missed_days == [d1 + timedelta(days=1)]

    def test_no_entries(self, d1):
        report = calculate_streaks(None, d1, d1 + timedelta(days=2))

        assert report.current_streak == 0
        assert report.longest_streak == 0
        assert len(report.missed_days) == 3

    def test_out_of_range_dates_do_not_count_towards_longest(self, d1):
        before = d1 - timedelta(days=1)

        report = calculate_streaks([before, d1], d1, d1)

        assert report.longest_streak == 1
        # Current streak counts back past the range start
        assert report.current_streak == 2

    def test_duplicate_dates(self, d1):
        report = calculate_streaks([d1, d1], d1, d1)
        assert report.current_streak == 1
        assert report.missed_days == []


class TestHelpers:
    def test_current_streak(self, d1):
        days = {d1, d1 - timedelta(days=1), d1 - timedelta(days=3)}
        assert current_streak(days, d1) == 2

    def test_longest_streak_empty(self, d1):
        assert longest_streak(set(), d1, d1) == 0
