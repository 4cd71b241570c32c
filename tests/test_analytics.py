"""Tests for analytics logic and the analytics report."""

from datetime import date, timedelta

import pytest

from daybook.core.analytics import (
    build_mood_distribution,
    build_word_count_trend,
    count_words,
    resolve_range,
)
from daybook.core.vocabulary import MoodCategory


@pytest.fixture
def day1():
    return date(2025, 3, 1)


class TestCountWords:
    @pytest.mark.parametrize("text", ["", "   \n\t", None])
    def test_blank_is_zero(self, text):
        assert count_words(text) == 0

    def test_punctuation_ignored(self):
        assert count_words("Hello, world! How are you?") == 5

    def test_apostrophes_inside_words(self):
        assert count_words("don't stop") == 2

    def test_unicode_letters(self):
        assert count_words("café naïve résumé") == 3

    def test_digits(self):
        assert count_words("ran 5 km in 30 minutes") == 6


class TestMoodDistribution:
    def test_fixed_order_and_percentages(self):
        points = build_mood_distribution({MoodCategory.NEGATIVE: 1, MoodCategory.POSITIVE: 3})

        assert [p.category for p in points] == [
            MoodCategory.POSITIVE,
            MoodCategory.NEUTRAL,
            MoodCategory.NEGATIVE,
        ]
        assert [p.count for p in points] == [3, 0, 1]
        assert [p.percentage for p in points] == [75.0, 0.0, 25.0]

    def test_empty_is_zero_percent(self):
        points = build_mood_distribution({})
        assert all(p.count == 0 and p.percentage == 0 for p in points)


class TestWordCountTrend:
    def test_one_point_per_day(self, day1):
        day5 = day1 + timedelta(days=4)

        trend = build_word_count_trend([(day1, "one two three"), (day5, "")], day1, day5)

        assert [p.date for p in trend] == [day1 + timedelta(days=i) for i in range(5)]
        assert [p.word_count for p in trend] == [3, 0, 0, 0, 0]

    def test_sums_per_day(self, day1):
        trend = build_word_count_trend([(day1, "a b"), (day1, "c")], day1, day1)
        assert trend[0].word_count == 3


class TestResolveRange:
    def test_defaults(self, day1):
        today = day1 + timedelta(days=10)
        assert resolve_range(None, None, day1, today) == (day1, today)

    def test_empty_journal_uses_end(self, day1):
        assert resolve_range(None, None, None, day1) == (day1, day1)

    def test_swaps_reversed(self, day1):
        later = day1 + timedelta(days=3)
        assert resolve_range(later, day1, None, day1) == (day1, later)


class TestAnalyticsReport:
    @pytest.mark.asyncio
    async def test_report_over_range(self, services, make_entry, day1):
        day5 = day1 + timedelta(days=4)
        await make_entry(day1, content="one two three", category="Work", primary="Happy", tags=["Goal", "Routine"])
        await make_entry(day5, content="", primary="Sad", tags=["Routine"])

        report = await services.analytics.get_report(day1, day5)

        assert (report.range_start, report.range_end) == (day1, day5)
        assert [p.word_count for p in report.word_count_trend] == [3, 0, 0, 0, 0]
        assert [(p.category, p.count, p.percentage) for p in report.mood_distribution] == [
            (MoodCategory.POSITIVE, 1, 50.0),
            (MoodCategory.NEUTRAL, 0, 0.0),
            (MoodCategory.NEGATIVE, 1, 50.0),
        ]
        assert [(t.name, t.count) for t in report.top_tags] == [("Routine", 2), ("Goal", 1)]
        assert [(c.name, c.count) for c in report.category_breakdown] == [("Reflection", 1), ("Work", 1)]
        assert report.total_entries == 2
        assert report.total_words == 3

    @pytest.mark.asyncio
    async def test_most_frequent_tie_is_alphabetical(self, services, make_entry, day1):
        await make_entry(day1, primary="Sad")
        await make_entry(day1 + timedelta(days=1), primary="Happy")

        report = await services.analytics.get_report(day1, day1 + timedelta(days=1))

        assert report.most_frequent_mood.name == "Happy"
        assert report.most_frequent_mood.count == 1

    @pytest.mark.asyncio
    async def test_only_primary_moods_count(self, services, make_entry, day1):
        await make_entry(day1, primary="Okay", secondary=["Sad", "Angry"])

        report = await services.analytics.get_report(day1, day1)

        assert [p.count for p in report.mood_distribution] == [0, 1, 0]
        assert report.most_frequent_mood.name == "Okay"

    @pytest.mark.asyncio
    async def test_defaults_to_earliest_entry_through_today(self, services, make_entry, day1):
        await make_entry(day1 + timedelta(days=2), content="hi")

        report = await services.analytics.get_report(as_of=day1 + timedelta(days=5))

        assert report.range_start == day1 + timedelta(days=2)
        assert report.range_end == day1 + timedelta(days=5)
        assert len(report.word_count_trend) == 4

    @pytest.mark.asyncio
    async def test_empty_journal(self, services, day1):
        report = await services.analytics.get_report(as_of=day1)

        assert (report.range_start, report.range_end) == (day1, day1)
        assert report.most_frequent_mood is None
        assert report.top_tags == []
        assert [p.word_count for p in report.word_count_trend] == [0]

    @pytest.mark.asyncio
    async def test_top_tags_limit(self, services, make_entry, day1):
        await make_entry(day1, tags=["Goal", "Routine", "Insight"])

        report = await services.analytics.get_report(day1, day1, top_tags=2)
        assert [t.name for t in report.top_tags] == ["Goal", "Insight"]

        report = await services.analytics.get_report(day1, day1, top_tags=0)
        assert len(report.top_tags) == 3


class TestStreakService:
    @pytest.mark.asyncio
    async def test_streaks_from_store(self, services, make_entry, day1):
        for offset in (0, 2, 3):
            await make_entry(day1 + timedelta(days=offset))

        report = await services.streaks.calculate(day1, day1 + timedelta(days=3))

        assert report.current_streak == 2
        assert report.longest_streak == 2
        assert report.missed_days == [day1 + timedelta(days=1)]

    @pytest.mark.asyncio
    async def test_current_streak_stays_inside_range(self, services, make_entry, day1):
        for offset in range(10):
            await make_entry(day1 + timedelta(days=offset))

        report = await services.streaks.calculate(day1 + timedelta(days=7), day1 + timedelta(days=9))

        assert report.current_streak == 3
        assert report.longest_streak == 3
        assert report.missed_days == []

    @pytest.mark.asyncio
    async def test_default_range(self, services, make_entry, day1):
        await make_entry(day1)

        report = await services.streaks.calculate(as_of=day1 + timedelta(days=1))

        assert report.range_start == day1
        assert report.current_streak == 0
        assert report.missed_days == [day1 + timedelta(days=1)]
