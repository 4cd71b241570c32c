"""Dashboard services - analytics report and writing streaks."""

import logging
from datetime import date

from .core.analytics import (
    DEFAULT_TOP_TAGS,
    AnalyticsReport,
    build_mood_distribution,
    build_word_count_trend,
    resolve_range,
)
from .core.streaks import StreakReport, calculate_streaks
from .ports import AnalyticsSource, EntryStore

logger = logging.getLogger(__name__)


async def _resolve(
    entries: EntryStore,
    range_start: date | None,
    range_end: date | None,
    as_of: date | None,
) -> tuple[date, date]:
    earliest = None
    if range_start is None:
        earliest = (await entries.get_min_max_date()).min_date
    return resolve_range(range_start, range_end, earliest, as_of or date.today())


class AnalyticsService:
    """Builds the analytics report for a date range."""

    def __init__(self, entries: EntryStore, source: AnalyticsSource):
        self.entries = entries
        self.source = source

    async def get_report(
        self,
        range_start: date | None = None,
        range_end: date | None = None,
        top_tags: int = DEFAULT_TOP_TAGS,
        as_of: date | None = None,
    ) -> AnalyticsReport:
        """
        Analytics for an inclusive range.

        End defaults to today (or as_of), start to the earliest entry date.
        Mood figures use each entry's primary mood only.
        """
        start, end = await _resolve(self.entries, range_start, range_end, as_of)
        if top_tags <= 0:
            top_tags = DEFAULT_TOP_TAGS

        counts = await self.source.primary_mood_category_counts(start, end)
        most_frequent = await self.source.most_frequent_primary_mood(start, end)
        tags = await self.source.top_tags(start, end, top_tags)
        categories = await self.source.category_breakdown(start, end)
        contents = await self.source.entry_contents(start, end)

        logger.debug(f"Built analytics for {start}..{end} ({len(contents)} entries)")

        return AnalyticsReport(
            range_start=start,
            range_end=end,
            mood_distribution=build_mood_distribution(counts),
            most_frequent_mood=most_frequent,
            top_tags=tags,
            category_breakdown=categories,
            word_count_trend=build_word_count_trend(contents, start, end),
        )


class StreakService:
    """Writing streaks sourced from the entry store."""

    def __init__(self, entries: EntryStore):
        self.entries = entries

    async def calculate(
        self,
        range_start: date | None = None,
        range_end: date | None = None,
        as_of: date | None = None,
    ) -> StreakReport:
        start, end = await _resolve(self.entries, range_start, range_end, as_of)
        entry_dates = await self.entries.get_entry_dates_in_range(start, end)
        return calculate_streaks(entry_dates, start, end)
