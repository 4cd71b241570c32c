"""Raw analytics aggregates interface."""

from datetime import date
from typing import Protocol

from daybook.core.analytics import CategoryBreakdownItem, MoodFrequency, TagUsage
from daybook.core.vocabulary import MoodCategory


class AnalyticsSource(Protocol):
    """Interface for pulling aggregates over an inclusive date range."""

    async def primary_mood_category_counts(self, start: date, end: date) -> dict[MoodCategory, int]:
        """Entry count per category of the entry's primary mood."""
        ...

    async def most_frequent_primary_mood(self, start: date, end: date) -> MoodFrequency | None:
        """Most used primary mood, ties broken by name ascending."""
        ...

    async def top_tags(self, start: date, end: date, limit: int) -> list[TagUsage]:
        """Most used tags, ties broken by name ascending."""
        ...

    async def category_breakdown(self, start: date, end: date) -> list[CategoryBreakdownItem]:
        """Entry count per category, count descending then name ascending."""
        ...

    async def entry_contents(self, start: date, end: date) -> list[tuple[date, str]]:
        """(date, content) of every entry in range."""
        ...
