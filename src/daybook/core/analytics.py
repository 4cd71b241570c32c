"""Pure analytics logic - no I/O dependencies."""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date

from .streaks import iter_days
from .vocabulary import MoodCategory

DEFAULT_TOP_TAGS = 10

# Runs of Unicode letters/digits (\w minus underscore) and apostrophes.
_WORD_PATTERN = re.compile(r"\b(?:[^\W_]|')+\b")


@dataclass(frozen=True)
class MoodDistributionPoint:
    category: MoodCategory
    count: int
    percentage: float


@dataclass(frozen=True)
class MoodFrequency:
    mood_id: str
    name: str
    category: MoodCategory
    count: int


@dataclass(frozen=True)
class TagUsage:
    tag_id: str
    name: str
    count: int


@dataclass(frozen=True)
class CategoryBreakdownItem:
    category_id: str
    name: str
    count: int


@dataclass(frozen=True)
class WordCountPoint:
    date: date
    word_count: int


@dataclass(frozen=True)
class AnalyticsReport:
    """Dashboard analytics for an inclusive date range."""

    range_start: date
    range_end: date
    mood_distribution: list[MoodDistributionPoint] = field(default_factory=list)
    most_frequent_mood: MoodFrequency | None = None
    top_tags: list[TagUsage] = field(default_factory=list)
    category_breakdown: list[CategoryBreakdownItem] = field(default_factory=list)
    word_count_trend: list[WordCountPoint] = field(default_factory=list)

    @property
    def total_entries(self) -> int:
        return sum(p.count for p in self.mood_distribution)

    @property
    def total_words(self) -> int:
        return sum(p.word_count for p in self.word_count_trend)


def resolve_range(
    range_start: date | None,
    range_end: date | None,
    earliest: date | None,
    today: date,
) -> tuple[date, date]:
    """
    Apply range defaults: end is today, start is the earliest entry
    (or end when there are none). A reversed range is swapped.
    """
    end = range_end or today
    start = range_start or earliest or end
    if start > end:
        start, end = end, start
    return start, end


def count_words(text: str | None) -> int:
    """Count words. Empty or whitespace-only text counts as 0."""
    if not text or not text.strip():
        return 0
    return len(_WORD_PATTERN.findall(text))


def build_mood_distribution(
    counts: Mapping[MoodCategory, int],
) -> list[MoodDistributionPoint]:
    """
    One point per mood category, in Positive/Neutral/Negative order.

    Percentages are of the total across categories, 0 when the total is 0.
    """
    total = sum(counts.get(c, 0) for c in MoodCategory)

    def pct(count: int) -> float:
        return 0.0 if total == 0 else count * 100.0 / total

    return [
        MoodDistributionPoint(category=c, count=counts.get(c, 0), percentage=pct(counts.get(c, 0)))
        for c in MoodCategory
    ]


def build_word_count_trend(
    contents: Iterable[tuple[date, str]],
    start: date,
    end: date,
) -> list[WordCountPoint]:
    """
    Sum word counts per day. Every day in range gets a point, zero included.

    Pure function - no I/O.
    """
    by_date: dict[date, int] = {}
    for entry_date, content in contents:
        by_date[entry_date] = by_date.get(entry_date, 0) + count_words(content)

    return [WordCountPoint(date=d, word_count=by_date.get(d, 0)) for d in iter_days(start, end)]
