"""Functional core - pure business logic with no I/O."""

from .entries import (
    JournalEntry,
    MoodSelection,
    EntrySummary,
    EntryListItem,
    EntryQuery,
    EntryDateRange,
    normalize_title,
    normalize_content,
    check_mood_selection,
    check_tag_ids,
)
from .vocabulary import Mood, MoodCategory, Category, Tag, normalize_tag_name
from .streaks import StreakReport, calculate_streaks
from .analytics import (
    AnalyticsReport,
    MoodDistributionPoint,
    MoodFrequency,
    TagUsage,
    CategoryBreakdownItem,
    WordCountPoint,
    count_words,
    build_mood_distribution,
    build_word_count_trend,
)

__all__ = [
    # Entries
    "JournalEntry",
    "MoodSelection",
    "EntrySummary",
    "EntryListItem",
    "EntryQuery",
    "EntryDateRange",
    "normalize_title",
    "normalize_content",
    "check_mood_selection",
    "check_tag_ids",
    # Vocabulary
    "Mood",
    "MoodCategory",
    "Category",
    "Tag",
    "normalize_tag_name",
    # Streaks
    "StreakReport",
    "calculate_streaks",
    # Analytics
    "AnalyticsReport",
    "MoodDistributionPoint",
    "MoodFrequency",
    "TagUsage",
    "CategoryBreakdownItem",
    "WordCountPoint",
    "count_words",
    "build_mood_distribution",
    "build_word_count_trend",
]
