"""Mood, category and tag vocabularies - no I/O dependencies."""

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum

from daybook.errors import ValidationError

TAG_NAME_MAX_LENGTH = 100


class MoodCategory(IntEnum):
    """Coarse grouping a mood belongs to."""

    POSITIVE = 1
    NEUTRAL = 2
    NEGATIVE = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True)
class Mood:
    """A mood from the fixed mood vocabulary."""

    id: str
    name: str
    category: MoodCategory
    is_predefined: bool = True


@dataclass(frozen=True)
class Category:
    """An entry category."""

    id: str
    name: str
    is_predefined: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class Tag:
    """A label attachable to many entries, unique by normalized name."""

    id: str
    name: str
    is_predefined: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


# Stable ids so seeding is idempotent and defaults are reproducible.
PREDEFINED_CATEGORIES: list[tuple[str, str]] = [
    ("11111111-1111-1111-1111-111111111111", "Work"),
    ("22222222-2222-2222-2222-222222222222", "Health"),
    ("33333333-3333-3333-3333-333333333333", "Travel"),
    ("44444444-4444-4444-4444-444444444444", "Personal Growth"),
    ("55555555-5555-5555-5555-555555555555", "Reflection"),
]
DEFAULT_CATEGORY_ID = "55555555-5555-5555-5555-555555555555"

PREDEFINED_MOODS: list[tuple[str, str, MoodCategory]] = [
    # Positive
    ("a1111111-1111-1111-1111-111111111111", "Happy", MoodCategory.POSITIVE),
    ("a2222222-2222-2222-2222-222222222222", "Excited", MoodCategory.POSITIVE),
    ("a3333333-3333-3333-3333-333333333333", "Grateful", MoodCategory.POSITIVE),
    ("a4444444-4444-4444-4444-444444444444", "Calm", MoodCategory.POSITIVE),
    # Neutral
    ("b1111111-1111-1111-1111-111111111111", "Okay", MoodCategory.NEUTRAL),
    ("b2222222-2222-2222-2222-222222222222", "Tired", MoodCategory.NEUTRAL),
    ("b3333333-3333-3333-3333-333333333333", "Bored", MoodCategory.NEUTRAL),
    # Negative
    ("c1111111-1111-1111-1111-111111111111", "Sad", MoodCategory.NEGATIVE),
    ("c2222222-2222-2222-2222-222222222222", "Anxious", MoodCategory.NEGATIVE),
    ("c3333333-3333-3333-3333-333333333333", "Stressed", MoodCategory.NEGATIVE),
    ("c4444444-4444-4444-4444-444444444444", "Angry", MoodCategory.NEGATIVE),
]
DEFAULT_PRIMARY_MOOD_ID = "b1111111-1111-1111-1111-111111111111"

PREDEFINED_TAGS: list[tuple[str, str]] = [
    ("66666666-6666-6666-6666-666666666666", "Routine"),
    ("77777777-7777-7777-7777-777777777777", "Milestone"),
    ("88888888-8888-8888-8888-888888888888", "Insight"),
    ("99999999-9999-9999-9999-999999999999", "Goal"),
]


def clean_tag_name(name: str | None) -> str:
    """
    Trim a tag name for display and cap its length.

    Raises ValidationError if nothing is left.
    """
    name = (name or "").strip()
    if not name:
        raise ValidationError("Tag name is required.")
    return name[:TAG_NAME_MAX_LENGTH].rstrip()


def normalize_tag_name(name: str | None) -> str:
    """Lookup key for a tag: whitespace collapsed and case-folded."""
    return " ".join((name or "").split()).casefold()
