"""Pure journal entry domain logic - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import date, datetime

from daybook.errors import ValidationError

TITLE_MAX_LENGTH = 200
MAX_SECONDARY_MOODS = 2
DEFAULT_PAGE_SIZE = 20


@dataclass(frozen=True)
class JournalEntry:
    """One journal record, unique per calendar date."""

    id: str
    entry_date: date
    category_id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class MoodSelection:
    """Primary mood plus up to two ordered secondary moods."""

    primary_mood_id: str
    secondary_mood_ids: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class EntrySummary:
    """Lightweight row returned by listings."""

    id: str
    entry_date: date
    title: str
    category_id: str


@dataclass(frozen=True)
class EntryListItem:
    """A summary with its references resolved to display names."""

    id: str
    entry_date: date
    title: str
    category_name: str
    primary_mood_name: str
    tags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class EntryQuery:
    """
    Search filters, all optional and combined with AND.

    mood_ids and tag_ids match entries linked to every id in the set.
    """

    search_text: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    category_id: str | None = None
    mood_ids: list[str] = field(default_factory=list)
    tag_ids: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class EntryDateRange:
    """Earliest and latest entry dates, None when the journal is empty."""

    min_date: date | None = None
    max_date: date | None = None


def normalize_title(title: str | None) -> str:
    """Trim, require, and truncate a title."""
    title = (title or "").strip()
    if not title:
        raise ValidationError("Title is required.")
    return title[:TITLE_MAX_LENGTH]


def normalize_content(content: str | None) -> str:
    return (content or "").strip()


def check_mood_selection(selection: MoodSelection | None) -> list[str]:
    """
    Validate the shape of a mood selection.

    Empty secondary ids are ignored. Returns the cleaned secondary ids.
    Pure function - existence of the ids is checked by the caller.
    """
    if selection is None:
        raise ValidationError("Mood selection is required.")
    if not selection.primary_mood_id:
        raise ValidationError("Primary mood is required.")

    secondary = [m for m in (selection.secondary_mood_ids or []) if m]
    if len(secondary) > MAX_SECONDARY_MOODS:
        raise ValidationError("Up to two secondary moods are allowed.")
    if selection.primary_mood_id in secondary:
        raise ValidationError("Primary mood cannot be also selected as secondary.")
    if len(set(secondary)) != len(secondary):
        raise ValidationError("Secondary moods must be distinct.")
    return secondary


def check_tag_ids(tag_ids: list[str] | None) -> list[str]:
    """Reject duplicate tag ids. Returns the non-empty ids in order."""
    ids = [t for t in (tag_ids or []) if t]
    if len(set(ids)) != len(ids):
        raise ValidationError("Duplicate tags are not allowed.")
    return ids


def unique_ids(ids) -> list[str]:
    """Drop empty ids and duplicates, keeping first-seen order."""
    return list(dict.fromkeys(i for i in (ids or []) if i))


def clamp_page(offset: int, limit: int) -> tuple[int, int]:
    """Negative offset becomes 0, non-positive limit becomes the default page size."""
    if offset < 0:
        offset = 0
    if limit <= 0:
        limit = DEFAULT_PAGE_SIZE
    return offset, limit


def escape_like(text: str, escape: str = "\\") -> str:
    """Escape LIKE metacharacters so user text matches literally."""
    return (
        text.replace(escape, escape + escape)
        .replace("%", escape + "%")
        .replace("_", escape + "_")
    )
