"""Journal entry orchestration.

Validates requests and sequences the entry store and the mood and tag
managers into create/update/delete, plus the read-side listings.
"""

import logging
import uuid
from contextlib import contextmanager
from datetime import date, datetime, timedelta, timezone

from .core.entries import (
    EntryListItem,
    EntryQuery,
    EntrySummary,
    JournalEntry,
    MoodSelection,
    check_mood_selection,
    check_tag_ids,
    normalize_content,
    normalize_title,
)
from .errors import ConflictError, DataAccessError, NotFoundError, ValidationError
from .ports import (
    CategoryVocabulary,
    EntryStore,
    MoodLinkStore,
    MoodVocabulary,
    TagLinkStore,
    TagVocabulary,
)

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def next_timestamp(previous: datetime | None = None) -> datetime:
    """Current UTC time, nudged forward so it is strictly after previous."""
    now = _utcnow()
    if previous is not None and now <= previous:
        now = previous + timedelta(microseconds=1)
    return now


@contextmanager
def _service_errors(action: str):
    """Let business-rule errors through and wrap anything else."""
    try:
        yield
    except (ValidationError, NotFoundError, ConflictError):
        raise
    except Exception as e:
        logger.error(f"Failed to {action} journal entry: {e}")
        raise DataAccessError(f"Failed to {action} journal entry.", e) from e


class JournalService:
    """Create, update, delete and list journal entries."""

    def __init__(
        self,
        entries: EntryStore,
        categories: CategoryVocabulary,
        moods: MoodVocabulary,
        mood_links: MoodLinkStore,
        tags: TagVocabulary,
        tag_links: TagLinkStore,
    ):
        self.entries = entries
        self.categories = categories
        self.moods = moods
        self.mood_links = mood_links
        self.tags = tags
        self.tag_links = tag_links

    # ============== Reads ==============

    async def get_by_id(self, entry_id: str) -> JournalEntry | None:
        return await self.entries.get_by_id(entry_id)

    async def get_by_date(self, entry_date: date) -> JournalEntry | None:
        return await self.entries.get_by_date(entry_date)

    async def get_all(self, category_id: str | None = None) -> list[JournalEntry]:
        if category_id:
            return await self.entries.get_all_by_category(category_id)
        return await self.entries.get_all()

    async def get_entry_dates_in_range(self, start: date, end: date) -> list[date]:
        return await self.entries.get_entry_dates_in_range(start, end)

    async def get_mood_selection(self, entry_id: str) -> MoodSelection | None:
        return await self.mood_links.get_selection(entry_id)

    async def get_tag_ids(self, entry_id: str) -> list[str]:
        return await self.tag_links.get_tag_ids(entry_id)

    async def count_by_category(self) -> dict[str, int]:
        """Entry count per category id. Categories without entries are absent."""
        return await self.entries.count_by_category()

    async def get_list_page(self, offset: int = 0, limit: int = 20) -> list[EntryListItem]:
        summaries = await self.entries.list_summaries(offset, limit)
        return await self._hydrate(summaries)

    async def search_list_page(
        self, query: EntryQuery, offset: int = 0, limit: int = 20
    ) -> list[EntryListItem]:
        summaries = await self.entries.search_summaries(query, offset, limit)
        return await self._hydrate(summaries)

    async def _hydrate(self, summaries: list[EntrySummary]) -> list[EntryListItem]:
        """Resolve category, primary mood and tag names for a page of summaries."""
        if not summaries:
            return []

        entry_ids = [s.id for s in summaries]

        categories = await self.categories.get_by_ids({s.category_id for s in summaries})
        category_names = {c.id: c.name for c in categories}

        mood_names = {m.id: m.name for m in await self.moods.list_all()}
        primary_by_entry = await self.mood_links.get_primary_mood_ids_by_entry(entry_ids)

        tag_ids_by_entry = await self.tag_links.get_tag_ids_by_entry(entry_ids)
        all_tag_ids = {t for ids in tag_ids_by_entry.values() for t in ids}
        tag_names = {t.id: t.name for t in await self.tags.get_by_ids(all_tag_ids)}

        return [
            EntryListItem(
                id=s.id,
                entry_date=s.entry_date,
                title=s.title,
                category_name=category_names.get(s.category_id, UNKNOWN),
                primary_mood_name=mood_names.get(primary_by_entry.get(s.id, ""), UNKNOWN),
                tags=[tag_names.get(t, UNKNOWN) for t in tag_ids_by_entry.get(s.id, [])],
            )
            for s in summaries
        ]

    # ============== Writes ==============

    async def create(
        self,
        entry_date: date,
        category_id: str,
        mood_selection: MoodSelection,
        tag_ids: list[str],
        title: str,
        content: str,
    ) -> JournalEntry:
        """
        Create the entry for a date.

        One entry per day: raises ConflictError, without writing anything,
        if the date already has one.
        """
        with _service_errors("create"):
            title, content, tag_ids = self._check_input(category_id, mood_selection, tag_ids, title, content)
            await self._check_references(category_id, mood_selection, tag_ids)

            if await self.entries.get_by_date(entry_date) is not None:
                raise ConflictError(f"An entry for {entry_date.isoformat()} already exists.")

            now = _utcnow()
            entry = JournalEntry(
                id=str(uuid.uuid4()),
                entry_date=entry_date,
                category_id=category_id,
                title=title,
                content=content,
                created_at=now,
                updated_at=now,
            )

            await self.entries.insert(entry)
            await self.mood_links.replace_selection(entry.id, mood_selection)
            await self.tag_links.replace_tags(entry.id, tag_ids)

        logger.info(f"Created entry {entry.id} for {entry_date}")
        return entry

    async def update(
        self,
        entry_id: str,
        category_id: str,
        mood_selection: MoodSelection,
        tag_ids: list[str],
        title: str,
        content: str,
    ) -> JournalEntry:
        """Update an existing entry. Its date and created_at are preserved."""
        with _service_errors("update"):
            title, content, tag_ids = self._check_input(category_id, mood_selection, tag_ids, title, content)

            existing = await self.entries.get_by_id(entry_id)
            if existing is None:
                raise NotFoundError("Journal entry does not exist.")

            await self._check_references(category_id, mood_selection, tag_ids)

            updated = JournalEntry(
                id=existing.id,
                entry_date=existing.entry_date,
                category_id=category_id,
                title=title,
                content=content,
                created_at=existing.created_at,
                updated_at=next_timestamp(existing.updated_at),
            )

            await self.entries.update(updated)
            await self.mood_links.replace_selection(updated.id, mood_selection)
            await self.tag_links.replace_tags(updated.id, tag_ids)

        logger.info(f"Updated entry {entry_id}")
        return updated

    async def delete(self, entry_id: str) -> None:
        """
        Delete an entry and its relations. Missing entries are ignored.

        Relations go first so none can outlive the entry if a later step fails.
        """
        with _service_errors("delete"):
            existing = await self.entries.get_by_id(entry_id)
            if existing is None:
                return

            await self.tag_links.replace_tags(entry_id, [])
            await self.mood_links.delete_selection(entry_id)
            await self.entries.delete(entry_id)

        logger.info(f"Deleted entry {entry_id}")

    # ============== Validation ==============

    @staticmethod
    def _check_input(
        category_id: str,
        mood_selection: MoodSelection,
        tag_ids: list[str] | None,
        title: str,
        content: str,
    ) -> tuple[str, str, list[str]]:
        """Checks that need no I/O. Returns normalized title, content and tag ids."""
        if not category_id:
            raise ValidationError("Category is required.")
        check_mood_selection(mood_selection)
        clean_tag_ids = check_tag_ids(tag_ids)
        return normalize_title(title), normalize_content(content), clean_tag_ids

    async def _check_references(
        self,
        category_id: str,
        mood_selection: MoodSelection,
        tag_ids: list[str],
    ) -> None:
        """Every referenced category, mood and tag must exist."""
        if not await self.categories.exists(category_id):
            raise NotFoundError("Selected category does not exist.")

        if not await self.moods.exists(mood_selection.primary_mood_id):
            raise NotFoundError("Selected primary mood does not exist.")
        for mood_id in check_mood_selection(mood_selection):
            if not await self.moods.exists(mood_id):
                raise NotFoundError("One of the selected secondary moods does not exist.")

        if tag_ids:
            found = await self.tags.get_by_ids(tag_ids)
            if len(found) != len(tag_ids):
                raise NotFoundError("One or more selected tags do not exist.")
