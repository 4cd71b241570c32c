"""Journal entry storage interface."""

from datetime import date
from typing import Protocol

from daybook.core.entries import EntryDateRange, EntryQuery, EntrySummary, JournalEntry


class EntryStore(Protocol):
    """Interface for durable journal entries keyed by a unique calendar date."""

    async def get_by_id(self, entry_id: str) -> JournalEntry | None:
        """Return the entry with this id, or None."""
        ...

    async def get_by_date(self, entry_date: date) -> JournalEntry | None:
        """Return the entry for this date, or None."""
        ...

    async def get_all(self) -> list[JournalEntry]:
        """All entries, newest date first."""
        ...

    async def get_all_by_category(self, category_id: str) -> list[JournalEntry]:
        """All entries in a category, newest date first."""
        ...

    async def get_in_range(self, start: date, end: date) -> list[JournalEntry]:
        """Entries with start <= date <= end, newest date first."""
        ...

    async def get_entry_dates_in_range(self, start: date, end: date) -> list[date]:
        """Distinct entry dates with start <= date <= end."""
        ...

    async def get_min_max_date(self) -> EntryDateRange:
        """Earliest and latest entry dates."""
        ...

    async def insert(self, entry: JournalEntry) -> None:
        """Insert an entry. Raises ConflictError if its date is taken."""
        ...

    async def update(self, entry: JournalEntry) -> None:
        """Overwrite an existing entry row."""
        ...

    async def delete(self, entry_id: str) -> None:
        """Delete an entry row. Missing ids are ignored."""
        ...

    async def count_by_category(self) -> dict[str, int]:
        """Entry count per category id."""
        ...

    async def list_summaries(self, offset: int, limit: int) -> list[EntrySummary]:
        """One page of summaries, newest date first."""
        ...

    async def search_summaries(
        self, query: EntryQuery, offset: int, limit: int
    ) -> list[EntrySummary]:
        """One page of summaries matching every filter in query."""
        ...
