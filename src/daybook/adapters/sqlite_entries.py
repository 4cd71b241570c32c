"""SQLite journal entry storage adapter."""

import logging
import sqlite3
from datetime import date

from daybook.core.entries import (
    EntryDateRange,
    EntryQuery,
    EntrySummary,
    JournalEntry,
    clamp_page,
)
from daybook.errors import ConflictError, DataAccessError

from .sqlite_db import (
    Database,
    from_db_date,
    from_db_timestamp,
    storage_operation,
    to_db_date,
    to_db_timestamp,
)
from .sqlite_query import build_search_sql

logger = logging.getLogger(__name__)

_ENTRY_COLUMNS = "id, entry_date, category_id, title, content, created_at, updated_at"


def _row_to_entry(row) -> JournalEntry:
    return JournalEntry(
        id=row["id"],
        entry_date=from_db_date(row["entry_date"]),
        category_id=row["category_id"],
        title=row["title"],
        content=row["content"] or "",
        created_at=from_db_timestamp(row["created_at"]),
        updated_at=from_db_timestamp(row["updated_at"]),
    )


def _row_to_summary(row) -> EntrySummary:
    return EntrySummary(
        id=row["id"],
        entry_date=from_db_date(row["entry_date"]),
        title=row["title"],
        category_id=row["category_id"],
    )


def _entry_params(entry: JournalEntry) -> tuple:
    return (
        entry.id,
        to_db_date(entry.entry_date),
        entry.category_id,
        entry.title,
        entry.content,
        to_db_timestamp(entry.created_at),
        to_db_timestamp(entry.updated_at),
    )


class SqliteEntryStore:
    """
    SQLite journal entry storage.

    Implements EntryStore protocol. No business logic - just I/O.
    """

    def __init__(self, db: Database):
        self.db = db

    async def _fetch_entries(self, sql: str, params: tuple = ()) -> list[JournalEntry]:
        async with self.db.connection() as conn:
            async with conn.execute(sql, params) as cursor:
                rows = await cursor.fetchall()
        return [_row_to_entry(r) for r in rows]

    @storage_operation("Failed to load journal entry.")
    async def get_by_id(self, entry_id: str) -> JournalEntry | None:
        entries = await self._fetch_entries(
            f"SELECT {_ENTRY_COLUMNS} FROM journal_entries WHERE id = ?", (entry_id,)
        )
        return entries[0] if entries else None

    @storage_operation("Failed to load journal entry by date.")
    async def get_by_date(self, entry_date: date) -> JournalEntry | None:
        entries = await self._fetch_entries(
            f"SELECT {_ENTRY_COLUMNS} FROM journal_entries WHERE entry_date = ?",
            (to_db_date(entry_date),),
        )
        return entries[0] if entries else None

    @storage_operation("Failed to load journal entries.")
    async def get_all(self) -> list[JournalEntry]:
        return await self._fetch_entries(
            f"SELECT {_ENTRY_COLUMNS} FROM journal_entries ORDER BY entry_date DESC"
        )

    @storage_operation("Failed to load journal entries by category.")
    async def get_all_by_category(self, category_id: str) -> list[JournalEntry]:
        return await self._fetch_entries(
            f"SELECT {_ENTRY_COLUMNS} FROM journal_entries WHERE category_id = ? "
            "ORDER BY entry_date DESC",
            (category_id,),
        )

    @storage_operation("Failed to load entries in range.")
    async def get_in_range(self, start: date, end: date) -> list[JournalEntry]:
        return await self._fetch_entries(
            f"SELECT {_ENTRY_COLUMNS} FROM journal_entries "
            "WHERE entry_date >= ? AND entry_date <= ? ORDER BY entry_date DESC",
            (to_db_date(start), to_db_date(end)),
        )

    @storage_operation("Failed to load entry dates.")
    async def get_entry_dates_in_range(self, start: date, end: date) -> list[date]:
        async with self.db.connection() as conn:
            async with conn.execute(
                "SELECT DISTINCT entry_date FROM journal_entries "
                "WHERE entry_date >= ? AND entry_date <= ? ORDER BY entry_date",
                (to_db_date(start), to_db_date(end)),
            ) as cursor:
                rows = await cursor.fetchall()
        return [from_db_date(r["entry_date"]) for r in rows]

    @storage_operation("Failed to load min/max entry dates.")
    async def get_min_max_date(self) -> EntryDateRange:
        async with self.db.connection() as conn:
            async with conn.execute(
                "SELECT MIN(entry_date) AS min_date, MAX(entry_date) AS max_date FROM journal_entries"
            ) as cursor:
                row = await cursor.fetchone()

        if row is None:
            return EntryDateRange()
        return EntryDateRange(
            min_date=from_db_date(row["min_date"]) if row["min_date"] else None,
            max_date=from_db_date(row["max_date"]) if row["max_date"] else None,
        )

    async def insert(self, entry: JournalEntry) -> None:
        """Insert an entry. Raises ConflictError if its date is taken."""
        try:
            async with self.db.connection() as conn:
                await conn.execute(
                    f"INSERT INTO journal_entries ({_ENTRY_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                    _entry_params(entry),
                )
        except sqlite3.IntegrityError as e:
            if "entry_date" in str(e):
                raise ConflictError(
                    f"An entry for {entry.entry_date.isoformat()} already exists."
                ) from e
            logger.error(f"Failed to add journal entry: {e}")
            raise DataAccessError("Failed to add journal entry.", e) from e
        except sqlite3.Error as e:
            logger.error(f"Failed to add journal entry: {e}")
            raise DataAccessError("Failed to add journal entry.", e) from e

        logger.debug(f"Inserted entry {entry.id} for {entry.entry_date}")

    @storage_operation("Failed to update journal entry.")
    async def update(self, entry: JournalEntry) -> None:
        async with self.db.connection() as conn:
            await conn.execute(
                "UPDATE journal_entries SET entry_date = ?, category_id = ?, title = ?, "
                "content = ?, created_at = ?, updated_at = ? WHERE id = ?",
                (*_entry_params(entry)[1:], entry.id),
            )
        logger.debug(f"Updated entry {entry.id}")

    @storage_operation("Failed to delete journal entry.")
    async def delete(self, entry_id: str) -> None:
        async with self.db.connection() as conn:
            await conn.execute("DELETE FROM journal_entries WHERE id = ?", (entry_id,))
        logger.debug(f"Deleted entry {entry_id}")

    @storage_operation("Failed to load journal analytics.")
    async def count_by_category(self) -> dict[str, int]:
        async with self.db.connection() as conn:
            async with conn.execute(
                "SELECT category_id, COUNT(*) AS n FROM journal_entries GROUP BY category_id"
            ) as cursor:
                rows = await cursor.fetchall()
        return {r["category_id"]: r["n"] for r in rows}

    @storage_operation("Failed to load journal entry summaries.")
    async def list_summaries(self, offset: int, limit: int) -> list[EntrySummary]:
        offset, limit = clamp_page(offset, limit)
        async with self.db.connection() as conn:
            async with conn.execute(
                "SELECT id, entry_date, title, category_id FROM journal_entries "
                "ORDER BY entry_date DESC LIMIT ? OFFSET ?",
                (limit, offset),
            ) as cursor:
                rows = await cursor.fetchall()
        return [_row_to_summary(r) for r in rows]

    @storage_operation("Failed to search journal entry summaries.")
    async def search_summaries(
        self, query: EntryQuery, offset: int, limit: int
    ) -> list[EntrySummary]:
        sql, params = build_search_sql(query, offset, limit)
        async with self.db.connection() as conn:
            async with conn.execute(sql, params) as cursor:
                rows = await cursor.fetchall()
        return [_row_to_summary(r) for r in rows]
