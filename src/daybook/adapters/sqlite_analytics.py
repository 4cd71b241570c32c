"""SQLite analytics aggregates adapter."""

from datetime import date

from daybook.core.analytics import (
    DEFAULT_TOP_TAGS,
    CategoryBreakdownItem,
    MoodFrequency,
    TagUsage,
)
from daybook.core.vocabulary import MoodCategory

from .sqlite_db import ROLE_PRIMARY, Database, from_db_date, storage_operation, to_db_date


class SqliteAnalyticsSource:
    """
    Aggregate queries over an inclusive date range.

    Implements AnalyticsSource protocol. Mood figures count only each
    entry's primary mood.
    """

    def __init__(self, db: Database):
        self.db = db

    async def _fetch(self, sql: str, params) -> list:
        async with self.db.connection() as conn:
            async with conn.execute(sql, params) as cursor:
                return await cursor.fetchall()

    @storage_operation("Failed to load mood distribution.")
    async def primary_mood_category_counts(self, start: date, end: date) -> dict[MoodCategory, int]:
        rows = await self._fetch(
            "SELECT m.category AS category, COUNT(*) AS n "
            "FROM journal_entries e "
            "JOIN journal_entry_moods jem ON jem.entry_id = e.id AND jem.role = ? "
            "JOIN moods m ON m.id = jem.mood_id "
            "WHERE e.entry_date >= ? AND e.entry_date <= ? "
            "GROUP BY m.category",
            (ROLE_PRIMARY, to_db_date(start), to_db_date(end)),
        )
        return {MoodCategory(r["category"]): r["n"] for r in rows}

    @storage_operation("Failed to load most frequent mood.")
    async def most_frequent_primary_mood(self, start: date, end: date) -> MoodFrequency | None:
        rows = await self._fetch(
            "SELECT m.id AS mood_id, m.name AS name, m.category AS category, COUNT(*) AS n "
            "FROM journal_entries e "
            "JOIN journal_entry_moods jem ON jem.entry_id = e.id AND jem.role = ? "
            "JOIN moods m ON m.id = jem.mood_id "
            "WHERE e.entry_date >= ? AND e.entry_date <= ? "
            "GROUP BY m.id, m.name, m.category "
            "ORDER BY n DESC, m.name ASC "
            "LIMIT 1",
            (ROLE_PRIMARY, to_db_date(start), to_db_date(end)),
        )
        if not rows:
            return None
        row = rows[0]
        return MoodFrequency(
            mood_id=row["mood_id"],
            name=row["name"],
            category=MoodCategory(row["category"]),
            count=row["n"],
        )

    @storage_operation("Failed to load top tags.")
    async def top_tags(self, start: date, end: date, limit: int) -> list[TagUsage]:
        if limit <= 0:
            limit = DEFAULT_TOP_TAGS
        rows = await self._fetch(
            "SELECT t.id AS tag_id, t.name AS name, COUNT(*) AS n "
            "FROM journal_entries e "
            "JOIN journal_entry_tags jet ON jet.entry_id = e.id "
            "JOIN tags t ON t.id = jet.tag_id "
            "WHERE e.entry_date >= ? AND e.entry_date <= ? "
            "GROUP BY t.id, t.name "
            "ORDER BY n DESC, t.name ASC "
            "LIMIT ?",
            (to_db_date(start), to_db_date(end), limit),
        )
        return [TagUsage(tag_id=r["tag_id"], name=r["name"], count=r["n"]) for r in rows]

    @storage_operation("Failed to load category breakdown.")
    async def category_breakdown(self, start: date, end: date) -> list[CategoryBreakdownItem]:
        rows = await self._fetch(
            "SELECT c.id AS category_id, c.name AS name, COUNT(*) AS n "
            "FROM journal_entries e "
            "JOIN categories c ON c.id = e.category_id "
            "WHERE e.entry_date >= ? AND e.entry_date <= ? "
            "GROUP BY c.id, c.name "
            "ORDER BY n DESC, c.name ASC",
            (to_db_date(start), to_db_date(end)),
        )
        return [
            CategoryBreakdownItem(category_id=r["category_id"], name=r["name"], count=r["n"])
            for r in rows
        ]

    @storage_operation("Failed to load content for word trend.")
    async def entry_contents(self, start: date, end: date) -> list[tuple[date, str]]:
        rows = await self._fetch(
            "SELECT entry_date, content FROM journal_entries "
            "WHERE entry_date >= ? AND entry_date <= ?",
            (to_db_date(start), to_db_date(end)),
        )
        return [(from_db_date(r["entry_date"]), r["content"] or "") for r in rows]
