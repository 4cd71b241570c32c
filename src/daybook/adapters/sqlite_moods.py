"""SQLite mood vocabulary and mood assignment adapters."""

import logging
import uuid
from typing import Iterable

from daybook.core.entries import MAX_SECONDARY_MOODS, MoodSelection, check_mood_selection, unique_ids
from daybook.core.vocabulary import Mood, MoodCategory

from .sqlite_db import ROLE_PRIMARY, ROLE_SECONDARY, Database, placeholders, storage_operation

logger = logging.getLogger(__name__)


def _row_to_mood(row) -> Mood:
    return Mood(
        id=row["id"],
        name=row["name"],
        category=MoodCategory(row["category"]),
        is_predefined=bool(row["is_predefined"]),
    )


def _selection_from_rows(rows) -> MoodSelection | None:
    """Rebuild a selection from (mood_id, role, position) rows of one entry."""
    primary = next((r["mood_id"] for r in rows if r["role"] == ROLE_PRIMARY), None)
    if not primary:
        return None
    secondary = sorted(
        (r for r in rows if r["role"] == ROLE_SECONDARY and r["mood_id"]),
        key=lambda r: r["position"],
    )
    return MoodSelection(
        primary_mood_id=primary,
        secondary_mood_ids=[r["mood_id"] for r in secondary][:MAX_SECONDARY_MOODS],
    )


class SqliteMoodVocabulary:
    """
    Fixed mood reference data.

    Implements MoodVocabulary protocol.
    """

    def __init__(self, db: Database):
        self.db = db

    @storage_operation("Failed to load moods.")
    async def list_all(self) -> list[Mood]:
        async with self.db.connection() as conn:
            async with conn.execute(
                "SELECT id, name, category, is_predefined FROM moods ORDER BY category, name"
            ) as cursor:
                rows = await cursor.fetchall()
        return [_row_to_mood(r) for r in rows]

    @storage_operation("Failed to check mood existence.")
    async def exists(self, mood_id: str) -> bool:
        async with self.db.connection() as conn:
            async with conn.execute("SELECT 1 FROM moods WHERE id = ?", (mood_id,)) as cursor:
                return await cursor.fetchone() is not None

    @storage_operation("Failed to load moods by ids.")
    async def get_by_ids(self, ids: Iterable[str]) -> list[Mood]:
        id_list = unique_ids(ids)
        if not id_list:
            return []
        async with self.db.connection() as conn:
            async with conn.execute(
                f"SELECT id, name, category, is_predefined FROM moods WHERE id IN ({placeholders(len(id_list))})",
                id_list,
            ) as cursor:
                rows = await cursor.fetchall()
        return [_row_to_mood(r) for r in rows]


class SqliteMoodLinkStore:
    """
    Mood assignment manager.

    Implements MoodLinkStore protocol. Each entry has exactly one primary
    link and up to two secondary links at positions 1 and 2.
    """

    def __init__(self, db: Database):
        self.db = db

    async def replace_selection(self, entry_id: str, selection: MoodSelection) -> None:
        """Delete every mood link of the entry and insert the new ones, atomically."""
        secondary = check_mood_selection(selection)
        await self._replace(entry_id, selection.primary_mood_id, secondary)

    @storage_operation("Failed to save mood selection.")
    async def _replace(self, entry_id: str, primary: str, secondary: list[str]) -> None:
        rows = [(str(uuid.uuid4()), entry_id, primary, ROLE_PRIMARY, 0)]
        rows.extend(
            (str(uuid.uuid4()), entry_id, mood_id, ROLE_SECONDARY, position)
            for position, mood_id in enumerate(secondary, start=1)
        )

        async with self.db.transaction() as conn:
            await conn.execute("DELETE FROM journal_entry_moods WHERE entry_id = ?", (entry_id,))
            await conn.executemany(
                "INSERT INTO journal_entry_moods (id, entry_id, mood_id, role, position) "
                "VALUES (?, ?, ?, ?, ?)",
                rows,
            )
        logger.debug(f"Replaced mood selection of entry {entry_id} ({len(rows)} links)")

    @storage_operation("Failed to load mood selection.")
    async def get_selection(self, entry_id: str) -> MoodSelection | None:
        async with self.db.connection() as conn:
            async with conn.execute(
                "SELECT mood_id, role, position FROM journal_entry_moods WHERE entry_id = ?",
                (entry_id,),
            ) as cursor:
                rows = await cursor.fetchall()
        return _selection_from_rows(rows)

    @storage_operation("Failed to load primary moods for entries.")
    async def get_primary_mood_ids_by_entry(self, entry_ids: Iterable[str]) -> dict[str, str]:
        ids = unique_ids(entry_ids)
        if not ids:
            return {}
        async with self.db.connection() as conn:
            async with conn.execute(
                "SELECT entry_id, mood_id FROM journal_entry_moods "
                f"WHERE role = ? AND entry_id IN ({placeholders(len(ids))})",
                [ROLE_PRIMARY, *ids],
            ) as cursor:
                rows = await cursor.fetchall()
        return {r["entry_id"]: r["mood_id"] for r in rows}

    @storage_operation("Failed to load mood selections for entries.")
    async def get_selections_by_entry(self, entry_ids: Iterable[str]) -> dict[str, MoodSelection]:
        ids = unique_ids(entry_ids)
        if not ids:
            return {}
        async with self.db.connection() as conn:
            async with conn.execute(
                "SELECT entry_id, mood_id, role, position FROM journal_entry_moods "
                f"WHERE entry_id IN ({placeholders(len(ids))})",
                ids,
            ) as cursor:
                rows = await cursor.fetchall()

        grouped: dict[str, list] = {}
        for r in rows:
            grouped.setdefault(r["entry_id"], []).append(r)

        selections = {}
        for entry_id, entry_rows in grouped.items():
            selection = _selection_from_rows(entry_rows)
            if selection is not None:
                selections[entry_id] = selection
        return selections

    @storage_operation("Failed to delete mood selection.")
    async def delete_selection(self, entry_id: str) -> None:
        async with self.db.connection() as conn:
            await conn.execute("DELETE FROM journal_entry_moods WHERE entry_id = ?", (entry_id,))
