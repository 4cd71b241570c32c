"""SQLite tag vocabulary and tag assignment adapters."""

import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from typing import Iterable

from daybook.core.entries import unique_ids
from daybook.core.vocabulary import Tag, clean_tag_name, normalize_tag_name
from daybook.errors import DataAccessError

from .sqlite_db import Database, from_db_timestamp, placeholders, storage_operation, to_db_timestamp

logger = logging.getLogger(__name__)

_TAG_COLUMNS = "id, name, is_predefined, created_at, updated_at"


def _row_to_tag(row) -> Tag:
    return Tag(
        id=row["id"],
        name=row["name"],
        is_predefined=bool(row["is_predefined"]),
        created_at=from_db_timestamp(row["created_at"]),
        updated_at=from_db_timestamp(row["updated_at"]),
    )


class SqliteTagVocabulary:
    """
    Tag vocabulary.

    Implements TagVocabulary protocol. Tags are unique by normalized name
    and are created on demand.
    """

    def __init__(self, db: Database):
        self.db = db

    @storage_operation("Failed to load tags.")
    async def list_all(self) -> list[Tag]:
        async with self.db.connection() as conn:
            async with conn.execute(f"SELECT {_TAG_COLUMNS} FROM tags ORDER BY name") as cursor:
                rows = await cursor.fetchall()
        return [_row_to_tag(r) for r in rows]

    @storage_operation("Failed to check tag existence.")
    async def exists(self, tag_id: str) -> bool:
        async with self.db.connection() as conn:
            async with conn.execute("SELECT 1 FROM tags WHERE id = ?", (tag_id,)) as cursor:
                return await cursor.fetchone() is not None

    @storage_operation("Failed to load tags by ids.")
    async def get_by_ids(self, ids: Iterable[str]) -> list[Tag]:
        id_list = unique_ids(ids)
        if not id_list:
            return []
        async with self.db.connection() as conn:
            async with conn.execute(
                f"SELECT {_TAG_COLUMNS} FROM tags WHERE id IN ({placeholders(len(id_list))})",
                id_list,
            ) as cursor:
                rows = await cursor.fetchall()
        return [_row_to_tag(r) for r in rows]

    @storage_operation("Failed to load tag by name.")
    async def get_by_normalized_name(self, name: str) -> Tag | None:
        async with self.db.connection() as conn:
            async with conn.execute(
                f"SELECT {_TAG_COLUMNS} FROM tags WHERE normalized_name = ?",
                (normalize_tag_name(name),),
            ) as cursor:
                row = await cursor.fetchone()
        return _row_to_tag(row) if row else None

    async def get_or_create(self, name: str, is_predefined: bool = False) -> Tag:
        """
        Return the tag whose normalized name matches, creating it if absent.

        Creation is optimistic: if another writer inserts the same name
        first, the existing row is fetched and returned instead.
        """
        display_name = clean_tag_name(name)
        key = normalize_tag_name(display_name)

        existing = await self.get_by_normalized_name(key)
        if existing is not None:
            return existing

        now = datetime.now(timezone.utc)
        tag = Tag(
            id=str(uuid.uuid4()),
            name=display_name,
            is_predefined=is_predefined,
            created_at=now,
            updated_at=now,
        )

        try:
            async with self.db.connection() as conn:
                await conn.execute(
                    "INSERT INTO tags (id, name, normalized_name, is_predefined, created_at, updated_at) "
                    "VALUES (?, ?, ?, ?, ?, ?)",
                    (tag.id, tag.name, key, int(is_predefined), to_db_timestamp(now), to_db_timestamp(now)),
                )
        except sqlite3.IntegrityError as e:
            fetched = await self.get_by_normalized_name(key)
            if fetched is not None:
                logger.info(f"Tag '{display_name}' was created concurrently, using existing {fetched.id}")
                return fetched
            logger.error(f"Failed to create tag '{display_name}': {e}")
            raise DataAccessError("Failed to create tag.", e) from e
        except sqlite3.Error as e:
            logger.error(f"Failed to create tag '{display_name}': {e}")
            raise DataAccessError("Failed to create tag.", e) from e

        logger.debug(f"Created tag {tag.id} '{tag.name}'")
        return tag


class SqliteTagLinkStore:
    """
    Tag assignment manager.

    Implements TagLinkStore protocol.
    """

    def __init__(self, db: Database):
        self.db = db

    @storage_operation("Failed to save journal entry tags.")
    async def replace_tags(self, entry_id: str, tag_ids: Iterable[str]) -> None:
        """Delete every tag link of the entry and insert the new set, atomically."""
        ids = unique_ids(tag_ids)
        async with self.db.transaction() as conn:
            await conn.execute("DELETE FROM journal_entry_tags WHERE entry_id = ?", (entry_id,))
            await conn.executemany(
                "INSERT INTO journal_entry_tags (id, entry_id, tag_id) VALUES (?, ?, ?)",
                [(str(uuid.uuid4()), entry_id, tag_id) for tag_id in ids],
            )
        logger.debug(f"Replaced tags of entry {entry_id} ({len(ids)} tags)")

    @storage_operation("Failed to load journal entry tags.")
    async def get_tag_ids(self, entry_id: str) -> list[str]:
        async with self.db.connection() as conn:
            async with conn.execute(
                "SELECT tag_id FROM journal_entry_tags WHERE entry_id = ? ORDER BY rowid",
                (entry_id,),
            ) as cursor:
                rows = await cursor.fetchall()
        return unique_ids(r["tag_id"] for r in rows)

    @storage_operation("Failed to load tags for entries.")
    async def get_tag_ids_by_entry(self, entry_ids: Iterable[str]) -> dict[str, list[str]]:
        ids = unique_ids(entry_ids)
        if not ids:
            return {}
        async with self.db.connection() as conn:
            async with conn.execute(
                "SELECT entry_id, tag_id FROM journal_entry_tags "
                f"WHERE entry_id IN ({placeholders(len(ids))}) ORDER BY rowid",
                ids,
            ) as cursor:
                rows = await cursor.fetchall()

        by_entry: dict[str, list[str]] = {}
        for r in rows:
            tags = by_entry.setdefault(r["entry_id"], [])
            if r["tag_id"] not in tags:
                tags.append(r["tag_id"])
        return by_entry
