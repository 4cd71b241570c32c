"""SQLite category vocabulary adapter."""

from typing import Iterable

from daybook.core.entries import unique_ids
from daybook.core.vocabulary import Category

from .sqlite_db import Database, from_db_timestamp, placeholders, storage_operation

_CATEGORY_COLUMNS = "id, name, is_predefined, created_at, updated_at"


def _row_to_category(row) -> Category:
    return Category(
        id=row["id"],
        name=row["name"],
        is_predefined=bool(row["is_predefined"]),
        created_at=from_db_timestamp(row["created_at"]),
        updated_at=from_db_timestamp(row["updated_at"]),
    )


class SqliteCategoryVocabulary:
    """
    Fixed category reference data.

    Implements CategoryVocabulary protocol.
    """

    def __init__(self, db: Database):
        self.db = db

    @storage_operation("Failed to load categories.")
    async def list_all(self) -> list[Category]:
        async with self.db.connection() as conn:
            async with conn.execute(
                f"SELECT {_CATEGORY_COLUMNS} FROM categories ORDER BY name"
            ) as cursor:
                rows = await cursor.fetchall()
        return [_row_to_category(r) for r in rows]

    @storage_operation("Failed to load category.")
    async def exists(self, category_id: str) -> bool:
        async with self.db.connection() as conn:
            async with conn.execute(
                "SELECT 1 FROM categories WHERE id = ?", (category_id,)
            ) as cursor:
                return await cursor.fetchone() is not None

    @storage_operation("Failed to load categories by ids.")
    async def get_by_ids(self, ids: Iterable[str]) -> list[Category]:
        id_list = unique_ids(ids)
        if not id_list:
            return []
        async with self.db.connection() as conn:
            async with conn.execute(
                f"SELECT {_CATEGORY_COLUMNS} FROM categories WHERE id IN ({placeholders(len(id_list))})",
                id_list,
            ) as cursor:
                rows = await cursor.fetchall()
        return [_row_to_category(r) for r in rows]
