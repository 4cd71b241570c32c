"""SQLite database adapter - connections, transactions and schema."""

import functools
import logging
from contextlib import asynccontextmanager
from datetime import date, datetime, timezone
from pathlib import Path
from typing import AsyncIterator

import aiosqlite

from daybook.core.vocabulary import (
    PREDEFINED_CATEGORIES,
    PREDEFINED_MOODS,
    PREDEFINED_TAGS,
    normalize_tag_name,
)
from daybook.errors import DataAccessError

logger = logging.getLogger(__name__)

# Mood link roles
ROLE_PRIMARY = 1
ROLE_SECONDARY = 2

SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS categories (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL UNIQUE,
        is_predefined INTEGER NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS moods (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL UNIQUE,
        category INTEGER NOT NULL,
        is_predefined INTEGER NOT NULL DEFAULT 1
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS tags (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        normalized_name TEXT NOT NULL UNIQUE,
        is_predefined INTEGER NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    # entry_date is ISO YYYY-MM-DD so lexical order is calendar order
    """
    CREATE TABLE IF NOT EXISTS journal_entries (
        id TEXT PRIMARY KEY,
        entry_date TEXT NOT NULL,
        category_id TEXT NOT NULL REFERENCES categories(id),
        title TEXT NOT NULL,
        content TEXT NOT NULL DEFAULT '',
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    "CREATE UNIQUE INDEX IF NOT EXISTS ux_journal_entries_entry_date ON journal_entries(entry_date)",
    "CREATE INDEX IF NOT EXISTS ix_journal_entries_category_id ON journal_entries(category_id)",
    """
    CREATE TABLE IF NOT EXISTS journal_entry_moods (
        id TEXT PRIMARY KEY,
        entry_id TEXT NOT NULL REFERENCES journal_entries(id),
        mood_id TEXT NOT NULL REFERENCES moods(id),
        role INTEGER NOT NULL,
        position INTEGER NOT NULL DEFAULT 0
    )
    """,
    f"""
    CREATE UNIQUE INDEX IF NOT EXISTS ux_entry_moods_primary
        ON journal_entry_moods(entry_id, role) WHERE role = {ROLE_PRIMARY}
    """,
    f"""
    CREATE UNIQUE INDEX IF NOT EXISTS ux_entry_moods_secondary_position
        ON journal_entry_moods(entry_id, role, position) WHERE role = {ROLE_SECONDARY}
    """,
    "CREATE UNIQUE INDEX IF NOT EXISTS ux_entry_moods_no_duplicate ON journal_entry_moods(entry_id, mood_id)",
    "CREATE INDEX IF NOT EXISTS ix_entry_moods_mood_entry ON journal_entry_moods(mood_id, entry_id)",
    """
    CREATE TABLE IF NOT EXISTS journal_entry_tags (
        id TEXT PRIMARY KEY,
        entry_id TEXT NOT NULL REFERENCES journal_entries(id),
        tag_id TEXT NOT NULL REFERENCES tags(id)
    )
    """,
    "CREATE UNIQUE INDEX IF NOT EXISTS ux_entry_tags ON journal_entry_tags(entry_id, tag_id)",
    "CREATE INDEX IF NOT EXISTS ix_entry_tags_tag_entry ON journal_entry_tags(tag_id, entry_id)",
]


def to_db_date(d: date) -> str:
    return d.isoformat()


def from_db_date(value: str) -> date:
    return date.fromisoformat(value)


def to_db_timestamp(dt: datetime) -> str:
    """Store timestamps as UTC ISO strings."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()


def from_db_timestamp(value: str) -> datetime:
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def placeholders(count: int) -> str:
    return ",".join("?" * count)


def _casefold(value):
    if isinstance(value, str):
        return value.casefold()
    return value


def storage_operation(summary: str):
    """
    Translate storage failures raised by the wrapped coroutine into
    DataAccessError with a stable summary.
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except (aiosqlite.Error, ValueError) as e:
                logger.error(f"{summary} ({type(e).__name__}: {e})")
                raise DataAccessError(summary, e) from e

        return wrapper

    return decorator


class Database:
    """
    SQLite database file.

    Every operation opens its own connection, so concurrent tasks never
    share a transaction.
    """

    def __init__(self, path: Path | str, busy_timeout: float = 5.0):
        self.path = Path(path).expanduser()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.busy_timeout = busy_timeout
        self._initialized = False

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """Open a connection in autocommit mode with foreign keys enabled."""
        conn = await aiosqlite.connect(self.path, timeout=self.busy_timeout, isolation_level=None)
        try:
            conn.row_factory = aiosqlite.Row
            await conn.execute("PRAGMA foreign_keys=ON")
            await conn.create_function("casefold", 1, _casefold, deterministic=True)
            yield conn
        finally:
            await conn.close()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Open a connection inside a write transaction, committed on success."""
        async with self.connection() as conn:
            await conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                if conn.in_transaction:
                    await conn.execute("ROLLBACK")
                raise
            await conn.execute("COMMIT")

    async def initialize(self) -> None:
        """Create tables and indexes and seed the predefined vocabulary. Runs once."""
        if self._initialized:
            return
        self._initialized = True

        try:
            async with self.transaction() as conn:
                for statement in SCHEMA:
                    await conn.execute(statement)
                await self._seed(conn)
        except aiosqlite.Error as e:
            # Allow retry
            self._initialized = False
            logger.error(f"Failed to initialize database at {self.path}: {e}")
            raise DataAccessError("Failed to initialize local database.", e) from e
        except BaseException:
            self._initialized = False
            raise

        logger.debug(f"Database ready at {self.path}")

    async def _seed(self, conn: aiosqlite.Connection) -> None:
        now = to_db_timestamp(datetime.now(timezone.utc))

        await conn.executemany(
            "INSERT OR IGNORE INTO moods (id, name, category, is_predefined) VALUES (?, ?, ?, 1)",
            [(mood_id, name, int(category)) for mood_id, name, category in PREDEFINED_MOODS],
        )
        await conn.executemany(
            "INSERT OR IGNORE INTO categories (id, name, is_predefined, created_at, updated_at) "
            "VALUES (?, ?, 1, ?, ?)",
            [(cat_id, name, now, now) for cat_id, name in PREDEFINED_CATEGORIES],
        )
        await conn.executemany(
            "INSERT OR IGNORE INTO tags (id, name, normalized_name, is_predefined, created_at, updated_at) "
            "VALUES (?, ?, ?, 1, ?, ?)",
            [(tag_id, name, normalize_tag_name(name), now, now) for tag_id, name in PREDEFINED_TAGS],
        )
