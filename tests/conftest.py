"""Shared fixtures: a fresh, seeded SQLite journal per test."""

from datetime import date

import pytest
import pytest_asyncio

from daybook.adapters import Database
from daybook.core.entries import MoodSelection
from daybook.core.vocabulary import PREDEFINED_CATEGORIES, PREDEFINED_MOODS, PREDEFINED_TAGS
from daybook.workflows import build_services

MOOD_IDS = {name: mood_id for mood_id, name, _ in PREDEFINED_MOODS}
CATEGORY_IDS = {name: cat_id for cat_id, name in PREDEFINED_CATEGORIES}
TAG_IDS = {name: tag_id for tag_id, name in PREDEFINED_TAGS}


@pytest.fixture
def mood_ids():
    return MOOD_IDS


@pytest.fixture
def category_ids():
    return CATEGORY_IDS


@pytest.fixture
def tag_ids():
    return TAG_IDS


@pytest_asyncio.fixture
async def db(tmp_path):
    database = Database(tmp_path / "data" / "daybook.db")
    await database.initialize()
    return database


@pytest_asyncio.fixture
async def services(db):
    return build_services(db)


@pytest.fixture
def make_entry(services):
    """Create an entry through the journal service with sensible defaults."""

    async def _make(
        entry_date: date,
        title: str = "A day",
        content: str = "",
        category: str = "Reflection",
        primary: str = "Okay",
        secondary: list[str] | None = None,
        tags: list[str] | None = None,
    ):
        selection = MoodSelection(
            primary_mood_id=MOOD_IDS[primary],
            secondary_mood_ids=[MOOD_IDS[m] for m in secondary or []],
        )
        return await services.journal.create(
            entry_date,
            CATEGORY_IDS[category],
            selection,
            [TAG_IDS[t] for t in tags or []],
            title,
            content,
        )

    return _make
