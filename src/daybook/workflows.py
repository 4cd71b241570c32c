"""Shared workflow layer between the CLI and other front ends.

Wires the SQLite adapters into the services and resolves the names a
user types into vocabulary ids.
"""

import logging
from dataclasses import dataclass

from .adapters import (
    Database,
    SqliteAnalyticsSource,
    SqliteCategoryVocabulary,
    SqliteEntryStore,
    SqliteMoodLinkStore,
    SqliteMoodVocabulary,
    SqliteTagLinkStore,
    SqliteTagVocabulary,
)
from .config import Config
from .core.entries import MoodSelection
from .core.vocabulary import normalize_tag_name
from .dashboard import AnalyticsService, StreakService
from .errors import NotFoundError, ValidationError
from .journal import JournalService

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Everything a front end needs, sharing one database."""

    db: Database
    journal: JournalService
    analytics: AnalyticsService
    streaks: StreakService


def build_services(db: Database) -> Services:
    entries = SqliteEntryStore(db)
    journal = JournalService(
        entries=entries,
        categories=SqliteCategoryVocabulary(db),
        moods=SqliteMoodVocabulary(db),
        mood_links=SqliteMoodLinkStore(db),
        tags=SqliteTagVocabulary(db),
        tag_links=SqliteTagLinkStore(db),
    )
    return Services(
        db=db,
        journal=journal,
        analytics=AnalyticsService(entries, SqliteAnalyticsSource(db)),
        streaks=StreakService(entries),
    )


async def open_services(config: Config) -> Services:
    """Open the configured database, creating and seeding it if needed."""
    db = Database(config.database_path, busy_timeout=config.busy_timeout)
    await db.initialize()
    logger.debug(f"Opened database {db.path}")
    return build_services(db)


# ============== Name Resolution ==============


def _key(name: str) -> str:
    return normalize_tag_name(name or "")


async def resolve_category_id(services: Services, name: str) -> str:
    """Category id for a case-insensitive name."""
    if not name or not name.strip():
        raise ValidationError("Category is required.")
    for category in await services.journal.categories.list_all():
        if _key(category.name) == _key(name):
            return category.id
    raise NotFoundError(f"Unknown category '{name}'.")


async def resolve_mood_ids(services: Services, names: list[str]) -> list[str]:
    """Mood ids for case-insensitive names, in the given order."""
    by_name = {_key(m.name): m.id for m in await services.journal.moods.list_all()}
    ids = []
    for name in names:
        mood_id = by_name.get(_key(name))
        if mood_id is None:
            raise NotFoundError(f"Unknown mood '{name}'.")
        ids.append(mood_id)
    return ids


async def resolve_mood_selection(
    services: Services, primary: str, secondary: list[str]
) -> MoodSelection:
    if not primary or not primary.strip():
        raise ValidationError("Primary mood is required.")
    primary_id, *secondary_ids = await resolve_mood_ids(services, [primary, *secondary])
    return MoodSelection(primary_mood_id=primary_id, secondary_mood_ids=secondary_ids)


async def resolve_tag_ids(services: Services, names: list[str], create: bool = True) -> list[str]:
    """
    Tag ids for names. With create, missing tags are created; otherwise an
    unknown name raises NotFoundError.
    """
    tags = services.journal.tags
    ids = []
    for name in names:
        if create:
            tag = await tags.get_or_create(name)
        else:
            tag = await tags.get_by_normalized_name(name)
            if tag is None:
                raise NotFoundError(f"Unknown tag '{name}'.")
        if tag.id not in ids:
            ids.append(tag.id)
    return ids
