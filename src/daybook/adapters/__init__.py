"""Adapters - I/O implementations of ports."""

from .sqlite_db import Database
from .sqlite_entries import SqliteEntryStore
from .sqlite_moods import SqliteMoodLinkStore, SqliteMoodVocabulary
from .sqlite_tags import SqliteTagLinkStore, SqliteTagVocabulary
from .sqlite_categories import SqliteCategoryVocabulary
from .sqlite_analytics import SqliteAnalyticsSource

__all__ = [
    "Database",
    "SqliteEntryStore",
    "SqliteMoodLinkStore",
    "SqliteMoodVocabulary",
    "SqliteTagLinkStore",
    "SqliteTagVocabulary",
    "SqliteCategoryVocabulary",
    "SqliteAnalyticsSource",
]
