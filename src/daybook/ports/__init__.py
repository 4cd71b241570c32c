"""Ports - interfaces/protocols for external dependencies."""

from .entry_store import EntryStore
from .links import MoodLinkStore, TagLinkStore
from .vocabulary import CategoryVocabulary, MoodVocabulary, TagVocabulary
from .analytics_source import AnalyticsSource

__all__ = [
    "EntryStore",
    "MoodLinkStore",
    "TagLinkStore",
    "CategoryVocabulary",
    "MoodVocabulary",
    "TagVocabulary",
    "AnalyticsSource",
]
