"""Vocabulary interfaces for categories, moods and tags."""

from typing import Iterable, Protocol

from daybook.core.vocabulary import Category, Mood, Tag


class CategoryVocabulary(Protocol):
    """Fixed category reference data."""

    async def list_all(self) -> list[Category]:
        ...

    async def exists(self, category_id: str) -> bool:
        ...

    async def get_by_ids(self, ids: Iterable[str]) -> list[Category]:
        ...


class MoodVocabulary(Protocol):
    """Fixed mood reference data."""

    async def list_all(self) -> list[Mood]:
        ...

    async def exists(self, mood_id: str) -> bool:
        ...

    async def get_by_ids(self, ids: Iterable[str]) -> list[Mood]:
        ...


class TagVocabulary(Protocol):
    """Tags grow on demand; lookups are by id or normalized name."""

    async def list_all(self) -> list[Tag]:
        ...

    async def exists(self, tag_id: str) -> bool:
        ...

    async def get_by_ids(self, ids: Iterable[str]) -> list[Tag]:
        ...

    async def get_by_normalized_name(self, name: str) -> Tag | None:
        ...

    async def get_or_create(self, name: str, is_predefined: bool = False) -> Tag:
        """Return the tag with this normalized name, creating it if absent."""
        ...
