"""Entry relation interfaces (moods and tags)."""

from typing import Iterable, Protocol

from daybook.core.entries import MoodSelection


class MoodLinkStore(Protocol):
    """Interface for the primary/secondary moods of each entry."""

    async def replace_selection(self, entry_id: str, selection: MoodSelection) -> None:
        """Atomically replace all mood links of an entry."""
        ...

    async def get_selection(self, entry_id: str) -> MoodSelection | None:
        """Primary plus ordered secondaries, or None if nothing is stored."""
        ...

    async def get_primary_mood_ids_by_entry(self, entry_ids: Iterable[str]) -> dict[str, str]:
        """Map entry id to primary mood id, omitting entries without one."""
        ...

    async def get_selections_by_entry(self, entry_ids: Iterable[str]) -> dict[str, MoodSelection]:
        """Map entry id to its selection, omitting entries without one."""
        ...

    async def delete_selection(self, entry_id: str) -> None:
        """Remove all mood links of an entry. Idempotent."""
        ...


class TagLinkStore(Protocol):
    """Interface for the tag set of each entry."""

    async def replace_tags(self, entry_id: str, tag_ids: Iterable[str]) -> None:
        """Atomically replace all tag links of an entry."""
        ...

    async def get_tag_ids(self, entry_id: str) -> list[str]:
        """Distinct tag ids linked to an entry."""
        ...

    async def get_tag_ids_by_entry(self, entry_ids: Iterable[str]) -> dict[str, list[str]]:
        """Map entry id to its distinct tag ids, omitting entries with none."""
        ...
