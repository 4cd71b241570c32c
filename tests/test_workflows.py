"""Tests for the shared workflow layer."""

import pytest

from daybook.adapters import Database
from daybook.config import Config
from daybook.errors import NotFoundError, ValidationError
from daybook.workflows import (
    open_services,
    resolve_category_id,
    resolve_mood_ids,
    resolve_mood_selection,
    resolve_tag_ids,
)

from conftest import CATEGORY_IDS, MOOD_IDS, TAG_IDS


class TestOpenServices:
    @pytest.mark.asyncio
    async def test_initializes_configured_database(self, tmp_path):
        path = tmp_path / "sub" / "journal.db"

        services = await open_services(Config(database_path=path, busy_timeout=1.0))

        assert isinstance(services.db, Database)
        assert services.db.path == path
        assert services.db.busy_timeout == 1.0
        assert len(await services.journal.moods.list_all()) == len(MOOD_IDS)


class TestResolveNames:
    @pytest.mark.asyncio
    async def test_category_is_case_insensitive(self, services):
        assert await resolve_category_id(services, "personal growth") == CATEGORY_IDS["Personal Growth"]

    @pytest.mark.asyncio
    async def test_unknown_category(self, services):
        with pytest.raises(NotFoundError, match="Unknown category 'Hobbies'"):
            await resolve_category_id(services, "Hobbies")

    @pytest.mark.asyncio
    async def test_blank_category(self, services):
        with pytest.raises(ValidationError):
            await resolve_category_id(services, " ")

    @pytest.mark.asyncio
    async def test_moods_keep_order(self, services):
        assert await resolve_mood_ids(services, ["sad", "HAPPY"]) == [MOOD_IDS["Sad"], MOOD_IDS["Happy"]]

    @pytest.mark.asyncio
    async def test_mood_selection(self, services):
        selection = await resolve_mood_selection(services, "Okay", ["Tired"])

        assert selection.primary_mood_id == MOOD_IDS["Okay"]
        assert selection.secondary_mood_ids == [MOOD_IDS["Tired"]]

    @pytest.mark.asyncio
    async def test_unknown_mood(self, services):
        with pytest.raises(NotFoundError, match="Unknown mood 'Meh'"):
            await resolve_mood_selection(services, "Meh", [])

    @pytest.mark.asyncio
    async def test_tags_created_on_demand(self, services):
        ids = await resolve_tag_ids(services, ["goal", "Hiking", "hiking"])

        assert ids[0] == TAG_IDS["Goal"]
        assert len(ids) == 2
        assert (await services.journal.tags.get_by_normalized_name("HIKING")).id == ids[1]

    @pytest.mark.asyncio
    async def test_tags_without_create(self, services):
        assert await resolve_tag_ids(services, ["Insight"], create=False) == [TAG_IDS["Insight"]]

        with pytest.raises(NotFoundError, match="Unknown tag 'Hiking'"):
            await resolve_tag_ids(services, ["Hiking"], create=False)
