"""Tests for relation loading and media attachment."""

import uuid

import pytest

from cms.core.exceptions import EntryNotFoundError, MediaNotFoundError, ValidationError
from cms.repositories.relations import build_relation_options
from cms.schemas.cms import CmsIncludeRelations, CmsUserProfile
from cms.services import CmsService


class TestBuildRelationOptions:
    def test_nothing_requested(self):
        assert build_relation_options(None) == []
        assert build_relation_options(CmsIncludeRelations()) == []

    def test_each_flag_adds_one_option(self):
        assert len(build_relation_options(CmsIncludeRelations(created_by_user=True))) == 1
        assert len(build_relation_options(CmsIncludeRelations(media=True))) == 1
        assert len(build_relation_options(CmsIncludeRelations(created_by_user=True, media=True))) == 2


class TestCreatorProfile:
    """Tests for loading created_by_user."""

    async def test_loads_public_profile(self, service: CmsService, make_entry, author):
        created = await make_entry("hello-world")

        entry = await service.get_entry_by_id(
            created.id, include_relations={"created_by_user": True}
        )

        assert entry.created_by_user == CmsUserProfile(
            id=author.id,
            first_name="Ada",
            last_name="Lovelace",
            email="ada@example.com",
            avatar="https://cdn.example.com/avatars/ada.png",
        )
        assert entry.entry_media is None

    async def test_never_exposes_credentials(self, service: CmsService, make_entry):
        await make_entry("hello-world", status="published")

        (entry,) = await service.list_entries(
            "blog", include_relations=CmsIncludeRelations(created_by_user=True)
        )

        assert "password_hash" not in entry.created_by_user.model_dump()
        assert "password_hash" not in entry.model_dump_json()


class TestEntryMedia:
    """Tests for attach_media() and loading entry_media."""

    async def test_media_ordered_by_position(self, service: CmsService, make_entry, media_assets):
        created = await make_entry("hello-world", status="published")
        first, second, third = media_assets
        await service.attach_media(created.id, third.id, position=2)
        await service.attach_media(created.id, first.id, position=0, caption="Cover")
        await service.attach_media(created.id, second.id, position=1)

        entry = await service.get_entry_by_slug(
            "blog", "hello-world", include_relations={"media": True}
        )

        assert [link.media_id for link in entry.entry_media] == [first.id, second.id, third.id]
        assert [link.position for link in entry.entry_media] == [0, 1, 2]
        assert entry.entry_media[0].caption == "Cover"
        assert entry.entry_media[0].media.file_name == "photo-0.png"
        assert entry.entry_media[0].media.mime_type == "image/png"
        assert entry.created_by_user is None

    async def test_default_position_appends(self, service: CmsService, make_entry, media_assets):
        created = await make_entry("hello-world")

        links = [await service.attach_media(created.id, asset.id) for asset in media_assets]

        assert [link.position for link in links] == [0, 1, 2]
        assert all(link.entry_id == created.id for link in links)
        assert links[0].media is None

    async def test_no_media_is_empty_list(self, service: CmsService, make_entry):
        created = await make_entry("hello-world")

        entry = await service.get_entry_by_id(created.id, include_relations={"media": True})

        assert entry.entry_media == []

    async def test_both_relations(self, service: CmsService, make_entry, media_assets, author):
        created = await make_entry("hello-world", status="published")
        await service.attach_media(created.id, media_assets[0].id)

        (entry,) = await service.list_entries(
            "blog", include_relations={"created_by_user": True, "media": True}
        )

        assert entry.created_by_user.id == author.id
        assert len(entry.entry_media) == 1

    async def test_relations_reflect_new_attachments(
        self, service: CmsService, make_entry, media_assets
    ):
        created = await make_entry("hello-world")
        include = {"media": True}
        await service.attach_media(created.id, media_assets[0].id)
        before = await service.get_entry_by_id(created.id, include_relations=include)

        await service.attach_media(created.id, media_assets[1].id)
        after = await service.get_entry_by_id(created.id, include_relations=include)

        assert len(before.entry_media) == 1
        assert len(after.entry_media) == 2

    async def test_unknown_entry(self, service: CmsService, media_assets):
        with pytest.raises(EntryNotFoundError):
            await service.attach_media(uuid.uuid4(), media_assets[0].id)

    async def test_unknown_media(self, service: CmsService, make_entry):
        created = await make_entry("hello-world")

        with pytest.raises(MediaNotFoundError):
            await service.attach_media(created.id, uuid.uuid4())

    async def test_negative_position(self, service: CmsService, make_entry, media_assets):
        created = await make_entry("hello-world")

        with pytest.raises(ValidationError):
            await service.attach_media(created.id, media_assets[0].id, position=-1)
