"""Tests for CmsService read operations."""

import uuid

import pytest

from cms.core.exceptions import CollectionNotFoundError, ValidationError
from cms.models import CmsEntryStatus
from cms.services import CmsService


class TestListEntries:
    """Tests for list_entries() and count_entries()."""

    async def test_default_filter_is_published(self, service: CmsService, make_entry):
        await make_entry("draft-post")
        published = await make_entry("live-post", status="published")

        entries = await service.list_entries("blog")

        assert [entry.id for entry in entries] == [published.id]
        assert await service.count_entries("blog") == 1

    async def test_all_disables_status_filter(self, service: CmsService, make_entry):
        await make_entry("draft-post")
        await make_entry("live-post", status="published")

        entries = await service.list_entries("blog", status="all")

        assert {entry.slug for entry in entries} == {"draft-post", "live-post"}
        assert await service.count_entries("blog", status="all") == 2

    async def test_filter_by_explicit_status(self, service: CmsService, make_entry):
        await make_entry("draft-post")
        await make_entry("live-post", status="published")

        entries = await service.list_entries("blog", status=CmsEntryStatus.DRAFT)

        assert [entry.slug for entry in entries] == ["draft-post"]

    async def test_newest_first(self, service: CmsService, make_entry):
        for slug in ("first", "second", "third"):
            await make_entry(slug, status="published")

        entries = await service.list_entries("blog")

        assert [entry.slug for entry in entries] == ["third", "second", "first"]

    async def test_scoped_to_collection(self, service: CmsService, make_entry):
        await make_entry("about", collection="pages", status="published")
        await make_entry("about", status="published")

        pages = await service.list_entries("pages")

        assert len(pages) == 1
        assert pages[0].collection == "pages"

    async def test_limit_and_offset(self, service: CmsService, make_entry):
        for index in range(5):
            await make_entry(f"post-{index}", status="published")

        page = await service.list_entries("blog", limit=2, offset=1)

        assert [entry.slug for entry in page] == ["post-3", "post-2"]

    async def test_empty_collection(self, service: CmsService):
        assert await service.list_entries("blog", status="all") == []
        assert await service.count_entries("blog", status="all") == 0

    async def test_unknown_collection(self, service: CmsService):
        with pytest.raises(CollectionNotFoundError):
            await service.list_entries("nope")

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"limit": -1},
            {"offset": -5},
            {"limit": "10"},
            {"limit": True},
            {"status": "deleted"},
            {"include_relations": {"comments": True}},
        ],
    )
    async def test_rejects_bad_arguments(self, service: CmsService, kwargs):
        with pytest.raises(ValidationError):
            await service.list_entries("blog", **kwargs)

    async def test_relations_absent_by_default(self, service: CmsService, make_entry):
        await make_entry("live-post", status="published")

        (entry,) = await service.list_entries("blog")

        assert entry.created_by_user is None
        assert entry.entry_media is None


class TestListEntriesPage:
    """Tests for list_entries_page()."""

    async def test_page_metadata(self, service: CmsService, make_entry):
        for index in range(5):
            await make_entry(f"post-{index}", status="published")

        page = await service.list_entries_page("blog", page=2, per_page=2)

        assert [entry.slug for entry in page.data] == ["post-2", "post-1"]
        assert page.pagination.total == 5
        assert page.pagination.total_pages == 3
        assert page.pagination.has_next
        assert page.pagination.has_prev

    async def test_rejects_bad_page(self, service: CmsService):
        with pytest.raises(ValidationError):
            await service.list_entries_page("blog", page=0)

        with pytest.raises(ValidationError):
            await service.list_entries_page("blog", per_page=500)


class TestGetEntryBySlug:
    """Tests for get_entry_by_slug()."""

    async def test_found(self, service: CmsService, make_entry):
        created = await make_entry("hello-world", status="published")

        entry = await service.get_entry_by_slug("blog", "hello-world")

        assert entry is not None
        assert entry.id == created.id
        assert entry.content == created.content
        assert entry.fields == {"excerpt": "About hello-world"}

    async def test_status_mismatch_is_absent(self, service: CmsService, make_entry):
        await make_entry("hello-world")

        assert await service.get_entry_by_slug("blog", "hello-world") is None
        assert await service.get_entry_by_slug("blog", "hello-world", status="all") is not None

    async def test_missing_slug(self, service: CmsService):
        assert await service.get_entry_by_slug("blog", "missing", status="all") is None

    async def test_same_slug_other_collection(self, service: CmsService, make_entry):
        await make_entry("about", collection="pages", status="published")

        assert await service.get_entry_by_slug("blog", "about") is None

    async def test_unknown_collection(self, service: CmsService):
        with pytest.raises(CollectionNotFoundError):
            await service.get_entry_by_slug("nope", "hello-world")


class TestGetEntryById:
    """Tests for get_entry_by_id()."""

    async def test_ignores_status(self, service: CmsService, make_entry):
        created = await make_entry("hello-world")

        entry = await service.get_entry_by_id(created.id)

        assert entry is not None
        assert entry.status == CmsEntryStatus.DRAFT

    async def test_accepts_string_id(self, service: CmsService, make_entry):
        created = await make_entry("hello-world")

        entry = await service.get_entry_by_id(str(created.id))

        assert entry is not None
        assert entry.slug == "hello-world"

    async def test_missing(self, service: CmsService):
        assert await service.get_entry_by_id(uuid.uuid4()) is None

    async def test_malformed_id(self, service: CmsService):
        with pytest.raises(ValidationError):
            await service.get_entry_by_id("not-a-uuid")


class TestRequestCache:
    """Tests for per-request memoization of reads."""

    async def test_repeated_read_hits_cache(self, service: CmsService, make_entry):
        created = await make_entry("hello-world")

        first = await service.get_entry_by_id(created.id)
        second = await service.get_entry_by_id(created.id)

        assert first == second
        assert first is not second
        assert service.cache.hits == 1

    async def test_mutating_result_does_not_change_cached_read(
        self, service: CmsService, make_entry
    ):
        created = await make_entry("hello-world", status="published")

        entry = await service.get_entry_by_id(created.id)
        entry.title = "Changed by caller"
        entry.fields["extra"] = 1
        entries = await service.list_entries("blog")
        entries.clear()

        again = await service.get_entry_by_id(created.id)
        assert again.title == created.title
        assert "extra" not in again.fields
        assert [item.id for item in await service.list_entries("blog")] == [created.id]
        assert service.cache.hits == 2

    async def test_bool_limit_not_served_from_int_key(self, service: CmsService, make_entry):
        await make_entry("hello-world", status="published")

        await service.list_entries("blog", limit=1)

        with pytest.raises(ValidationError):
            await service.list_entries("blog", limit=True)

    async def test_defaults_normalized_into_key(self, service: CmsService, make_entry):
        await make_entry("hello-world", status="published")

        await service.list_entries("blog")
        await service.list_entries("blog", status="published")
        await service.list_entries("blog", status=CmsEntryStatus.PUBLISHED)

        assert service.cache.misses == 1
        assert service.cache.hits == 2

    async def test_different_arguments_miss(self, service: CmsService, make_entry):
        await make_entry("hello-world", status="published")

        await service.list_entries("blog")
        await service.list_entries("blog", status="all")

        assert service.cache.hits == 0
        assert service.cache.misses == 2

    async def test_relation_flags_in_key(self, service: CmsService, make_entry):
        created = await make_entry("hello-world")

        plain = await service.get_entry_by_id(created.id)
        with_user = await service.get_entry_by_id(
            created.id, include_relations={"created_by_user": True}
        )

        assert plain.created_by_user is None
        assert with_user.created_by_user is not None

    async def test_mutation_clears_cache(self, service: CmsService, make_entry):
        await make_entry("first", status="published")
        assert len(await service.list_entries("blog")) == 1
        assert len(service.cache) == 1

        await make_entry("second", status="published")

        assert len(service.cache) == 0
        assert len(await service.list_entries("blog")) == 2
