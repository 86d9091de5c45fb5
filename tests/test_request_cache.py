"""Tests for the request_cached decorator."""

from cms.models import CmsEntryStatus
from cms.services.request_cache import RequestCache, request_cached


class Lookup:
    def __init__(self):
        self.cache = RequestCache()
        self.calls = 0

    @request_cached
    async def find(self, name, *, status=CmsEntryStatus.PUBLISHED, options=None):
        self.calls += 1
        return f"{name}:{status}:{options}"

    @request_cached
    async def find_mutable(self, name):
        self.calls += 1
        return self.result


class TestRequestCached:
    async def test_second_call_served_from_cache(self):
        lookup = Lookup()

        assert await lookup.find("blog") == await lookup.find("blog")
        assert lookup.calls == 1
        assert lookup.cache.hits == 1
        assert lookup.cache.misses == 1

    async def test_enum_and_value_share_key(self):
        lookup = Lookup()

        await lookup.find("blog", status=CmsEntryStatus.DRAFT)
        await lookup.find("blog", status="draft")

        assert lookup.calls == 1

    async def test_dict_arguments_are_keyed_by_content(self):
        lookup = Lookup()

        await lookup.find("blog", options={"media": True, "created_by_user": False})
        await lookup.find("blog", options={"created_by_user": False, "media": True})
        await lookup.find("blog", options={"media": False})

        assert lookup.calls == 2

    async def test_unhashable_argument_runs_uncached(self):
        lookup = Lookup()

        await lookup.find("blog", options={1, 2})
        await lookup.find("blog", options={1, 2})

        assert lookup.calls == 2
        assert len(lookup.cache) == 0

    async def test_clear(self):
        lookup = Lookup()
        await lookup.find("blog")

        lookup.cache.clear()
        await lookup.find("blog")

        assert lookup.calls == 2

    async def test_equal_values_of_different_types_do_not_share_key(self):
        lookup = Lookup()

        await lookup.find("blog", options=1)
        await lookup.find("blog", options=True)
        await lookup.find("blog", options=1.0)

        assert lookup.calls == 3

    async def test_cached_result_is_a_copy(self):
        lookup = Lookup()
        lookup.result = {"tags": ["python"]}

        first = await lookup.find_mutable("blog")
        first["tags"].append("leaked")
        second = await lookup.find_mutable("blog")
        second["tags"].clear()
        third = await lookup.find_mutable("blog")

        assert lookup.calls == 1
        assert third == {"tags": ["python"]}
