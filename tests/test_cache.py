"""
Tests for the result cache and how handlers use it.
"""

import pytest

from quicksearch.search.handlers import BookmarkSearchHandler, TabSearchHandler
from quicksearch.services.cache import NullCache, ResultCache


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def fake_clock():
    return FakeClock()


class TestResultCache:
    def test_get_after_set(self, fake_clock):
        cache = ResultCache(10, clock=fake_clock)
        cache.set("k", [1])
        assert cache.get("k") == [1]

    def test_missing_key(self):
        assert ResultCache().get("nope") is None

    def test_entry_expires(self, fake_clock):
        cache = ResultCache(10, clock=fake_clock)
        cache.set("k", [1])
        fake_clock.now = 11
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_expire_drops_old_entries(self, fake_clock):
        cache = ResultCache(10, clock=fake_clock)
        cache.set("old", 1)
        fake_clock.now = 8
        cache.set("new", 2)
        fake_clock.now = 12

        assert cache.expire() == 1
        assert cache.get("new") == 2

    def test_expire_zero_empties(self, fake_clock):
        cache = ResultCache(10, clock=fake_clock)
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.expire(0) == 2
        assert len(cache) == 0


class TestNullCache:
    def test_never_stores(self):
        cache = NullCache()
        cache.set("k", 1)
        assert cache.get("k") is None
        assert cache.expire() == 0
        assert len(cache) == 0


class TestHandlerCaching:
    @pytest.mark.asyncio
    async def test_second_query_served_from_cache(self, bookmark_store):
        handler = BookmarkSearchHandler(bookmark_store, cache=ResultCache())
        first = await handler.results("git")
        second = await handler.results("git")
        assert bookmark_store.search_calls == ["git"]
        assert [r.id for r in first] == [r.id for r in second]

    @pytest.mark.asyncio
    async def test_cached_items_are_copies(self, bookmark_store):
        handler = BookmarkSearchHandler(bookmark_store, cache=ResultCache())
        first = await handler.results("git")
        first[0].rank = 0.9
        second = await handler.results("git")
        assert second[0].rank == 0.0

    @pytest.mark.asyncio
    async def test_disabled_cache_same_results(self, bookmark_store):
        cached = await BookmarkSearchHandler(bookmark_store, cache=ResultCache()).results("git")
        uncached = await BookmarkSearchHandler(bookmark_store, cache=NullCache()).results("git")
        assert cached == uncached

    @pytest.mark.asyncio
    async def test_stale_keys_dropped_as_new_ones_arrive(self, bookmark_store, fake_clock):
        cache = ResultCache(300, clock=fake_clock)
        handler = BookmarkSearchHandler(bookmark_store, cache=cache)
        for i in range(1000):
            await handler.results(f"query {i}")
        assert len(cache) == 1000

        fake_clock.now = 301
        await handler.results("git")

        assert len(cache) == 1

    @pytest.mark.asyncio
    async def test_fresh_keys_survive(self, bookmark_store, fake_clock):
        cache = ResultCache(300, clock=fake_clock)
        handler = BookmarkSearchHandler(bookmark_store, cache=cache)
        await handler.results("git")
        fake_clock.now = 100
        await handler.results("python")
        assert len(cache) == 2

    @pytest.mark.asyncio
    async def test_tabs_never_cached(self, tab_provider):
        cache = ResultCache()
        await TabSearchHandler(tab_provider, cache=cache).results("git")
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_different_queries_cached_separately(self, bookmark_store):
        handler = BookmarkSearchHandler(bookmark_store, cache=ResultCache())
        await handler.results("git")
        await handler.results("python")
        assert bookmark_store.search_calls == ["git", "python"]
