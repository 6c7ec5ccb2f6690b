"""
Tests for error handling across handlers, router and executor.

Verifies graceful degradation when things go wrong:
- Providers that raise (revoked permissions, closed browser)
- Bad settings files
- Malformed expressions
"""

import pytest

from quicksearch.engine import Providers, QuickSearchEngine
from quicksearch.search.handlers import (
    BookmarkSearchHandler,
    CalculatorHandler,
    DownloadSearchHandler,
    ExtensionSearchHandler,
    HistorySearchHandler,
    TabSearchHandler,
    TagSearchHandler,
)
from quicksearch.search.result import SearchContext
from quicksearch.services.providers import TabInfo
from quicksearch.utils.helpers import DEFAULT_SETTINGS, _deep_merge
from tests.conftest import FailingProvider


@pytest.fixture
def failing():
    return FailingProvider()


class TestFailingProviders:
    """A failing provider yields an empty list, never an exception."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("make_handler", [
        lambda p: BookmarkSearchHandler(p),
        lambda p: TagSearchHandler(p, p),
        lambda p: HistorySearchHandler(p),
        lambda p: TabSearchHandler(p),
        lambda p: DownloadSearchHandler(p),
        lambda p: ExtensionSearchHandler(p),
    ])
    async def test_search_contained(self, failing, make_handler):
        assert await make_handler(failing).results("git") == []

    @pytest.mark.asyncio
    async def test_default_view_contained(self, failing):
        assert await HistorySearchHandler(failing).default_results() == []
        assert await TabSearchHandler(failing).default_results() == []

    @pytest.mark.asyncio
    async def test_tag_decoration_failure_keeps_bookmarks(self, bookmark_store, failing):
        results = await BookmarkSearchHandler(bookmark_store, failing).results("git")
        assert [r.id for r in results] == ["bookmark-1"]
        assert results[0].tags == []

    @pytest.mark.asyncio
    async def test_direct_search_still_raises(self, failing):
        with pytest.raises(PermissionError):
            await TabSearchHandler(failing).search("git")


class TestEverythingFailing:
    @pytest.fixture
    def engine(self, failing):
        providers = Providers(
            bookmarks=failing,
            history=failing,
            tabs=failing,
            downloads=failing,
            extensions=failing,
            tags=failing,
            sink=failing,
        )
        return QuickSearchEngine.create(providers, _deep_merge(DEFAULT_SETTINGS, {}))

    @pytest.mark.asyncio
    async def test_only_actions_left(self, engine):
        results = await engine.search("git")
        assert list(results) == ["Actions"]

    @pytest.mark.asyncio
    async def test_default_view_only_actions(self, engine):
        tab = TabInfo(id=1, title="Inbox", url="https://mail.example.com")
        results = await engine.search("", SearchContext(current_tab=tab))
        assert list(results) == ["Actions"]
        ids = [item.id for item in results["Actions"]]
        assert "action-add-favorite" in ids

    @pytest.mark.asyncio
    async def test_execute_failure_returns_false(self, engine):
        assert await engine.execute("action-new-window") is False


class TestBadInput:
    @pytest.mark.parametrize("query", ["((", "1/0", "9" * 400 + "*9", "%%", "1.2.3"])
    def test_calculator_never_raises(self, query):
        assert CalculatorHandler().get_results(query) == []

    @pytest.mark.asyncio
    async def test_settings_page_search_handles_odd_characters(self):
        engine = QuickSearchEngine.create(Providers(), _deep_merge(DEFAULT_SETTINGS, {}))
        results = await engine.search("(*)[]")
        assert list(results) == ["Actions"]
