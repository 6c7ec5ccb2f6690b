"""
Tabs Handler - Switch to an already open tab.

Not cached: the set of open tabs changes with every click.
"""

from quicksearch.search.handlers.base import SearchHandler
from quicksearch.search.result import ResultItem, ResultType
from quicksearch.services.providers import TabInfo, TabProvider
from quicksearch.utils.helpers import contains_query, favicon_url


class TabSearchHandler(SearchHandler):
    """Search open tabs by title and URL."""

    name = "tabs"
    category = "Tabs"
    default_category = "Tabs"
    cacheable = False

    def __init__(self, provider: TabProvider, max_results: int = 5, cache=None):
        super().__init__(cache)
        self.provider = provider
        self.max_results = max_results

    async def search(self, query: str) -> list[ResultItem]:
        tabs = await self.provider.query_all()
        matching = [tab for tab in tabs if contains_query(query, tab.title, tab.url)]
        return [self._tab_to_result(tab) for tab in matching[:self.max_results]]

    async def get_default(self) -> list[ResultItem]:
        return [self._tab_to_result(tab) for tab in await self.provider.query_all()]

    def _tab_to_result(self, tab: TabInfo) -> ResultItem:
        return ResultItem(
            id=f"tab-{tab.id}",
            type=ResultType.TAB,
            title=tab.title or tab.url or "Untitled Tab",
            description=tab.url,
            icon=favicon_url(tab.url),
            url=tab.url,
            metadata={
                "action": "focus-tab",
                "tab_id": tab.id,
                "window_id": tab.window_id,
                "url": tab.url,
            },
        )
