"""
History Handler - Search recently visited pages.

Searches look back 30 days; the empty-query "Recent" view shows the most
visited pages of the last 24 hours. Both collapse repeated URLs.
"""

import time
from typing import Callable

from quicksearch.search.handlers.base import SearchHandler
from quicksearch.search.result import ResultItem, ResultType
from quicksearch.services.providers import HistoryEntry, HistoryProvider
from quicksearch.utils.helpers import favicon_url, hostname

HOUR = 3600
DAY = 24 * HOUR


def _dedupe_by_url(entries: list[HistoryEntry]) -> list[HistoryEntry]:
    seen = set()
    unique = []
    for entry in entries:
        if entry.url and entry.url not in seen:
            seen.add(entry.url)
            unique.append(entry)
    return unique


class HistorySearchHandler(SearchHandler):
    """Search browsing history."""

    name = "history"
    category = "History"
    default_category = "Recent"

    def __init__(
        self,
        provider: HistoryProvider,
        max_results: int = 10,
        lookback_days: float = 30,
        fetch_limit: int = 100,
        recent_limit: int = 5,
        recent_hours: float = 24,
        clock: Callable[[], float] = time.time,
        cache=None,
    ):
        super().__init__(cache)
        self.provider = provider
        self.max_results = max_results
        self.lookback_days = lookback_days
        self.fetch_limit = fetch_limit
        self.recent_limit = recent_limit
        self.recent_hours = recent_hours
        self._clock = clock

    async def search(self, query: str) -> list[ResultItem]:
        entries = await self.provider.search(
            text=query,
            start_time=self._clock() - self.lookback_days * DAY,
            max_results=self.fetch_limit,
        )
        unique = _dedupe_by_url(entries)
        return [self._entry_to_result(entry) for entry in unique[:self.max_results]]

    async def get_default(self) -> list[ResultItem]:
        entries = await self.provider.search(
            text="",
            start_time=self._clock() - self.recent_hours * HOUR,
            max_results=self.fetch_limit,
        )
        unique = _dedupe_by_url(entries)
        unique.sort(key=lambda entry: entry.visit_count, reverse=True)
        return [self._entry_to_result(entry) for entry in unique[:self.recent_limit]]

    def _entry_to_result(self, entry: HistoryEntry) -> ResultItem:
        return ResultItem(
            id=f"history-{entry.url}",
            type=ResultType.HISTORY,
            title=entry.title or hostname(entry.url) or entry.url,
            description=entry.url,
            icon=favicon_url(entry.url),
            url=entry.url,
            metadata={
                "action": "open-url",
                "url": entry.url,
                "last_visited": entry.last_visit_time,
                "visit_count": entry.visit_count,
            },
        )
