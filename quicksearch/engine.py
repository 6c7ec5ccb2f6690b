"""
Quick Search Engine - Entry point used by the overlay UI.

Wires the handlers, calculator, ranker and action executor from settings
and the browser providers, and discards results of queries that were
overtaken by newer keystrokes.

Usage:
    engine = QuickSearchEngine.create(providers)
    results = await engine.search("git", SearchContext(current_tab=tab))
    if results is not None:
        render(results)
"""

from dataclasses import dataclass
from typing import Optional

from loguru import logger

from quicksearch.search.expression import make_evaluator
from quicksearch.search.handlers import (
    BookmarkSearchHandler,
    CalculatorHandler,
    DownloadSearchHandler,
    ExtensionSearchHandler,
    HistorySearchHandler,
    SettingsIndexHandler,
    TabSearchHandler,
    TagSearchHandler,
)
from quicksearch.search.ranking import RankingWeights
from quicksearch.search.result import CategoryMap, ResultItem, SearchContext
from quicksearch.search.router import QueryRouter
from quicksearch.services.actions import ActionExecutor
from quicksearch.services.cache import NullCache, ResultCache
from quicksearch.services.providers import (
    ActionSink,
    BookmarkStore,
    DownloadProvider,
    ExtensionProvider,
    HistoryProvider,
    TabProvider,
    TagIndex,
)
from quicksearch.services.web_search import search_url_template
from quicksearch.utils.helpers import load_settings


@dataclass
class Providers:
    """Browser collaborators. Sources left as None are not searched."""
    bookmarks: Optional[BookmarkStore] = None
    history: Optional[HistoryProvider] = None
    tabs: Optional[TabProvider] = None
    downloads: Optional[DownloadProvider] = None
    extensions: Optional[ExtensionProvider] = None
    tags: Optional[TagIndex] = None
    sink: Optional[ActionSink] = None


def build_router(providers: Providers, settings: dict, cache=None) -> QueryRouter:
    """Register a handler for every available provider."""
    search = settings["search"]
    calculator = settings["calculator"]

    router = QueryRouter(
        calculator=CalculatorHandler(make_evaluator(calculator["engine"], calculator["precision"])),
        bookmarks=providers.bookmarks,
        weights=RankingWeights.from_settings(settings.get("ranking")),
    )

    if providers.bookmarks is not None:
        router.register(BookmarkSearchHandler(
            providers.bookmarks, providers.tags, max_results=search["bookmark_limit"], cache=cache,
        ))
        if providers.tags is not None:
            router.register(TagSearchHandler(
                providers.tags, providers.bookmarks, max_results=search["tag_limit"], cache=cache,
            ))
    if providers.history is not None:
        router.register(HistorySearchHandler(
            providers.history,
            max_results=search["history_limit"],
            lookback_days=search["history_days"],
            fetch_limit=search["history_fetch_limit"],
            recent_limit=search["recent_limit"],
            recent_hours=search["recent_hours"],
            cache=cache,
        ))
    if providers.tabs is not None:
        router.register(TabSearchHandler(providers.tabs, max_results=search["tab_limit"]))
    if providers.downloads is not None:
        router.register(DownloadSearchHandler(
            providers.downloads, max_results=search["download_limit"], cache=cache,
        ))
    router.register(SettingsIndexHandler())
    if providers.extensions is not None:
        router.register(ExtensionSearchHandler(
            providers.extensions, max_results=search["extension_limit"], cache=cache,
        ))

    return router


class QuickSearchEngine:
    """Search and execute, dropping results of superseded queries."""

    def __init__(self, router: QueryRouter, executor: Optional[ActionExecutor] = None):
        self.router = router
        self.executor = executor
        self._version = 0

    @classmethod
    def create(cls, providers: Providers, settings: Optional[dict] = None) -> "QuickSearchEngine":
        """
        Build an engine from providers and settings.

        Args:
            providers: Browser collaborators
            settings: Loaded settings; read from the settings file if omitted

        Raises:
            ValueError: unknown calculator engine or bad web search template
        """
        settings = settings if settings is not None else load_settings()

        cache_settings = settings["cache"]
        cache = ResultCache(cache_settings["ttl_seconds"]) if cache_settings["enabled"] else NullCache()

        executor = None
        if providers.sink is not None:
            executor = ActionExecutor(
                providers.sink,
                bookmarks=providers.bookmarks,
                tabs=providers.tabs,
                search_url_template=search_url_template(settings.get("web_search")),
            )

        return cls(build_router(providers, settings, cache), executor)

    @property
    def version(self) -> int:
        """Number of the most recently issued search."""
        return self._version

    async def search(self, query: Optional[str], context: Optional[SearchContext] = None) -> Optional[CategoryMap]:
        """
        Run one aggregation pass.

        Returns:
            The category map, or None if a newer search was issued while
            this one was in flight
        """
        self._version += 1
        version = self._version

        results = await self.router.aggregate(query, context)

        if version != self._version:
            logger.debug(f"Dropping stale results for '{query}' (v{version}, latest v{self._version})")
            return None
        return results

    async def execute(self, action_id: str, metadata: Optional[dict] = None) -> bool:
        """Perform a result's action; False when no action sink is configured."""
        if self.executor is None:
            logger.warning(f"No action sink configured, cannot execute {action_id}")
            return False
        return await self.executor.execute(action_id, metadata)

    async def execute_result(self, item: ResultItem) -> bool:
        return await self.execute(item.id, item.metadata)
