"""
Base class for search sources.

Each handler queries one browser collaborator and maps its records into
ResultItem. The base class owns the two cross-cutting policies: optional
memoization through an injected cache, and containment of provider
failures (a failing source yields no results instead of an error).
"""

from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Optional

from loguru import logger

from quicksearch.search.result import ResultItem
from quicksearch.services.cache import NullCache


class SearchHandler(ABC):
    """Base class for all search handlers."""

    # Category shown for the empty-query view, None if the handler has none
    default_category: Optional[str] = None
    cacheable: bool = True

    def __init__(self, cache=None):
        self.cache = cache if cache is not None else NullCache()

    @property
    @abstractmethod
    def name(self) -> str:
        """Handler identifier."""
        ...

    @property
    @abstractmethod
    def category(self) -> str:
        """Category the handler's results are grouped under."""
        ...

    @abstractmethod
    async def search(self, query: str) -> list[ResultItem]:
        """Return results for a normalized, non-empty query."""
        ...

    async def get_default(self) -> list[ResultItem]:
        """Return results for the empty-query view."""
        return []

    async def results(self, query: str) -> list[ResultItem]:
        """search() with caching and failure containment. Never raises."""
        return await self._guarded((self.name, query), lambda: self.search(query))

    async def default_results(self) -> list[ResultItem]:
        """get_default() with caching and failure containment. Never raises."""
        return await self._guarded((self.name, None), self.get_default)

    async def _guarded(self, key, fetch) -> list[ResultItem]:
        if self.cacheable:
            cached = self.cache.get(key)
            if cached is not None:
                # Copies, so ranking a pass never rewrites cached items
                return [replace(item) for item in cached]

        try:
            items = await fetch()
        except Exception:
            logger.exception(f"Search source '{self.name}' failed")
            return []

        if self.cacheable:
            # Every keystroke is a new key; drop stale ones as new ones arrive
            self.cache.expire()
            self.cache.set(key, [replace(item) for item in items])
        return items
