"""
Query Router - Fans a query out to every search source and groups the results.

Handlers are registered once and kept in display order of their category.
For each query the router runs the calculator, then all handlers
concurrently, ranks each handler's list on its own and assembles an
ordered category map. Empty categories are left out.

An empty query shows the default view instead: actions, open tabs and
recently visited pages.
"""

import asyncio
import time
from typing import Callable, Optional

from loguru import logger

from quicksearch.search.handlers.actions import build_actions
from quicksearch.search.handlers.base import SearchHandler
from quicksearch.search.handlers.calculator import CalculatorHandler
from quicksearch.search.ranking import RankingWeights, rank_results
from quicksearch.search.result import CategoryMap, ResultItem, SearchContext, normalize_query
from quicksearch.services.providers import BookmarkNode, BookmarkStore

CALCULATOR = "Calculator"
ACTIONS = "Actions"

CATEGORY_ORDER = (
    CALCULATOR,
    "Bookmarks",
    "Tags",
    "History",
    "Tabs",
    "Downloads",
    "Chrome Settings",
    "Extensions",
    ACTIONS,
)
DEFAULT_CATEGORY_ORDER = (ACTIONS, "Tabs", "Recent")

Section = tuple[str, list[ResultItem]]


def _position(category: str, order: tuple[str, ...]) -> int:
    return order.index(category) if category in order else len(order)


def assemble(sections: list[Section]) -> CategoryMap:
    """Merge (category, items) sections into a category map, dropping empty ones."""
    merged: CategoryMap = {}
    for category, items in sections:
        if items:
            merged.setdefault(category, []).extend(items)
    return merged


class QueryRouter:
    """Runs every registered handler for a query and builds the category map."""

    def __init__(
        self,
        calculator: Optional[CalculatorHandler] = None,
        bookmarks: Optional[BookmarkStore] = None,
        weights: Optional[RankingWeights] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._handlers: list[SearchHandler] = []
        self.calculator = calculator
        self.bookmarks = bookmarks
        self.weights = weights or RankingWeights()
        self._clock = clock

    @property
    def handlers(self) -> list[SearchHandler]:
        return list(self._handlers)

    def register(self, handler: SearchHandler) -> None:
        """Register a handler and re-sort by category display order."""
        self._handlers.append(handler)
        self._handlers.sort(key=lambda h: _position(h.category, CATEGORY_ORDER))

    async def aggregate(self, query: Optional[str], context: Optional[SearchContext] = None) -> CategoryMap:
        """
        Search every source for a query.

        Args:
            query: Raw text from the search box
            context: Current tab and page information

        Returns:
            Category name -> ranked results, in display order
        """
        context = context or SearchContext()
        raw = (query or "").strip()
        normalized = normalize_query(raw)

        if not normalized:
            return await self._default_results(context)

        sections: list[Section] = []
        if self.calculator is not None:
            sections.append((CALCULATOR, self.calculator.get_results(normalized)))

        *found, current_bookmark = await asyncio.gather(
            *(handler.results(normalized) for handler in self._handlers),
            self._find_current_bookmark(context),
        )

        now = self._clock()
        for handler, items in zip(self._handlers, found):
            sections.append((handler.category, rank_results(items, normalized, self.weights, now)))

        sections.append((ACTIONS, build_actions(raw, context, current_bookmark)))

        results = assemble(sections)
        logger.debug(f"Query '{normalized}': {', '.join(f'{k}={len(v)}' for k, v in results.items())}")
        return results

    async def _default_results(self, context: SearchContext) -> CategoryMap:
        defaults = [handler for handler in self._handlers if handler.default_category]

        *found, current_bookmark = await asyncio.gather(
            *(handler.default_results() for handler in defaults),
            self._find_current_bookmark(context),
        )

        sections: list[Section] = [(ACTIONS, build_actions("", context, current_bookmark))]
        sections.extend((handler.default_category, items) for handler, items in zip(defaults, found))
        sections.sort(key=lambda section: _position(section[0], DEFAULT_CATEGORY_ORDER))
        return assemble(sections)

    async def _find_current_bookmark(self, context: SearchContext) -> Optional[BookmarkNode]:
        """Bookmark whose URL equals the current tab's, if any."""
        tab = context.current_tab
        if tab is None or not tab.url or self.bookmarks is None:
            return None

        try:
            nodes = await self.bookmarks.search(tab.url)
        except Exception:
            logger.exception(f"Bookmark lookup failed for current tab {tab.url}")
            return None

        return next((node for node in nodes if node.url == tab.url), None)
