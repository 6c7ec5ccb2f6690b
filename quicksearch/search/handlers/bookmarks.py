"""
Bookmarks Handler - Search saved bookmarks by title and URL.

Folder nodes are skipped and duplicate URLs collapse to their first node.
When a tag index is available each result carries its bookmark's tags.
"""

from typing import Optional

from loguru import logger

from quicksearch.search.handlers.base import SearchHandler
from quicksearch.search.result import ResultItem, ResultType
from quicksearch.services.providers import BookmarkNode, BookmarkStore, TagIndex
from quicksearch.utils.helpers import favicon_url, hostname


def bookmark_to_result(node: BookmarkNode, id_prefix: str = "bookmark", tags=None) -> ResultItem:
    """Convert a bookmark node with a URL to a ResultItem."""
    return ResultItem(
        id=f"{id_prefix}-{node.id}",
        type=ResultType.BOOKMARK,
        title=node.title or hostname(node.url) or node.url,
        description=node.url,
        icon=favicon_url(node.url),
        url=node.url,
        metadata={
            "action": "open-url",
            "url": node.url,
            "bookmark_id": node.id,
        },
        tags=list(tags or []),
    )


class BookmarkSearchHandler(SearchHandler):
    """Search the bookmark store."""

    name = "bookmarks"
    category = "Bookmarks"

    def __init__(
        self,
        store: BookmarkStore,
        tag_index: Optional[TagIndex] = None,
        max_results: int = 10,
        cache=None,
    ):
        super().__init__(cache)
        self.store = store
        self.tag_index = tag_index
        self.max_results = max_results

    async def search(self, query: str) -> list[ResultItem]:
        nodes = await self.store.search(query)

        seen_urls = set()
        results = []
        for node in nodes:
            if node.is_folder or node.url in seen_urls:
                continue
            seen_urls.add(node.url)

            tags = await self._tags_for(node.id)
            results.append(bookmark_to_result(node, tags=tags))
            if len(results) >= self.max_results:
                break

        return results

    async def _tags_for(self, bookmark_id: str) -> list[str]:
        """Tags of a bookmark; a failing tag index leaves results undecorated."""
        if self.tag_index is None:
            return []
        try:
            return await self.tag_index.tags_for(bookmark_id)
        except Exception:
            logger.exception(f"Tag lookup failed for bookmark {bookmark_id}")
            return []
