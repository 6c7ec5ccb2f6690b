"""
Tags Handler - Find bookmarks through their user-assigned tags.

A query matches every tag whose name contains it; the bookmarks carrying
any of those tags are returned once each, in tag order.
"""

from quicksearch.search.handlers.base import SearchHandler
from quicksearch.search.handlers.bookmarks import bookmark_to_result
from quicksearch.search.result import ResultItem
from quicksearch.services.providers import BookmarkStore, TagIndex


class TagSearchHandler(SearchHandler):
    """Search bookmarks by tag name."""

    name = "tags"
    category = "Tags"

    def __init__(self, tag_index: TagIndex, store: BookmarkStore, max_results: int = 10, cache=None):
        super().__init__(cache)
        self.tag_index = tag_index
        self.store = store
        self.max_results = max_results

    async def search(self, query: str) -> list[ResultItem]:
        matching_tags = [tag for tag in await self.tag_index.all_tags() if query in tag.lower()]

        bookmark_ids: list[str] = []
        for tag in matching_tags:
            for bookmark_id in await self.tag_index.find_by_tag(tag):
                if bookmark_id not in bookmark_ids:
                    bookmark_ids.append(bookmark_id)

        results = []
        for bookmark_id in bookmark_ids:
            node = await self.store.get(bookmark_id)
            if node is None or node.is_folder:
                continue
            tags = await self.tag_index.tags_for(bookmark_id)
            results.append(bookmark_to_result(node, id_prefix="tagged", tags=tags))
            if len(results) >= self.max_results:
                break

        return results
