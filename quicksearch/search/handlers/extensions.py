"""
Extensions Handler - Find installed, enabled extensions by name or description.

Apps and themes listed by the provider are not shown.
"""

from quicksearch.search.handlers.base import SearchHandler
from quicksearch.search.result import ResultItem, ResultType
from quicksearch.services.providers import ExtensionInfo, ExtensionProvider
from quicksearch.utils.helpers import contains_query


class ExtensionSearchHandler(SearchHandler):
    """Search installed extensions."""

    name = "extensions"
    category = "Extensions"

    def __init__(self, provider: ExtensionProvider, max_results: int = 5, cache=None):
        super().__init__(cache)
        self.provider = provider
        self.max_results = max_results

    async def search(self, query: str) -> list[ResultItem]:
        extensions = await self.provider.list_all()
        matching = [
            ext for ext in extensions
            if ext.enabled and ext.type == "extension"
            and contains_query(query, ext.name, ext.description)
        ]
        return [self._extension_to_result(ext) for ext in matching[:self.max_results]]

    def _extension_to_result(self, ext: ExtensionInfo) -> ResultItem:
        url = f"chrome://extensions/?id={ext.id}"
        return ResultItem(
            id=f"ext-{ext.id}",
            type=ResultType.EXTENSION,
            title=ext.name or ext.id,
            description=ext.description,
            icon="🧩",
            url=url,
            metadata={
                "action": "open-url",
                "url": url,
                "extension_id": ext.id,
            },
        )
