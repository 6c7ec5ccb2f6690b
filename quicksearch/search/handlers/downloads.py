"""
Downloads Handler - Search the download history by file name and source URL.
"""

from quicksearch.search.handlers.base import SearchHandler
from quicksearch.search.result import ResultItem, ResultType
from quicksearch.services.providers import DownloadItem, DownloadProvider
from quicksearch.utils.helpers import contains_query, format_file_size


def bare_filename(path: str) -> str:
    """File name without its directory, for either path separator."""
    return path.replace("\\", "/").rsplit("/", 1)[-1]


class DownloadSearchHandler(SearchHandler):
    """Search downloaded files."""

    name = "downloads"
    category = "Downloads"

    def __init__(self, provider: DownloadProvider, max_results: int = 5, cache=None):
        super().__init__(cache)
        self.provider = provider
        self.max_results = max_results

    async def search(self, query: str) -> list[ResultItem]:
        downloads = await self.provider.search(query)
        # Provider matching is term based; keep only real substring hits
        matching = [
            download for download in downloads
            if contains_query(query, download.filename, download.url)
        ]
        return [self._download_to_result(d) for d in matching[:self.max_results]]

    def _download_to_result(self, download: DownloadItem) -> ResultItem:
        return ResultItem(
            id=f"download-{download.id}",
            type=ResultType.DOWNLOAD,
            title=bare_filename(download.filename) or download.url or "Download",
            description=f"{download.filename} · {format_file_size(download.file_size)}",
            icon="📥",
            url=download.url or None,
            metadata={
                "action": "show-download",
                "download_id": download.id,
                "filename": download.filename,
            },
        )
