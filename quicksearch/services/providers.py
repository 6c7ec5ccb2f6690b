"""
Collaborator interfaces - The browser APIs the search core reads from and acts on.

Each provider is an async read-only snapshot source. Implementations live
in the surrounding extension layer; tests use in-memory fakes.
"""

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass
class BookmarkNode:
    """A node of the bookmark tree. Folders have no url."""
    id: str
    title: str = ""
    url: Optional[str] = None
    parent_id: Optional[str] = None

    @property
    def is_folder(self) -> bool:
        return not self.url


@dataclass
class HistoryEntry:
    """A browsing history entry. last_visit_time is epoch seconds."""
    url: str
    title: str = ""
    last_visit_time: float = 0.0
    visit_count: int = 0


@dataclass
class TabInfo:
    """An open browser tab."""
    id: int
    title: str = ""
    url: str = ""
    window_id: Optional[int] = None
    active: bool = False


@dataclass
class DownloadItem:
    """An entry of the download history. file_size is in bytes."""
    id: int
    filename: str
    url: str = ""
    file_size: int = 0


@dataclass
class ExtensionInfo:
    """An installed browser extension, app or theme."""
    id: str
    name: str
    description: str = ""
    enabled: bool = True
    type: str = "extension"


class BookmarkStore(Protocol):
    async def search(self, text: str) -> list[BookmarkNode]: ...

    async def get(self, bookmark_id: str) -> Optional[BookmarkNode]: ...


class HistoryProvider(Protocol):
    async def search(self, text: str, start_time: float, max_results: int) -> list[HistoryEntry]: ...


class TabProvider(Protocol):
    async def query_all(self) -> list[TabInfo]: ...


class DownloadProvider(Protocol):
    async def search(self, text: str) -> list[DownloadItem]: ...


class ExtensionProvider(Protocol):
    async def list_all(self) -> list[ExtensionInfo]: ...


class TagIndex(Protocol):
    """Out-of-band bookmark labels, keyed by bookmark id."""

    async def all_tags(self) -> list[str]: ...

    async def find_by_tag(self, tag: str) -> list[str]: ...

    async def tags_for(self, bookmark_id: str) -> list[str]: ...


class ActionSink(Protocol):
    """Side effects the action executor may perform."""

    async def open_url(self, url: str) -> None: ...

    async def open_tab(self) -> None: ...

    async def open_window(self) -> None: ...

    async def close_tab(self, tab_id: int) -> None: ...

    async def focus_tab(self, tab_id: int, window_id: Optional[int] = None) -> None: ...

    async def create_bookmark(self, title: str, url: str) -> None: ...

    async def remove_bookmark(self, bookmark_id: str) -> None: ...

    async def show_download(self, download_id: int) -> None: ...

    async def copy_to_clipboard(self, text: str) -> None: ...
