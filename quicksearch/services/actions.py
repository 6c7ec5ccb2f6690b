"""
Action Executor - Perform the effect behind a picked search result.

Action results carry ids of the form "action-<verb>"; every other result
names its verb in metadata["action"] ("open-url" for bookmarks, "focus-tab"
for tabs, ...). Verbs form a closed enum and each has exactly one handler
in the dispatch table.

execute() reports True when the effect was performed and False when it
was skipped or failed. It never raises to the caller.
"""

from enum import Enum
from typing import Optional

from loguru import logger

from quicksearch.services.providers import ActionSink, BookmarkStore, TabProvider
from quicksearch.services.web_search import DEFAULT_ENGINES, build_search_url

ACTION_PREFIX = "action-"


class ActionVerb(str, Enum):
    NEW_TAB = "new-tab"
    NEW_WINDOW = "new-window"
    CLOSE_TAB = "close-tab"
    CLOSE_ALL_EXCEPT = "close-all-except"
    WEB_SEARCH = "web-search"
    ADD_FAVORITE = "add-favorite"
    REMOVE_FAVORITE = "remove-favorite"
    OPEN_HISTORY = "open-history"
    OPEN_DOWNLOADS = "open-downloads"
    OPEN_SETTINGS = "open-settings"
    OPEN_URL = "open-url"
    FOCUS_TAB = "focus-tab"
    SHOW_DOWNLOAD = "show-download"
    COPY_RESULT = "copy-result"

    @property
    def action_id(self) -> str:
        return f"{ACTION_PREFIX}{self.value}"

    @classmethod
    def resolve(cls, action_id: str, metadata: Optional[dict] = None) -> Optional["ActionVerb"]:
        """Verb from an "action-<verb>" id, else from metadata["action"]."""
        candidates = []
        if action_id and action_id.startswith(ACTION_PREFIX):
            candidates.append(action_id[len(ACTION_PREFIX):])
        if metadata and metadata.get("action"):
            candidates.append(metadata["action"])

        for candidate in candidates:
            try:
                return cls(candidate)
            except ValueError:
                continue
        return None


BROWSER_PAGES = {
    ActionVerb.OPEN_HISTORY: "chrome://history",
    ActionVerb.OPEN_DOWNLOADS: "chrome://downloads",
    ActionVerb.OPEN_SETTINGS: "chrome://settings",
}


class ActionExecutor:
    """Dispatch picked results to the action sink."""

    def __init__(
        self,
        sink: ActionSink,
        bookmarks: Optional[BookmarkStore] = None,
        tabs: Optional[TabProvider] = None,
        search_url_template: str = DEFAULT_ENGINES["google"]["url"],
    ):
        self.sink = sink
        self.bookmarks = bookmarks
        self.tabs = tabs
        self.search_url_template = search_url_template

        self._dispatch = {
            ActionVerb.NEW_TAB: self._new_tab,
            ActionVerb.NEW_WINDOW: self._new_window,
            ActionVerb.CLOSE_TAB: self._close_tab,
            ActionVerb.CLOSE_ALL_EXCEPT: self._close_all_except,
            ActionVerb.WEB_SEARCH: self._web_search,
            ActionVerb.ADD_FAVORITE: self._add_favorite,
            ActionVerb.REMOVE_FAVORITE: self._remove_favorite,
            ActionVerb.OPEN_HISTORY: self._open_browser_page,
            ActionVerb.OPEN_DOWNLOADS: self._open_browser_page,
            ActionVerb.OPEN_SETTINGS: self._open_browser_page,
            ActionVerb.OPEN_URL: self._open_url,
            ActionVerb.FOCUS_TAB: self._focus_tab,
            ActionVerb.SHOW_DOWNLOAD: self._show_download,
            ActionVerb.COPY_RESULT: self._copy_result,
        }

    async def execute(self, action_id: str, metadata: Optional[dict] = None) -> bool:
        """
        Perform the action behind a result.

        Args:
            action_id: Result id, e.g. "action-new-tab" or "tab-12"
            metadata: The result's metadata bag

        Returns:
            True if the effect was performed, False otherwise
        """
        metadata = metadata or {}
        verb = ActionVerb.resolve(action_id, metadata)
        if verb is None:
            logger.warning(f"Unknown action: {action_id}")
            return False

        logger.debug(f"Executing {verb.value} for {action_id}")
        try:
            return await self._dispatch[verb](verb, metadata)
        except Exception:
            logger.exception(f"Action {verb.value} failed for {action_id}")
            return False

    async def execute_result(self, item) -> bool:
        """Execute a ResultItem."""
        return await self.execute(item.id, item.metadata)

    async def _new_tab(self, verb, metadata) -> bool:
        await self.sink.open_tab()
        return True

    async def _new_window(self, verb, metadata) -> bool:
        await self.sink.open_window()
        return True

    async def _close_tab(self, verb, metadata) -> bool:
        tab_id = metadata.get("tab_id")
        if tab_id is None:
            return False
        await self.sink.close_tab(tab_id)
        return True

    async def _close_all_except(self, verb, metadata) -> bool:
        tab_id = metadata.get("tab_id")
        if tab_id is None or self.tabs is None:
            return False

        tabs = await self.tabs.query_all()
        current = next((tab for tab in tabs if tab.id == tab_id), None)
        if current is None:
            logger.debug(f"Tab {tab_id} is gone, nothing to keep")
            return False

        others = [tab.id for tab in tabs if tab.window_id == current.window_id and tab.id != tab_id]
        for other in others:
            await self.sink.close_tab(other)
        return True

    async def _web_search(self, verb, metadata) -> bool:
        query = (metadata.get("query") or "").strip()
        if not query:
            return False
        await self.sink.open_url(build_search_url(query, self.search_url_template))
        return True

    async def _add_favorite(self, verb, metadata) -> bool:
        url = metadata.get("url")
        if not url:
            return False
        await self.sink.create_bookmark(metadata.get("title") or url, url)
        return True

    async def _remove_favorite(self, verb, metadata) -> bool:
        url = metadata.get("url")
        if not url or self.bookmarks is None:
            return False

        matches = [node for node in await self.bookmarks.search(url) if node.url == url]
        if not matches:
            logger.debug(f"No bookmark to remove for {url}")
            return False

        await self.sink.remove_bookmark(matches[0].id)
        return True

    async def _open_browser_page(self, verb, metadata) -> bool:
        await self.sink.open_url(BROWSER_PAGES[verb])
        return True

    async def _open_url(self, verb, metadata) -> bool:
        url = metadata.get("url")
        if not url:
            return False
        await self.sink.open_url(url)
        return True

    async def _focus_tab(self, verb, metadata) -> bool:
        tab_id = metadata.get("tab_id")
        if tab_id is None:
            return False
        await self.sink.focus_tab(tab_id, metadata.get("window_id"))
        return True

    async def _show_download(self, verb, metadata) -> bool:
        download_id = metadata.get("download_id")
        if download_id is None:
            return False
        await self.sink.show_download(download_id)
        return True

    async def _copy_result(self, verb, metadata) -> bool:
        value = metadata.get("value")
        if value is None:
            return False
        await self.sink.copy_to_clipboard(str(value))
        return True
