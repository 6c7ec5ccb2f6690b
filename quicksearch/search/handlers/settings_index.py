"""
Browser Settings Handler - Jump straight to a browser settings page.

Matches against a hand-maintained index of settings pages: a page is a hit
when the query appears in its title or in one of its keywords, so "cookie"
finds both Privacy and Clear Browsing Data.
"""

from quicksearch.search.handlers.base import SearchHandler
from quicksearch.search.result import ResultItem, ResultType

SETTINGS_PAGES = [
    {
        "title": "Password Manager",
        "description": "Manage saved passwords",
        "url": "chrome://password-manager/passwords",
        "keywords": ["password", "login", "credentials", "security"],
    },
    {
        "title": "Privacy and Security",
        "description": "Control your privacy settings",
        "url": "chrome://settings/privacy",
        "keywords": ["privacy", "security", "tracking", "cookies", "safe"],
    },
    {
        "title": "Appearance",
        "description": "Customize the browser's look",
        "url": "chrome://settings/appearance",
        "keywords": ["theme", "font", "display", "dark", "light"],
    },
    {
        "title": "Search Engine",
        "description": "Manage search engines",
        "url": "chrome://settings/search",
        "keywords": ["search", "engine", "google", "bing", "default"],
    },
    {
        "title": "Clear Browsing Data",
        "description": "Clear history and cache",
        "url": "chrome://settings/clearBrowserData",
        "keywords": ["clear", "history", "cache", "cookies", "data"],
    },
    {
        "title": "Autofill",
        "description": "Manage forms and payment methods",
        "url": "chrome://settings/autofill",
        "keywords": ["autofill", "forms", "payment", "address"],
    },
    {
        "title": "Extensions",
        "description": "Manage browser extensions",
        "url": "chrome://extensions/",
        "keywords": ["extensions", "plugins", "addons"],
    },
    {
        "title": "Downloads",
        "description": "View download history",
        "url": "chrome://downloads/",
        "keywords": ["downloads", "files"],
    },
    {
        "title": "Languages",
        "description": "Change language settings",
        "url": "chrome://settings/languages",
        "keywords": ["language", "translate", "spelling"],
    },
    {
        "title": "System",
        "description": "Hardware acceleration and system settings",
        "url": "chrome://settings/system",
        "keywords": ["system", "hardware", "performance"],
    },
]


class SettingsIndexHandler(SearchHandler):
    """Search the static settings-page index."""

    name = "settings"
    category = "Chrome Settings"
    cacheable = False

    def __init__(self, pages: list[dict] = None, cache=None):
        super().__init__(cache)
        self.pages = pages if pages is not None else SETTINGS_PAGES

    async def search(self, query: str) -> list[ResultItem]:
        return [self._page_to_result(page) for page in self.pages if self._page_matches(page, query)]

    def _page_matches(self, page: dict, query: str) -> bool:
        if query in page["title"].lower():
            return True
        return any(query in keyword.lower() for keyword in page.get("keywords", []))

    def _page_to_result(self, page: dict) -> ResultItem:
        slug = page["title"].lower().replace(" ", "-")
        return ResultItem(
            id=f"setting-{slug}",
            type=ResultType.SETTING,
            title=page["title"],
            description=page.get("description", ""),
            icon="⚙️",
            url=page["url"],
            metadata={
                "action": "open-url",
                "url": page["url"],
            },
        )
