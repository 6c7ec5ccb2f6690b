"""
Shared test fixtures for the quick-search test suite.

Provides in-memory async stand-ins for the browser collaborators and a
temporary settings file using real file I/O.
"""

import time

import pytest
import toml

from quicksearch.services.providers import (
    BookmarkNode,
    DownloadItem,
    ExtensionInfo,
    HistoryEntry,
    TabInfo,
)

NOW = 1_700_000_000.0


class FakeBookmarkStore:
    def __init__(self, nodes=None):
        self.nodes = list(nodes or [])
        self.search_calls = []

    async def search(self, text):
        self.search_calls.append(text)
        text = text.lower()
        return [
            node for node in self.nodes
            if text in (node.title or "").lower() or text in (node.url or "").lower()
        ]

    async def get(self, bookmark_id):
        return next((node for node in self.nodes if node.id == bookmark_id), None)


class FakeHistoryProvider:
    def __init__(self, entries=None):
        self.entries = list(entries or [])
        self.calls = []

    async def search(self, text, start_time, max_results):
        self.calls.append({"text": text, "start_time": start_time, "max_results": max_results})
        text = text.lower()
        matching = [
            entry for entry in self.entries
            if entry.last_visit_time >= start_time
            and (text in entry.title.lower() or text in entry.url.lower())
        ]
        return matching[:max_results]


class FakeTabProvider:
    def __init__(self, tabs=None):
        self.tabs = list(tabs or [])

    async def query_all(self):
        return list(self.tabs)


class FakeDownloadProvider:
    def __init__(self, downloads=None):
        self.downloads = list(downloads or [])

    async def search(self, text):
        return list(self.downloads)


class FakeExtensionProvider:
    def __init__(self, extensions=None):
        self.extensions = list(extensions or [])

    async def list_all(self):
        return list(self.extensions)


class FakeTagIndex:
    def __init__(self, tags_by_bookmark=None):
        self.tags_by_bookmark = dict(tags_by_bookmark or {})

    async def all_tags(self):
        return sorted({tag for tags in self.tags_by_bookmark.values() for tag in tags})

    async def find_by_tag(self, tag):
        return [bid for bid, tags in self.tags_by_bookmark.items() if tag in tags]

    async def tags_for(self, bookmark_id):
        return list(self.tags_by_bookmark.get(bookmark_id, []))


class FailingProvider:
    """Every call raises, like a provider whose permission was revoked."""

    def __getattr__(self, name):
        async def fail(*args, **kwargs):
            raise PermissionError(f"{name} not permitted")
        return fail


class RecordingSink:
    """ActionSink that records every call."""

    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        async def record(*args, **kwargs):
            self.calls.append((name, args, kwargs))
        return record


@pytest.fixture
def bookmark_nodes():
    return [
        BookmarkNode(id="1", title="GitHub", url="https://github.com", parent_id="0"),
        BookmarkNode(id="2", title="Python Docs", url="https://docs.python.org", parent_id="0"),
        BookmarkNode(id="3", title="Work", parent_id="0"),
        BookmarkNode(id="4", title="GitHub mirror", url="https://github.com", parent_id="3"),
        BookmarkNode(id="5", title="Hacker News", url="https://news.ycombinator.com", parent_id="3"),
    ]


@pytest.fixture
def bookmark_store(bookmark_nodes):
    return FakeBookmarkStore(bookmark_nodes)


@pytest.fixture
def tag_index():
    return FakeTagIndex({
        "1": ["dev", "code"],
        "2": ["python", "docs", "dev"],
        "5": ["news"],
    })


@pytest.fixture
def history_provider():
    return FakeHistoryProvider([
        HistoryEntry("https://github.com/trending", "Trending repositories", NOW - 600, 4),
        HistoryEntry("https://github.com/trending", "Trending repositories", NOW - 7200, 4),
        HistoryEntry("https://gitlab.com", "GitLab", NOW - 3 * 86400, 2),
        HistoryEntry("https://example.com/git-guide", "A guide", NOW - 40 * 86400, 1),
        HistoryEntry("https://mail.example.com", "Inbox (3)", NOW - 1800, 9),
    ])


@pytest.fixture
def tab_provider():
    return FakeTabProvider([
        TabInfo(id=11, title="Inbox", url="https://mail.example.com", window_id=1, active=True),
        TabInfo(id=12, title="git-scm docs", url="https://git-scm.com/doc", window_id=1),
        TabInfo(id=13, title="Weather", url="https://weather.example.com", window_id=2),
    ])


@pytest.fixture
def download_provider():
    return FakeDownloadProvider([
        DownloadItem(1, "/home/user/Downloads/git-2.43.tar.gz", "https://kernel.org/git-2.43.tar.gz", 10_485_760),
        DownloadItem(2, "C:\\Users\\me\\Downloads\\report.pdf", "https://example.com/report.pdf", 2048),
    ])


@pytest.fixture
def extension_provider():
    return FakeExtensionProvider([
        ExtensionInfo("abc", "Git Helper", "Shortcuts for GitHub", True, "extension"),
        ExtensionInfo("def", "Disabled Git", "Turned off", False, "extension"),
        ExtensionInfo("ghi", "Git Theme", "Dark theme", True, "theme"),
    ])


@pytest.fixture
def recording_sink():
    return RecordingSink()


@pytest.fixture
def tmp_settings(tmp_path):
    """Create a real settings TOML file overriding a few defaults."""
    settings_path = tmp_path / "settings.toml"
    data = {
        "search": {"tab_limit": 8},
        "ranking": {"tab_bonus": 0.2},
        "calculator": {"engine": "simpleeval"},
        "web_search": {"engine": "duckduckgo"},
    }
    settings_path.write_text(toml.dumps(data))
    return settings_path


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def real_now():
    return time.time()
