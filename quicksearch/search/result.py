"""
Result model shared by every search source.

Handlers map their raw provider records into ResultItem so that ranking,
rendering and action execution never care where a result came from.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from quicksearch.services.providers import TabInfo


class ResultType(str, Enum):
    BOOKMARK = "bookmark"
    FOLDER = "folder"
    HISTORY = "history"
    TAB = "tab"
    DOWNLOAD = "download"
    EXTENSION = "extension"
    SETTING = "setting"
    CALCULATOR = "calculator"
    ACTION = "action"


@dataclass
class ResultItem:
    """A single search result from any handler."""
    id: str
    type: ResultType
    title: str
    description: str = ""
    icon: str = ""
    url: Optional[str] = None
    metadata: dict = field(default_factory=dict)
    rank: float = 0.0
    tags: list[str] = field(default_factory=list)

    @property
    def action(self) -> Optional[str]:
        """Verb the action executor dispatches on when this result is picked."""
        return self.metadata.get("action")


@dataclass
class SearchContext:
    """Browsing context the query was typed in."""
    current_tab: Optional[TabInfo] = None
    is_extension_page: bool = False


CategoryMap = dict[str, list[ResultItem]]


def normalize_query(query: Optional[str]) -> str:
    """Trim and lower-case a raw query. Empty string means no query."""
    return (query or "").strip().lower()
