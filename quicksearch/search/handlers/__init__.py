"""
Search handlers - One per data source.

Each handler queries its browser collaborator and returns typed results.
"""

from .base import SearchHandler
from .bookmarks import BookmarkSearchHandler
from .calculator import CalculatorHandler
from .downloads import DownloadSearchHandler
from .extensions import ExtensionSearchHandler
from .history import HistorySearchHandler
from .settings_index import SettingsIndexHandler
from .tabs import TabSearchHandler
from .tags import TagSearchHandler

__all__ = [
    "SearchHandler",
    "BookmarkSearchHandler",
    "CalculatorHandler",
    "DownloadSearchHandler",
    "ExtensionSearchHandler",
    "HistorySearchHandler",
    "SettingsIndexHandler",
    "TabSearchHandler",
    "TagSearchHandler",
]
