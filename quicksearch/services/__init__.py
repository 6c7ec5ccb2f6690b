# Quick Search Services Package
"""
Backend services for the quick-search engine.

Services cover the browser collaborator interfaces, action execution and
result caching.
"""

from .actions import ActionExecutor, ActionVerb
from .cache import NullCache, ResultCache

__all__ = ["ActionExecutor", "ActionVerb", "NullCache", "ResultCache"]
