"""
Search package - Result model, ranking, expression evaluation and routing.

A query is fanned out to per-source handlers (bookmarks, tags, history,
tabs, downloads, settings pages, extensions) plus the calculator, and the
ranked results come back grouped by category.
"""

from .result import CategoryMap, ResultItem, ResultType, SearchContext
from .router import CATEGORY_ORDER, QueryRouter

__all__ = [
    "CATEGORY_ORDER",
    "CategoryMap",
    "QueryRouter",
    "ResultItem",
    "ResultType",
    "SearchContext",
]
