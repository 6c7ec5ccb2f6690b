# Quick Search Package
"""
Unified quick-search engine for a browser new-tab page.

Layers:
  - search: result model, relevance ranking, expression evaluation,
    per-source handlers and the aggregating router
  - services: collaborator interfaces, action execution, caching
  - utils: settings loading and small formatting helpers
"""

__version__ = "0.1.0"
