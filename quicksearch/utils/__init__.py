# Quick Search Utilities Package
"""
Shared utility functions and helpers for the quick-search engine.
"""

from .helpers import favicon_url, format_file_size, load_settings

__all__ = ["favicon_url", "format_file_size", "load_settings"]
