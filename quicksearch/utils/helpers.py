"""
Helper utilities for the quick-search engine.

Provides common functions used across handlers:
- Settings loading with defaults
- URL and file-size formatting for result descriptions
"""

from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import toml
from loguru import logger

DEFAULT_SETTINGS: Dict[str, Any] = {
    "search": {
        "bookmark_limit": 10,
        "tag_limit": 10,
        "history_limit": 10,
        "history_days": 30,
        "history_fetch_limit": 100,
        "recent_limit": 5,
        "recent_hours": 24,
        "tab_limit": 5,
        "download_limit": 5,
        "extension_limit": 5,
    },
    "ranking": {
        "title_exact": 1.0,
        "title_prefix": 0.8,
        "title_contains": 0.5,
        "description_prefix": 0.4,
        "description_contains": 0.2,
        "recent_hour": 0.15,
        "recent_day": 0.10,
        "recent_week": 0.05,
        "recent_hour_seconds": 3600,
        "recent_day_seconds": 86400,
        "recent_week_seconds": 604800,
        "tab_bonus": 0.15,
        "bookmark_bonus": 0.10,
    },
    "calculator": {
        "engine": "builtin",
        "precision": 8,
    },
    "web_search": {
        "engine": "google",
    },
    "cache": {
        "enabled": True,
        "ttl_seconds": 300,
    },
}


def _settings_path() -> Path:
    return Path.home() / ".config" / "quicksearch" / "settings.toml"


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load engine settings from a TOML file.

    Args:
        path: Settings file; defaults to ~/.config/quicksearch/settings.toml

    Returns:
        Dictionary containing settings with defaults applied

    Example settings file:
        [search]
        tab_limit = 8

        [ranking]
        tab_bonus = 0.2

        [web_search]
        engine = "duckduckgo"
    """
    settings_path = Path(path) if path is not None else _settings_path()

    if not settings_path.exists():
        logger.debug(f"Settings file not found at {settings_path}, using defaults")
        return _deep_merge(DEFAULT_SETTINGS, {})

    try:
        loaded = toml.load(settings_path)
    except (OSError, toml.TomlDecodeError) as e:
        logger.warning(f"Could not load settings from {settings_path}: {e}. Using defaults")
        return _deep_merge(DEFAULT_SETTINGS, {})

    return _deep_merge(DEFAULT_SETTINGS, loaded)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary with defaults
        override: Dictionary with overrides

    Returns:
        Merged dictionary (override takes precedence, base is not mutated)
    """
    result = {
        key: _deep_merge(value, {}) if isinstance(value, dict) else value
        for key, value in base.items()
    }

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def hostname(url: Optional[str]) -> str:
    """Host part of a URL, or "" if it has none."""
    if not url:
        return ""
    return urlparse(url).hostname or ""


def favicon_url(url: Optional[str]) -> str:
    """Favicon service URL for a page, or a generic page glyph."""
    host = hostname(url)
    if not host:
        return "📄"
    return f"https://www.google.com/s2/favicons?sz=24&domain={host}"


def format_file_size(size: Optional[int]) -> str:
    """
    Human-readable file size.

    Example:
        format_file_size(1536) -> "1.5 KB"
    """
    if not size:
        return "Unknown"

    units = ["B", "KB", "MB", "GB"]
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(units) - 1:
        value /= 1024
        unit += 1

    return f"{value:.1f} {units[unit]}"


def contains_query(query: str, *fields: Optional[str]) -> bool:
    """True if the lower-cased query is a substring of any field."""
    return any(query in field.lower() for field in fields if field)
