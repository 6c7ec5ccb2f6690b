"""
Web search URL templates.

The engine is picked in settings.toml:

    [web_search]
    engine = "duckduckgo"

or replaced with any template containing "{query}":

    [web_search]
    url = "https://kagi.com/search?q={query}"
"""

import urllib.parse

DEFAULT_ENGINES = {
    "google": {"name": "Google", "url": "https://www.google.com/search?q={query}"},
    "bing": {"name": "Bing", "url": "https://www.bing.com/search?q={query}"},
    "yahoo": {"name": "Yahoo", "url": "https://search.yahoo.com/search?p={query}"},
    "duckduckgo": {"name": "DuckDuckGo", "url": "https://duckduckgo.com/?q={query}"},
}


def search_url_template(settings: dict = None) -> str:
    """
    Resolve the URL template from a [web_search] settings section.

    Raises:
        ValueError: custom template without a {query} placeholder
    """
    settings = settings or {}

    custom = settings.get("url")
    if custom:
        if "{query}" not in custom:
            raise ValueError(f"Web search template must contain '{{query}}': {custom}")
        return custom

    engine = DEFAULT_ENGINES.get(settings.get("engine", "google"), DEFAULT_ENGINES["google"])
    return engine["url"]


def build_search_url(query: str, template: str = DEFAULT_ENGINES["google"]["url"]) -> str:
    """Substitute the URL-encoded query into a search template."""
    return template.format(query=urllib.parse.quote_plus(query))
