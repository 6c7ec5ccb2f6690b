"""
Actions - Commands offered alongside search results.

Always offered: new tab, new window. With a current tab: close it or the
other tabs of its window, and either bookmark it or remove its bookmark
(never both). A single-word query also gets a "search the web" action, and
a few keywords surface shortcuts to the browser's own history, downloads
and settings pages.
"""

from typing import Optional

from quicksearch.search.result import ResultItem, ResultType, SearchContext
from quicksearch.services.actions import ActionVerb
from quicksearch.services.providers import BookmarkNode

SHORTCUT_KEYWORDS = {
    ActionVerb.OPEN_HISTORY: ("history", "browsing", "visited"),
    ActionVerb.OPEN_DOWNLOADS: ("download", "files"),
    ActionVerb.OPEN_SETTINGS: ("settings", "preferences", "config"),
}

SHORTCUTS = {
    ActionVerb.OPEN_HISTORY: ("Open History", "View browsing history", "📜"),
    ActionVerb.OPEN_DOWNLOADS: ("Open Downloads", "View downloaded files", "⬇️"),
    ActionVerb.OPEN_SETTINGS: ("Open Settings", "Configure browser settings", "⚙️"),
}


def _action(verb: ActionVerb, title: str, description: str, icon: str, /, **params) -> ResultItem:
    # Positional-only: params may carry its own "title" (add-favorite)
    return ResultItem(
        id=verb.action_id,
        type=ResultType.ACTION,
        title=title,
        description=description,
        icon=icon,
        metadata={"action": verb.value, **params},
    )


def build_actions(
    query: str,
    context: Optional[SearchContext] = None,
    current_bookmark: Optional[BookmarkNode] = None,
) -> list[ResultItem]:
    """
    Build the Actions category.

    Args:
        query: Trimmed raw query ("" for the default view); the web-search
            action carries it unchanged
        context: Browsing context with the current tab, if any
        current_bookmark: Bookmark of the current tab's URL, None if the tab
            is not bookmarked

    Returns:
        Action descriptors in display order
    """
    context = context or SearchContext()
    actions = [
        _action(ActionVerb.NEW_TAB, "New Tab", "Open new tab", "➕"),
        _action(ActionVerb.NEW_WINDOW, "New Window", "Open new window", "🪟"),
    ]

    tab = context.current_tab
    if tab is not None:
        label = tab.title or "this tab"
        actions.append(_action(
            ActionVerb.CLOSE_TAB, "Close Current Tab", f'Close "{label}"', "✕",
            tab_id=tab.id,
        ))
        actions.append(_action(
            ActionVerb.CLOSE_ALL_EXCEPT, "Close All Except Current",
            "Close all other tabs in current window", "⊟",
            tab_id=tab.id,
        ))

        if current_bookmark is None:
            actions.append(_action(
                ActionVerb.ADD_FAVORITE, "Save to Favorites", f'Bookmark "{label}"', "⭐",
                url=tab.url, title=tab.title,
            ))
        else:
            actions.append(_action(
                ActionVerb.REMOVE_FAVORITE, "Remove from Favorites",
                f'Remove "{label}" from bookmarks', "☆",
                url=tab.url, bookmark_id=current_bookmark.id,
            ))

    if query and not any(ch.isspace() for ch in query):
        actions.append(_action(
            ActionVerb.WEB_SEARCH, f'Search "{query}"', "Search the web", "🔍",
            query=query,
        ))

    lowered = query.lower()
    for verb, keywords in SHORTCUT_KEYWORDS.items():
        if any(word in lowered for word in keywords):
            title, description, icon = SHORTCUTS[verb]
            actions.append(_action(verb, title, description, icon))

    return actions
