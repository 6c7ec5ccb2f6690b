"""
Result Cache - Short-lived memoization of source queries.

Handlers may keep the last answer of a backing provider for a few minutes
so that typing a query character by character does not hit every browser
API on every keystroke. The cache is best-effort: a miss is always a
valid answer, and NullCache turns it off entirely.
"""

import time
from typing import Any, Callable, Optional


class ResultCache:
    """
    TTL cache keyed by (handler, query).

    Entries older than ttl_seconds are treated as missing on read and are
    dropped by expire().
    """

    def __init__(self, ttl_seconds: float = 300, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[Any, tuple[Any, float]] = {}

    def get(self, key) -> Optional[Any]:
        """Return the cached value, or None if missing or stale."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, stored_at = entry
        if self._clock() - stored_at > self.ttl_seconds:
            del self._entries[key]
            return None
        return value

    def set(self, key, value) -> None:
        self._entries[key] = (value, self._clock())

    def expire(self, ttl: Optional[float] = None) -> int:
        """
        Drop entries older than ttl seconds.

        Args:
            ttl: Age limit; defaults to the cache's own ttl_seconds.
                 expire(0) empties the cache.

        Returns:
            Number of entries removed
        """
        limit = self.ttl_seconds if ttl is None else ttl
        now = self._clock()
        stale = [key for key, (_, stored_at) in self._entries.items() if now - stored_at >= limit]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def __len__(self) -> int:
        return len(self._entries)


class NullCache:
    """Cache that never stores anything."""

    def get(self, key) -> None:
        return None

    def set(self, key, value) -> None:
        pass

    def expire(self, ttl: Optional[float] = None) -> int:
        return 0

    def __len__(self) -> int:
        return 0
