"""
In-process cache for rendered admin pages.
"""
from __future__ import annotations

import time
from typing import Optional


class PageCache:
    """
    Holds rendered pages keyed by request path.

    Entries live for ``ttl_seconds``; a TTL of 0 disables caching. Mutations
    call ``invalidate`` so the next read renders from storage again.
    """

    def __init__(self, ttl_seconds: int = 300):
        self.ttl_seconds = ttl_seconds
        self._entries: dict[str, tuple[float, str]] = {}

    def get(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, content = entry
        if time.monotonic() - stored_at >= self.ttl_seconds:
            self._entries.pop(key, None)
            return None
        return content

    def set(self, key: str, content: str) -> None:
        if self.ttl_seconds <= 0:
            return
        self._entries[key] = (time.monotonic(), content)

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
