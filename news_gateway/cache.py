from __future__ import annotations

import time
from typing import Callable, Dict, Iterable, Optional

from .models import CachedFeed, NewsItem

DEFAULT_TTL = 300.0


def cache_key(feed_type: str) -> str:
    return f"rss_{feed_type}"


class FeedCache:
    """
    Most recent normalized items per feed identifier, with an expiry.

    Entries are only replaced by `put` or dropped by `invalidate`; there is no
    size bound. Concurrent misses are not coalesced, so two in-flight fetches
    for the same feed may both `put` and the last one wins.
    """

    def __init__(self, ttl: float = DEFAULT_TTL, *, clock: Callable[[], float] = time.time) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, CachedFeed] = {}

    def get(self, feed_type: str) -> Optional[CachedFeed]:
        return self._entries.get(cache_key(feed_type))

    def get_fresh(self, feed_type: str) -> Optional[CachedFeed]:
        entry = self.get(feed_type)
        if entry is not None and entry.is_fresh(self._clock()):
            return entry
        return None

    def put(self, feed_type: str, items: Iterable[NewsItem], ttl: Optional[float] = None) -> CachedFeed:
        entry = CachedFeed(
            items=tuple(items),
            captured_at=self._clock(),
            ttl=self.ttl if ttl is None else ttl,
        )
        self._entries[cache_key(feed_type)] = entry
        return entry

    def invalidate(self, feed_type: str) -> None:
        self._entries.pop(cache_key(feed_type), None)

    def __len__(self) -> int:
        return len(self._entries)
