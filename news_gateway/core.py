from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from .cache import FeedCache
from .config import GatewayConfig
from .fetcher import FeedDocument, fetch_feed
from .models import NewsItem
from .normalizer import to_news_item
from .parser import parse_entry
from .sources import FeedSourceResolver

logger = logging.getLogger(__name__)

FetchFn = Callable[..., FeedDocument]


class FeedService:
    """
    High-level API: turn a feed identifier into a list of normalized NewsItem.

    Pipeline: resolve → fetch → truncate → parse → normalize, with a
    read-through cache in front of it.
    """

    def __init__(
        self,
        *,
        config: Optional[GatewayConfig] = None,
        resolver: Optional[FeedSourceResolver] = None,
        cache: Optional[FeedCache] = None,
        fetch: FetchFn = fetch_feed,
    ) -> None:
        self.config = config or GatewayConfig()
        self.resolver = resolver or FeedSourceResolver()
        self.cache = cache or FeedCache(ttl=self.config.cache_ttl)
        self._fetch = fetch

    def fetch(self, url: str, category: Optional[str] = None) -> List[NewsItem]:
        """Fetch one feed; all-or-nothing, raises FeedFetchError on failure."""
        doc = self._fetch(url, timeout=self.config.fetch_timeout, user_agent=self.config.user_agent)

        # Limit first, keeping source order
        entries = doc.entries[: self.config.max_items] if self.config.max_items > 0 else []

        return [
            to_news_item(parse_entry(e), source=doc.title, category=category)
            for e in entries
        ]

    def get_feed(self, feed_type: str) -> Tuple[List[NewsItem], bool]:
        """
        Serve from cache when fresh, else fetch and repopulate.

        Returns the items and whether they came from the cache.
        """
        entry = self.cache.get_fresh(feed_type)
        if entry is not None:
            return list(entry.items), True

        url = self.resolver.resolve(feed_type)
        logger.info("Fetching feed %s", feed_type)
        items = self.fetch(url, feed_type)
        self.cache.put(feed_type, items)
        return items, False

    def refresh(self, feed_type: str) -> List[NewsItem]:
        self.cache.invalidate(feed_type)
        items, _ = self.get_feed(feed_type)
        return items
