from __future__ import annotations

from typing import Dict, List, Mapping, Optional

from .exceptions import UnknownFeed

# Google News RSS feeds by category
GOOGLE_NEWS_FEEDS: Dict[str, str] = {
    "top": "https://news.google.com/rss?hl=en-US&gl=US&ceid=US:en",
    "technology": "https://news.google.com/rss/topics/CAAqJggKIiBDQkFTRWdvSUwyMHZNRFZ4ZERBU0FtVnVHZ0pWVXlnQVAB?hl=en-US&gl=US&ceid=US:en",
    "business": "https://news.google.com/rss/topics/CAAqJggKIiBDQkFTRWdvSUwyMHZNRFp0Y0RvU0FtVnVHZ0pWVXlnQVAB?hl=en-US&gl=US&ceid=US:en",
    "health": "https://news.google.com/rss/topics/CAAqJQgKIh9DQkFTRVFvSUwyMHZNR3QwTlRFU0FtVnVHZ0pWVXlnQVAB?hl=en-US&gl=US&ceid=US:en",
    "science": "https://news.google.com/rss/topics/CAAqKggKIiRDQkFTRlFvSUwyMHZNRFp0Y0RvU0FtVnVHZ0pWVXlnQVAB?hl=en-US&gl=US&ceid=US:en",
    "sports": "https://news.google.com/rss/topics/CAAqJggKIiBDQkFTRWdvSUwyMHZNRFp1ZEdvU0FtVnVHZ0pWVXlnQVAB?hl=en-US&gl=US&ceid=US:en",
}

DEFAULT_FEED = "top"


class FeedSourceResolver:
    """Map a symbolic feed identifier to its feed URL. Exact match only."""

    def __init__(self, feeds: Optional[Mapping[str, str]] = None) -> None:
        self._feeds = dict(GOOGLE_NEWS_FEEDS if feeds is None else feeds)

    def resolve(self, feed_type: str) -> str:
        url = self._feeds.get(feed_type)
        if not url:
            raise UnknownFeed(f"Unknown feed type: {feed_type}")
        return url

    def available_feeds(self) -> List[str]:
        return list(self._feeds)

    def __contains__(self, feed_type: object) -> bool:
        return feed_type in self._feeds
