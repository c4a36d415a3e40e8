from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import feedparser
import requests

from .exceptions import FeedFetchError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; NewsBot/1.0)"

# Encoding and content-type mismatches leave the entries intact
TOLERATED_BOZO = (feedparser.CharacterEncodingOverride, feedparser.NonXMLContentType)


@dataclass(frozen=True)
class FeedDocument:
    url: str
    title: Optional[str]
    entries: List[Dict[str, Any]]


def fetch_feed(url: str, *, timeout: float = DEFAULT_TIMEOUT,
               user_agent: str = DEFAULT_USER_AGENT) -> FeedDocument:
    """
    Fetch a single feed URL and return its title and entries.

    Raises FeedFetchError on network/HTTP issues or when the feed is malformed
    (bozo), except for encoding or content-type warnings on a feed that still
    has entries. One attempt only; callers decide on retries.
    """
    try:
        resp = requests.get(url, headers={"User-Agent": user_agent}, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise FeedFetchError(f"Failed to fetch feed: {url} ({e})") from e

    try:
        feed = feedparser.parse(resp.content)
    except Exception as e:  # pragma: no cover - surface as domain error
        raise FeedFetchError(f"Failed to parse feed: {url} ({e})") from e

    entries = getattr(feed, "entries", None)
    if not isinstance(entries, list):
        raise FeedFetchError(f"Feed has no entries: {url}")

    if getattr(feed, "bozo", 0):
        # bozo_exception may exist; include a short message for diagnostics
        exc = getattr(feed, "bozo_exception", None)
        msg = f"Invalid RSS/Atom feed: {url}"
        if exc:
            msg += f" ({exc})"
        if not isinstance(exc, TOLERATED_BOZO) or not entries:
            raise FeedFetchError(msg)
        logger.warning("%s", msg)

    title = feed.feed.get("title") if hasattr(feed, "feed") else None
    return FeedDocument(url=url, title=title or None, entries=entries)
