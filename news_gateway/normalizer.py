from __future__ import annotations

import hashlib
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .models import NewsItem

DEFAULT_TITLE = "No title"
DEFAULT_DESCRIPTION = "No description"
DEFAULT_LINK = "#"
DEFAULT_SOURCE = "Google News"


def isoformat(dt: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a trailing Z."""
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def make_guid(link: str) -> str:
    return hashlib.md5((link or "").encode("utf-8")).hexdigest()


def to_news_item(entry: Dict[str, Any], *, source: Optional[str] = None,
                 category: Optional[str] = None) -> NewsItem:
    """
    Convert a parsed entry dict into a NewsItem.

    Missing fields are filled rather than rejected:
    - title -> "No title", description -> "No description", link -> "#"
    - published_at -> current UTC time
    - guid -> md5 of the raw link (empty string when absent)

    Items with neither a guid nor a link all share md5(""), so the guid is
    not a unique key for them.
    """
    raw_link = entry.get("link") or ""
    published_at = entry.get("published_at")
    if not isinstance(published_at, datetime):
        published_at = datetime.now(timezone.utc)

    return NewsItem(
        title=entry.get("title") or DEFAULT_TITLE,
        description=entry.get("description") or DEFAULT_DESCRIPTION,
        link=raw_link or DEFAULT_LINK,
        published_at=isoformat(published_at),
        guid=entry.get("guid") or make_guid(raw_link),
        source=source or DEFAULT_SOURCE,
        category=category,
    )
