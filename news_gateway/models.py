from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from requests.structures import CaseInsensitiveDict


@dataclass(frozen=True)
class NewsItem:
    """
    Stable public model representing a normalized news item.

    WARNING: Do not change fields lightly. `to_dict` is the JSON contract the
    reader frontend consumes.
    """
    title: str
    description: str
    link: str
    published_at: str
    guid: str
    source: str
    category: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "link": self.link,
            "pubDate": self.published_at,
            "guid": self.guid,
            "source": self.source,
            "category": self.category,
        }


@dataclass(frozen=True)
class CachedFeed:
    items: Tuple[NewsItem, ...]
    captured_at: float
    ttl: float

    def is_fresh(self, now: float) -> bool:
        return now - self.captured_at < self.ttl


@dataclass
class RateWindow:
    count: int
    reset_at: float


@dataclass
class RequestEnvelope:
    """Transport-agnostic inbound request."""
    method: str
    path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Optional[str] = None

    def __post_init__(self) -> None:
        self.method = self.method.upper()
        self.headers = CaseInsensitiveDict(self.headers or {})


@dataclass
class ResponseEnvelope:
    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None

    def json(self) -> Any:
        if self.body is None:
            return None
        return json.loads(self.body)
