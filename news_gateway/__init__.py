"""
news_gateway

Serves Google News RSS feeds as normalized JSON for a front-end reader.

Core ideas:
- Input: a symbolic feed identifier ("top", "technology", ...)
- Process: resolve → fetch → parse → normalize → truncate, behind a TTL cache
  and a fixed-window per-client rate limiter
- Output: JSON response envelopes, independent of the HTTP transport

Example
-------
from news_gateway import RequestDispatcher, RequestEnvelope

dispatcher = RequestDispatcher()
resp = dispatcher.handle(RequestEnvelope(method="GET", path="/api/feeds/technology"))
print(resp.status, resp.json()["count"])
"""
__version__ = "1.0.0"

from .models import NewsItem, RequestEnvelope, ResponseEnvelope
from .config import GatewayConfig
from .core import FeedService
from .dispatcher import RequestDispatcher

__all__ = [
    "NewsItem",
    "RequestEnvelope",
    "ResponseEnvelope",
    "GatewayConfig",
    "FeedService",
    "RequestDispatcher",
]
