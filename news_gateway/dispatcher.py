"""
Request dispatch for the feed gateway.

Routes transport-agnostic request envelopes by method and path:

    OPTIONS  *                   -> CORS preflight
    GET      /api/health         -> store-size diagnostics
    GET      /api/feeds/{type}   -> cached or freshly fetched feed
    POST     /api/feeds/refresh  -> invalidate, then fetch

The `/api` prefix is optional. Anything else is a 405. `handle` never raises:
every failure comes back as a JSON error envelope.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from . import __version__
from .config import GatewayConfig
from .core import FeedService
from .exceptions import (
    FeedFetchError,
    MalformedRequestBody,
    NewsGatewayError,
    RateLimitExceeded,
    UnknownFeed,
)
from .models import RequestEnvelope, ResponseEnvelope
from .normalizer import isoformat
from .ratelimit import RateLimiter, client_identifier
from .sources import DEFAULT_FEED

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ["GET", "POST", "OPTIONS"]
ALLOW_HEADER = ", ".join(ALLOWED_METHODS)
CORS_ALLOW_HEADERS = "Content-Type, Authorization"
CORS_MAX_AGE = "86400"
JSON_CONTENT_TYPE = "application/json"


def _now() -> str:
    return isoformat(datetime.now(timezone.utc))


def _split_path(path: str) -> List[str]:
    segments = [s for s in path.split("?", 1)[0].split("/") if s]
    if segments and segments[0] == "api":
        segments = segments[1:]
    return segments


class RequestDispatcher:
    def __init__(self, service: Optional[FeedService] = None,
                 limiter: Optional[RateLimiter] = None,
                 config: Optional[GatewayConfig] = None) -> None:
        self.config = config or (service.config if service else GatewayConfig())
        self.service = service or FeedService(config=self.config)
        self.limiter = limiter or RateLimiter(
            max_requests=self.config.rate_limit_max_requests,
            window=self.config.rate_limit_window,
            max_clients=self.config.max_rate_limit_clients,
        )

    # -- entry point ---------------------------------------------------------

    def handle(self, request: RequestEnvelope) -> ResponseEnvelope:
        logger.info("%s %s", request.method, request.path)
        try:
            return self._route(request)
        except RateLimitExceeded as e:
            logger.warning("%s", e)
            return self._json(429, {
                "error": "Rate limit exceeded",
                "message": "Too many requests. Please try again later.",
            }, headers={"Retry-After": str(e.retry_after)})
        except Exception:
            logger.exception("Unhandled error dispatching %s %s", request.method, request.path)
            return self._json(500, {
                "error": "Internal server error",
                "message": "An unexpected error occurred",
            })

    def health(self) -> ResponseEnvelope:
        return self._json(200, {
            "status": "healthy",
            "timestamp": _now(),
            "version": __version__,
            "cacheSize": len(self.service.cache),
            "rateLimitEntries": len(self.limiter),
        })

    # -- routing -------------------------------------------------------------

    def _route(self, request: RequestEnvelope) -> ResponseEnvelope:
        if request.method == "OPTIONS":
            return self._preflight()

        segments = _split_path(request.path)

        if request.method == "GET":
            if segments == ["health"]:
                return self.health()
            if segments and segments[0] == "feeds" and len(segments) <= 2:
                feed_type = segments[1] if len(segments) == 2 else DEFAULT_FEED
                self.limiter.check(client_identifier(request.headers))
                return self._get_feed(feed_type)

        if request.method == "POST" and segments == ["feeds", "refresh"]:
            self.limiter.check(client_identifier(request.headers))
            return self._refresh(request)

        return self._json(405, {
            "error": "Method not allowed",
            "allowedMethods": ALLOWED_METHODS,
        }, headers={"Allow": ALLOW_HEADER})

    # -- handlers ------------------------------------------------------------

    def _get_feed(self, feed_type: str) -> ResponseEnvelope:
        try:
            items, cached = self.service.get_feed(feed_type)
        except NewsGatewayError as e:
            return self._error(e, "Error handling GET request")

        return self._json(200, {
            "success": True,
            "feedType": feed_type,
            "count": len(items),
            "data": [item.to_dict() for item in items],
            "timestamp": _now(),
            "cached": cached,
        }, headers={
            "Cache-Control": f"public, max-age={int(self.config.cache_ttl)}",
            "Access-Control-Allow-Methods": ALLOW_HEADER,
            "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
        })

    def _refresh(self, request: RequestEnvelope) -> ResponseEnvelope:
        try:
            feed_type = self._refresh_target(request.body)
            items = self.service.refresh(feed_type)
        except NewsGatewayError as e:
            return self._error(e, "Error refreshing cache")

        return self._json(200, {
            "success": True,
            "message": "Cache refreshed successfully",
            "feedType": feed_type,
            "count": len(items),
            "timestamp": _now(),
        })

    @staticmethod
    def _refresh_target(body: Optional[str]) -> str:
        if body is None or not body.strip():
            return DEFAULT_FEED
        try:
            payload = json.loads(body)
        except ValueError as e:
            raise MalformedRequestBody(f"Request body is not valid JSON: {e}") from e
        if not isinstance(payload, dict):
            raise MalformedRequestBody("Request body must be a JSON object")
        feed_type = payload.get("feedType")
        if feed_type is None or feed_type == "":
            return DEFAULT_FEED
        if not isinstance(feed_type, str):
            raise MalformedRequestBody("feedType must be a string")
        return feed_type

    # -- envelopes -----------------------------------------------------------

    def _preflight(self) -> ResponseEnvelope:
        return ResponseEnvelope(status=200, headers={
            "Content-Type": JSON_CONTENT_TYPE,
            "Access-Control-Allow-Origin": self.config.allow_origin,
            "Access-Control-Allow-Methods": ALLOW_HEADER,
            "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
            "Access-Control-Max-Age": CORS_MAX_AGE,
        })

    def _error(self, error: NewsGatewayError, context: str) -> ResponseEnvelope:
        # UnknownFeed maps to 500 too, not 404
        if isinstance(error, (UnknownFeed, MalformedRequestBody)):
            logger.warning("%s: %s", context, error)
        elif isinstance(error, FeedFetchError):
            logger.error("%s: %s", context, error)
        else:
            logger.exception("%s", context)
        return self._json(500, {
            "error": "Internal server error",
            "message": str(error),
        })

    def _json(self, status: int, payload: Dict[str, Any],
              headers: Optional[Dict[str, str]] = None) -> ResponseEnvelope:
        out = {
            "Content-Type": JSON_CONTENT_TYPE,
            "Access-Control-Allow-Origin": self.config.allow_origin,
        }
        if headers:
            out.update(headers)
        return ResponseEnvelope(status=status, headers=out, body=json.dumps(payload, ensure_ascii=False))
