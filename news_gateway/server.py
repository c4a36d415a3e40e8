"""
HTTP adapter for the feed gateway.

Every path and method is forwarded to a single RequestDispatcher, which owns
the cache and rate-limit state for the lifetime of the app.

Usage:
    news-gateway
    uvicorn news_gateway.server:create_app --factory --reload
"""
from __future__ import annotations

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, Response
from starlette.concurrency import run_in_threadpool

from . import __version__
from .config import GatewayConfig
from .dispatcher import RequestDispatcher
from .models import RequestEnvelope, ResponseEnvelope
from .sources import FeedSourceResolver

logger = logging.getLogger(__name__)

METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


async def to_envelope(request: Request) -> RequestEnvelope:
    headers = dict(request.headers)
    if "remote-addr" not in headers and request.client:
        headers["remote-addr"] = request.client.host
    raw = await request.body()
    return RequestEnvelope(
        method=request.method,
        path=request.url.path,
        headers=headers,
        body=raw.decode("utf-8", errors="replace") if raw else None,
    )


def to_response(envelope: ResponseEnvelope) -> Response:
    return Response(
        content=envelope.body or b"",
        status_code=envelope.status,
        headers=envelope.headers,
    )


def create_app(config: Optional[GatewayConfig] = None,
               dispatcher: Optional[RequestDispatcher] = None) -> FastAPI:
    config = config or GatewayConfig.from_env()
    dispatcher = dispatcher or RequestDispatcher(config=config)

    app = FastAPI(
        title="News Gateway",
        version=__version__,
        description="Google News RSS feeds as normalized JSON",
    )
    app.state.dispatcher = dispatcher

    @app.api_route("/{path:path}", methods=METHODS, include_in_schema=False)
    async def gateway(request: Request) -> Response:
        envelope = await to_envelope(request)
        # The dispatcher fetches with blocking I/O
        result = await run_in_threadpool(dispatcher.handle, envelope)
        return to_response(result)

    return app


def main() -> None:
    config = GatewayConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("News gateway listening on http://%s:%s", config.host, config.port)
    logger.info("Health check: /api/health")
    logger.info("Feeds: /api/feeds/{feedType} (%s)", ", ".join(FeedSourceResolver().available_feeds()))
    logger.info("Refresh cache: POST /api/feeds/refresh")
    uvicorn.run(create_app(config), host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
