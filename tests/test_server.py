import os
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from news_gateway import server
from news_gateway.server import create_app


@pytest.fixture
def client(config, dispatcher):
    return TestClient(create_app(config, dispatcher))


def test_health(client):
    resp = client.get("/api/health")

    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/json"
    assert resp.json()["status"] == "healthy"


def test_get_feed(client):
    resp = client.get("/api/feeds/technology", headers={"X-Forwarded-For": "203.0.113.9"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["feedType"] == "technology"
    assert body["count"] == 20


def test_refresh_forwards_body(client):
    resp = client.post("/api/feeds/refresh", content=b'{"feedType": "science"}',
                       headers={"Content-Type": "application/json"})

    assert resp.status_code == 200
    assert resp.json()["feedType"] == "science"


def test_refresh_with_bad_body(client):
    resp = client.post("/api/feeds/refresh", content=b"invalid json")
    assert resp.status_code == 500


def test_options_preflight(client):
    resp = client.options("/api/feeds/top")

    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"
    assert resp.headers["access-control-max-age"] == "86400"


def test_method_not_allowed(client):
    resp = client.delete("/api/feeds/top")

    assert resp.status_code == 405
    assert resp.headers["allow"] == "GET, POST, OPTIONS"


def test_rate_limit_uses_client_address(client, dispatcher):
    for _ in range(10):
        assert client.get("/api/feeds/top").status_code == 200

    resp = client.get("/api/feeds/top")
    assert resp.status_code == 429
    assert resp.headers["retry-after"] == "60"
    assert dispatcher.limiter.admit("testclient") is False


def test_import_builds_no_app_and_factory_reads_environment():
    assert not hasattr(server, "app")

    with patch.dict(os.environ, {"NEWS_GATEWAY_CACHE_TTL": "42"}):
        app = create_app()

    assert app.state.dispatcher.config.cache_ttl == 42.0
