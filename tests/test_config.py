import pytest

from news_gateway.config import GatewayConfig
from news_gateway.exceptions import ConfigError


def test_defaults():
    config = GatewayConfig.from_env({})

    assert config == GatewayConfig()
    assert config.cache_ttl == 300
    assert config.max_items == 20
    assert config.rate_limit_window == 60
    assert config.rate_limit_max_requests == 10
    assert config.allow_origin == "*"


def test_overrides_from_environment():
    config = GatewayConfig.from_env({
        "NEWS_GATEWAY_CACHE_TTL": "120",
        "NEWS_GATEWAY_MAX_ITEMS": "5",
        "NEWS_GATEWAY_RATE_LIMIT_MAX_REQUESTS": "100",
        "NEWS_GATEWAY_CORS_ORIGINS": "https://a.example, https://b.example",
        "NEWS_GATEWAY_LOG_LEVEL": "debug",
        "PORT": "8080",
    })

    assert config.cache_ttl == 120.0
    assert config.max_items == 5
    assert config.rate_limit_max_requests == 100
    assert config.cors_origins == ("https://a.example", "https://b.example")
    assert config.allow_origin == "https://a.example,https://b.example"
    assert config.log_level == "DEBUG"
    assert config.port == 8080


def test_blank_values_keep_defaults():
    assert GatewayConfig.from_env({"NEWS_GATEWAY_CACHE_TTL": "  "}).cache_ttl == 300


@pytest.mark.parametrize("key,value", [
    ("NEWS_GATEWAY_MAX_ITEMS", "twenty"),
    ("NEWS_GATEWAY_RATE_LIMIT_WINDOW", "1m"),
    ("NEWS_GATEWAY_CORS_ORIGINS", ","),
    ("PORT", "http"),
])
def test_invalid_values_raise(key, value):
    with pytest.raises(ConfigError):
        GatewayConfig.from_env({key: value})
