import pytest

from news_gateway.cache import FeedCache
from news_gateway.config import GatewayConfig
from news_gateway.core import FeedService
from news_gateway.dispatcher import RequestDispatcher
from news_gateway.exceptions import FeedFetchError
from news_gateway.fetcher import FeedDocument
from news_gateway.ratelimit import RateLimiter


class FakeClock:
    def __init__(self, start=1_700_000_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeFetch:
    """Stands in for fetch_feed; records the URLs it was asked for."""

    def __init__(self, count=25, title="Top stories - Google News"):
        self.count = count
        self.title = title
        self.calls = []
        self.error = None

    def __call__(self, url, *, timeout, user_agent):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        entries = [
            {
                "title": f"Article {i}",
                "link": f"https://example.com/{len(self.calls)}/{i}",
                "summary": f"Summary {i}",
                "id": f"guid-{len(self.calls)}-{i}",
            }
            for i in range(self.count)
        ]
        return FeedDocument(url=url, title=self.title, entries=entries)

    def fail_with(self, message):
        self.error = FeedFetchError(message)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_fetch():
    return FakeFetch()


@pytest.fixture
def config():
    return GatewayConfig()


@pytest.fixture
def service(config, clock, fake_fetch):
    cache = FeedCache(ttl=config.cache_ttl, clock=clock)
    return FeedService(config=config, cache=cache, fetch=fake_fetch)


@pytest.fixture
def limiter(config, clock):
    return RateLimiter(
        max_requests=config.rate_limit_max_requests,
        window=config.rate_limit_window,
        clock=clock,
    )


@pytest.fixture
def dispatcher(service, limiter, config):
    return RequestDispatcher(service=service, limiter=limiter, config=config)
