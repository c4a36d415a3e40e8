import pytest

from news_gateway.exceptions import UnknownFeed
from news_gateway.sources import FeedSourceResolver


def test_known_feeds_resolve_to_google_news():
    resolver = FeedSourceResolver()

    assert set(resolver.available_feeds()) == {
        "top", "technology", "business", "health", "science", "sports",
    }
    for feed_type in resolver.available_feeds():
        assert resolver.resolve(feed_type).startswith("https://news.google.com/rss")


@pytest.mark.parametrize("feed_type", ["Technology", "tech", "TOP", "", "weather"])
def test_unknown_feed_fails(feed_type):
    with pytest.raises(UnknownFeed):
        FeedSourceResolver().resolve(feed_type)


def test_custom_mapping():
    resolver = FeedSourceResolver({"local": "https://example.com/rss"})

    assert resolver.resolve("local") == "https://example.com/rss"
    assert "top" not in resolver
