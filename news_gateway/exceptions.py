class NewsGatewayError(Exception):
    """Base class for errors raised by news_gateway."""


class UnknownFeed(NewsGatewayError):
    """Raised when a feed identifier is not in the configured set."""


class FeedFetchError(NewsGatewayError):
    """Raised when an RSS/Atom feed cannot be fetched or parsed."""


class MalformedRequestBody(NewsGatewayError):
    """Raised when a request body is not a JSON object."""


class RateLimitExceeded(NewsGatewayError):
    """Raised when a client has used up its request window."""

    def __init__(self, client_id: str, retry_after: int) -> None:
        super().__init__(f"Rate limit exceeded for client {client_id}")
        self.client_id = client_id
        self.retry_after = retry_after


class ConfigError(NewsGatewayError):
    """Raised when a configuration value cannot be interpreted."""
