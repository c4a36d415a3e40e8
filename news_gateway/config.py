from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Tuple, TypeVar

from dotenv import load_dotenv

from .exceptions import ConfigError

T = TypeVar("T")

ENV_PREFIX = "NEWS_GATEWAY_"


@dataclass(frozen=True)
class GatewayConfig:
    cache_ttl: float = 300.0  # seconds
    max_items: int = 20
    rate_limit_window: float = 60.0  # seconds
    rate_limit_max_requests: int = 10
    max_rate_limit_clients: int = 10000
    cors_origins: Tuple[str, ...] = ("*",)
    fetch_timeout: float = 15.0
    user_agent: str = "Mozilla/5.0 (compatible; NewsBot/1.0)"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    @property
    def allow_origin(self) -> str:
        return ",".join(self.cors_origins)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, *, dotenv: bool = True) -> "GatewayConfig":
        """
        Build a config from NEWS_GATEWAY_* variables (plus HOST/PORT).

        A .env file in the working directory is loaded first unless `dotenv`
        is False or an explicit `environ` mapping is given.
        """
        if environ is None:
            if dotenv:
                load_dotenv()
            environ = os.environ

        def get(name: str, cast: Callable[[str], T], default: T, *, prefixed: bool = True) -> T:
            key = f"{ENV_PREFIX}{name}" if prefixed else name
            raw = environ.get(key)
            if raw is None or raw.strip() == "":
                return default
            try:
                return cast(raw.strip())
            except ValueError as e:
                raise ConfigError(f"Invalid value for {key}: {raw!r}") from e

        defaults = cls()
        origins = get("CORS_ORIGINS", _split_origins, defaults.cors_origins)
        return cls(
            cache_ttl=get("CACHE_TTL", float, defaults.cache_ttl),
            max_items=get("MAX_ITEMS", int, defaults.max_items),
            rate_limit_window=get("RATE_LIMIT_WINDOW", float, defaults.rate_limit_window),
            rate_limit_max_requests=get("RATE_LIMIT_MAX_REQUESTS", int, defaults.rate_limit_max_requests),
            max_rate_limit_clients=get("MAX_RATE_LIMIT_CLIENTS", int, defaults.max_rate_limit_clients),
            cors_origins=origins,
            fetch_timeout=get("FETCH_TIMEOUT", float, defaults.fetch_timeout),
            user_agent=get("USER_AGENT", str, defaults.user_agent),
            host=get("HOST", str, defaults.host, prefixed=False),
            port=get("PORT", int, defaults.port, prefixed=False),
            log_level=get("LOG_LEVEL", str.upper, defaults.log_level),
        )


def _split_origins(raw: str) -> Tuple[str, ...]:
    origins = tuple(o.strip() for o in raw.split(",") if o.strip())
    if not origins:
        raise ValueError("no origins")
    return origins
