"""Base client class for exchange adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import aiohttp

from .protocol import BalanceResult, OrderResult

DEFAULT_BASE_URL = "https://api.kraken.com"


class ProxyConfig:
    """HTTP proxy configuration."""

    def __init__(self, url: str | None = None, username: str | None = None, password: str | None = None):
        self.url = url
        self.username = username
        self.password = password

    @property
    def proxy_url(self) -> str | None:
        if not self.url:
            return None
        if self.username and self.password:
            protocol = self.url.split("://")[0] if "://" in self.url else "http"
            rest = self.url.split("://")[1] if "://" in self.url else self.url
            return f"{protocol}://{self.username}:{self.password}@{rest}"
        return self.url


class BaseExchangeClient(ABC):
    """Base class for exchange adapters.

    Owns the HTTP session. Credentials are set once and never mutated, so a
    single client can be shared by sequential tasks.
    """

    def __init__(
        self,
        name: str,
        api_key: str,
        api_secret: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = None,
        proxy: ProxyConfig | None = None,
    ):
        """Initialize exchange client.

        Args:
            name: Exchange name
            api_key: API key
            api_secret: API secret
            base_url: Override for the REST endpoint root
            timeout: Total request timeout in seconds (None disables it)
            proxy: Proxy configuration
        """
        self.name = name
        self.api_key = api_key
        self.api_secret = api_secret
        self.base_url = base_url
        self.timeout = timeout
        self.proxy = proxy or ProxyConfig()
        self.session: aiohttp.ClientSession | None = None

    def get_base_url(self) -> str:
        """Get base API URL.

        Returns:
            Base API URL
        """
        return self.base_url

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self.session is None:
            connector = aiohttp.TCPConnector()
            self.session = aiohttp.ClientSession(
                connector=connector,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
        return self.session

    @abstractmethod
    async def get_balance(self) -> BalanceResult:
        """Fetch account balances."""
        ...

    @abstractmethod
    async def place_market_order(self, volume: str, pair: str | None = None) -> OrderResult:
        """Place a market sell order."""
        ...

    async def close(self) -> None:
        """Close connections."""
        if self.session is not None:
            await self.session.close()
            self.session = None

    async def __aenter__(self) -> "BaseExchangeClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
