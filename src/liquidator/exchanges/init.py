"""Exchange client initialization from settings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..exceptions import InvalidCredentialsError
from .base import ProxyConfig
from .kraken import KrakenClient

if TYPE_CHECKING:
    from ..settings import Settings

logger = logging.getLogger(__name__)


def create_exchange_client_from_settings(settings: "Settings") -> KrakenClient:
    """Create the Kraken client from settings configuration.

    Raises:
        InvalidCredentialsError: If no credentials are configured
    """
    exchange = settings.exchange
    if exchange.credentials is None:
        raise InvalidCredentialsError("No exchange credentials configured")

    proxy_config = None
    if settings.proxy.enabled and settings.proxy.url:
        proxy_config = ProxyConfig(
            url=settings.proxy.url,
            username=settings.proxy.username,
            password=settings.proxy.password.get_secret_value() if settings.proxy.password else None,
        )

    client = KrakenClient(
        api_key=exchange.credentials.api_key.get_secret_value(),
        api_secret=exchange.credentials.api_secret.get_secret_value(),
        pair=settings.liquidation.pair,
        base_url=exchange.base_url,
        timeout=exchange.timeout,
        proxy=proxy_config,
    )
    logger.info("Initialized exchange client for %s", client.name)
    return client
