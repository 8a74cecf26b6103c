from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .exchanges.protocol import ExchangeClient

if TYPE_CHECKING:
    from .settings import Settings


@dataclass(slots=True)
class AppContainer:
    settings: "Settings"
    exchange_client: ExchangeClient

    async def close(self) -> None:
        await self.exchange_client.close()


def build_container(settings: "Settings", exchange_client: ExchangeClient | None = None) -> AppContainer:
    """Build application container, creating the exchange client from settings if needed."""
    if exchange_client is None:
        from .exchanges.init import create_exchange_client_from_settings

        exchange_client = create_exchange_client_from_settings(settings)
    return AppContainer(settings=settings, exchange_client=exchange_client)
