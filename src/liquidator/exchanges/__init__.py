"""Exchange adapters and request signing."""

from .protocol import ApiEnvelope, BalanceResult, ExchangeClient, OrderResult, ResultStatus
from .signing import NonceSource, sign
from .base import BaseExchangeClient, ProxyConfig
from .kraken import KrakenClient

__all__ = [
    "ApiEnvelope",
    "BalanceResult",
    "ExchangeClient",
    "OrderResult",
    "ResultStatus",
    "NonceSource",
    "sign",
    "BaseExchangeClient",
    "ProxyConfig",
    "KrakenClient",
]
