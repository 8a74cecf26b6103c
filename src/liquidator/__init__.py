"""liquidator: sell the full balance of one asset on Kraken."""

from .settings import Settings
from .exchanges import KrakenClient, sign

__all__ = [
    "Settings",
    "KrakenClient",
    "sign",
]
