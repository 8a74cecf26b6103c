"""Protocol and result types for exchange clients."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from pydantic import BaseModel, ValidationError

from ..exceptions import EnvelopeError


class ApiEnvelope(BaseModel):
    """Outer JSON structure of every private API response."""

    error: list[str]
    result: dict[str, str] | None = None

    @classmethod
    def parse(cls, body: str) -> "ApiEnvelope":
        try:
            return cls.model_validate_json(body)
        except ValidationError as exc:
            raise EnvelopeError(f"Unexpected response envelope: {exc}", body) from exc


class ResultStatus(Enum):
    """Classification of a private API call."""

    SUCCESS = "success"
    NO_RESULT = "no_result"
    API_ERROR = "api_error"
    HTTP_ERROR = "http_error"


@dataclass
class BalanceResult:
    """Outcome of a balance query."""

    status: ResultStatus
    http_status: int
    balances: dict[str, str] | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == ResultStatus.SUCCESS

    def get(self, asset: str) -> str | None:
        if not self.balances:
            return None
        return self.balances.get(asset)


@dataclass
class OrderResult:
    """Outcome of an order submission."""

    status: ResultStatus
    http_status: int
    post_data: str
    result: dict[str, str] | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == ResultStatus.SUCCESS


class ExchangeClient(Protocol):
    """Protocol for exchange connectivity."""

    name: str

    async def get_balance(self) -> BalanceResult:
        """Fetch all account balances.

        Returns:
            BalanceResult with asset -> decimal string balances on success
        """
        ...

    async def place_market_order(self, volume: str, pair: str | None = None) -> OrderResult:
        """Place a market sell order.

        Args:
            volume: Order volume as a decimal string, transmitted verbatim
            pair: Trading pair (defaults to the client's configured pair)

        Returns:
            OrderResult describing the exchange's response
        """
        ...

    async def close(self) -> None:
        """Close the HTTP session."""
        ...
