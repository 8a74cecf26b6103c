"""Kraken exchange adapter."""

from __future__ import annotations

import logging
from urllib.parse import urlencode

from ..exceptions import EnvelopeError
from .base import DEFAULT_BASE_URL, BaseExchangeClient, ProxyConfig
from .protocol import ApiEnvelope, BalanceResult, OrderResult, ResultStatus
from .signing import NonceSource, sign

logger = logging.getLogger(__name__)

BALANCE_PATH = "/0/private/Balance"
ADD_ORDER_PATH = "/0/private/AddOrder"
DEFAULT_PAIR = "USDCUSD"


def _is_success(status: int) -> bool:
    return 200 <= status < 300


def _decode_body(status: int, raw: bytes) -> str:
    """Decode a response body.

    Error pages from proxies often carry no charset, so non-2xx bodies are
    decoded leniently. A 2xx body that is not UTF-8 cannot be an envelope.
    """
    if not _is_success(status):
        return raw.decode("utf-8", errors="replace")
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise EnvelopeError(
            "Response body is not valid UTF-8", raw.decode("utf-8", errors="replace")
        ) from exc


class KrakenClient(BaseExchangeClient):
    """Kraken private REST client."""

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        *,
        pair: str = DEFAULT_PAIR,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = None,
        proxy: ProxyConfig | None = None,
        nonce_source: NonceSource | None = None,
    ):
        super().__init__(
            "kraken",
            api_key,
            api_secret,
            base_url=base_url,
            timeout=timeout,
            proxy=proxy,
        )
        self.pair = pair
        self.nonce_source = nonce_source or NonceSource()

    def _get_headers(self, signature: str) -> dict[str, str]:
        return {
            "API-Key": self.api_key,
            "API-Sign": signature,
            "Content-Type": "application/x-www-form-urlencoded; charset=utf-8",
            "User-Agent": "liquidator/1.0",
        }

    async def _private_post(self, path: str, fields: list[tuple[str, str]]) -> tuple[int, str, str]:
        """Sign and send a private request.

        The body is built once and the same string is both signed and sent,
        so the field order on the wire always matches the signature.

        Returns:
            (HTTP status, response body, transmitted post data)
        """
        nonce = self.nonce_source.next()
        post_data = urlencode([("nonce", str(nonce)), *fields])
        signature = sign(self.api_secret, nonce, path, post_data)

        logger.debug("API Sign: %s", signature)
        logger.debug("Post Data: %s", post_data)

        session = await self._ensure_session()
        url = f"{self.get_base_url()}{path}"

        async with session.post(
            url,
            data=post_data,
            headers=self._get_headers(signature),
            proxy=self.proxy.proxy_url,
        ) as resp:
            status = resp.status
            raw = await resp.read()

        logger.info("Response status: %s", status)
        body = _decode_body(status, raw)
        logger.debug("Response body: %s", body)
        return status, body, post_data

    async def get_balance(self) -> BalanceResult:
        """Fetch all account balances."""
        status, body, _ = await self._private_post(BALANCE_PATH, [])

        if not _is_success(status):
            logger.warning("Balance request failed with status code: %s", status)
            return BalanceResult(ResultStatus.HTTP_ERROR, status)

        envelope = ApiEnvelope.parse(body)
        if envelope.error:
            logger.error("API returned errors: %s", envelope.error)
            return BalanceResult(ResultStatus.API_ERROR, status, errors=envelope.error)

        if envelope.result is None:
            logger.info("No balance data found")
            return BalanceResult(ResultStatus.NO_RESULT, status)

        logger.info("Balance fetched successfully")
        for currency, amount in envelope.result.items():
            logger.info("%s: %s", currency, amount)
        return BalanceResult(ResultStatus.SUCCESS, status, balances=envelope.result)

    async def place_market_order(self, volume: str, pair: str | None = None) -> OrderResult:
        """Place a market sell order for ``volume`` units of the pair's base asset."""
        fields = [
            ("ordertype", "market"),
            ("type", "sell"),
            ("volume", volume),
            ("pair", pair or self.pair),
        ]
        status, body, post_data = await self._private_post(ADD_ORDER_PATH, fields)

        if not _is_success(status):
            logger.warning("Order request failed with status code: %s", status)
            return OrderResult(ResultStatus.HTTP_ERROR, status, post_data)

        envelope = ApiEnvelope.parse(body)
        if envelope.error:
            logger.error("API returned errors: %s", envelope.error)
            return OrderResult(ResultStatus.API_ERROR, status, post_data, errors=envelope.error)

        logger.info("Market order placed successfully")
        return OrderResult(ResultStatus.SUCCESS, status, post_data, result=envelope.result)
