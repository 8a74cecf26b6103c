"""One-shot liquidation: fetch the balance, then sell the target asset if any."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum

import aiohttp

from .di import AppContainer
from .exceptions import EnvelopeError
from .exchanges.protocol import BalanceResult, OrderResult

logger = logging.getLogger(__name__)

# Failures that end a single call without aborting the run.
CALL_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, EnvelopeError)


class LiquidationOutcome(Enum):
    """How a liquidation run ended."""

    SOLD = "sold"
    ORDER_REJECTED = "order_rejected"
    NOTHING_TO_SELL = "nothing_to_sell"
    ASSET_MISSING = "asset_missing"
    BALANCE_UNAVAILABLE = "balance_unavailable"


@dataclass
class LiquidationReport:
    outcome: LiquidationOutcome
    asset: str
    balance: str | None = None
    balance_result: BalanceResult | None = None
    order_result: OrderResult | None = None

    @property
    def order_placed(self) -> bool:
        return self.order_result is not None


def parse_positive_decimal(raw: str) -> Decimal | None:
    """Return ``raw`` as a Decimal if it is a finite number greater than zero."""
    try:
        value = Decimal(raw)
    except InvalidOperation:
        logger.error("Balance %r is not a decimal number", raw)
        return None
    if not value.is_finite() or value <= 0:
        return None
    return value


async def run(container: AppContainer) -> LiquidationReport:
    logger.info("runtime starting")
    logger.debug("settings=%s", container.settings.redacted())

    asset = container.settings.liquidation.asset
    client = container.exchange_client

    balance_task = asyncio.create_task(client.get_balance())
    try:
        balance_result = await balance_task
    except CALL_ERRORS as exc:
        logger.error("Error fetching balance: %s", exc)
        return LiquidationReport(LiquidationOutcome.BALANCE_UNAVAILABLE, asset)

    if balance_result.balances is None:
        logger.error("Error fetching balance or no balance available")
        return LiquidationReport(
            LiquidationOutcome.BALANCE_UNAVAILABLE, asset, balance_result=balance_result
        )

    balance = balance_result.get(asset)
    if balance is None:
        logger.info("No %s balance found", asset)
        return LiquidationReport(
            LiquidationOutcome.ASSET_MISSING, asset, balance_result=balance_result
        )

    logger.info("%s Balance: %s", asset, balance)
    if parse_positive_decimal(balance) is None:
        logger.info("No %s balance to sell", asset)
        return LiquidationReport(
            LiquidationOutcome.NOTHING_TO_SELL, asset, balance, balance_result
        )

    # volume is the exact balance string reported by the exchange
    order_task = asyncio.create_task(client.place_market_order(balance))
    try:
        order_result = await order_task
    except CALL_ERRORS as exc:
        logger.error("Error placing market order: %s", exc)
        return LiquidationReport(
            LiquidationOutcome.ORDER_REJECTED, asset, balance, balance_result
        )

    outcome = LiquidationOutcome.SOLD if order_result.ok else LiquidationOutcome.ORDER_REJECTED
    logger.info("runtime stopped: %s", outcome.value)
    return LiquidationReport(outcome, asset, balance, balance_result, order_result)


async def run_and_close(container: AppContainer) -> LiquidationReport:
    """Run once and release the exchange session."""
    try:
        return await run(container)
    finally:
        await container.close()
