"""Typer-based CLI for manual liquidation operations."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from .di import AppContainer
    from .runtime import LiquidationReport


# Import with local function to avoid circular imports
def _load_settings(config_path: Optional[Path] = None):
    from .config import load_settings
    return load_settings(config_path)

def _build_container(settings):
    from .di import build_container
    return build_container(settings)

def _mask_secrets(settings):
    from .logging import mask_secrets
    mask_secrets(settings.secret_values())

app = typer.Typer(help="Kraken balance liquidation CLI")
console = Console()
logger = logging.getLogger(__name__)


def run_cli(argv: list[str] | None = None) -> None:
    """Run CLI with optional argv parameter."""
    app(argv)


def init_components(config_path: Optional[Path] = None) -> "AppContainer":
    """Load settings and build the container with its exchange client."""
    settings = _load_settings(config_path)
    _mask_secrets(settings)
    return _build_container(settings)


@app.command()
def balance(
    config: Optional[Path] = typer.Option(None, help="Path to config file"),
) -> None:
    """Show all account balances."""

    try:
        container = init_components(config)
        ok = asyncio.run(_balance_async(container))
    except Exception as e:
        logger.error("Failed to fetch balance: %s", e, exc_info=True)
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not ok:
        raise typer.Exit(1)


async def _balance_async(container: "AppContainer") -> bool:
    try:
        result = await container.exchange_client.get_balance()
    finally:
        await container.close()

    if result.balances is None:
        if result.errors:
            console.print(f"[red]API returned errors:[/red] {', '.join(result.errors)}")
        else:
            console.print(f"[yellow]No balance available ({result.status.value}, HTTP {result.http_status})[/yellow]")
        return False

    if not result.balances:
        console.print("[yellow]No balances found[/yellow]")
        return True

    target = container.settings.liquidation.asset
    table = Table(title="Balances")
    table.add_column("Asset", style="cyan")
    table.add_column("Balance", style="green", justify="right")

    for asset, amount in sorted(result.balances.items()):
        label = f"[bold]{asset}[/bold]" if asset == target else asset
        table.add_row(label, amount)

    console.print(table)
    return True


@app.command()
def sell(
    volume: str = typer.Argument(..., help="Volume to sell, as a decimal string"),
    pair: Optional[str] = typer.Option(None, help="Trading pair (default: configured pair)"),
    config: Optional[Path] = typer.Option(None, help="Path to config file"),
) -> None:
    """Place a single market sell order."""
    from .runtime import parse_positive_decimal

    if parse_positive_decimal(volume) is None:
        console.print(f"[red]Error:[/red] Volume must be a positive decimal, got {volume!r}")
        raise typer.Exit(2)

    try:
        container = init_components(config)
        ok = asyncio.run(_sell_async(container, volume, pair))
    except Exception as e:
        logger.error("Failed to place order: %s", e, exc_info=True)
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not ok:
        raise typer.Exit(1)


async def _sell_async(container: "AppContainer", volume: str, pair: Optional[str]) -> bool:
    try:
        result = await container.exchange_client.place_market_order(volume, pair)
    finally:
        await container.close()

    if result.ok:
        console.print(Panel.fit(
            f"[green]✓ Market order placed[/green]\n"
            f"Post Data: {result.post_data}",
            title="Sell"
        ))
        return True

    detail = ", ".join(result.errors) if result.errors else f"HTTP {result.http_status}"
    console.print(f"[red]✗ Order failed:[/red] {detail}")
    return False


@app.command()
def liquidate(
    config: Optional[Path] = typer.Option(None, help="Path to config file"),
) -> None:
    """Sell the full balance of the configured asset, if any."""
    from .runtime import run_and_close

    try:
        container = init_components(config)
        report = asyncio.run(run_and_close(container))
    except Exception as e:
        logger.error("Liquidation failed: %s", e, exc_info=True)
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    _print_report(report)


def _print_report(report: "LiquidationReport") -> None:
    style = {
        "sold": "green",
        "order_rejected": "red",
        "balance_unavailable": "red",
    }.get(report.outcome.value, "yellow")

    lines = [
        f"Asset: {report.asset}",
        f"Balance: {report.balance or 'N/A'}",
        f"Outcome: [{style}]{report.outcome.value.upper()}[/{style}]",
    ]
    if report.order_result is not None:
        lines.append(f"Post Data: {report.order_result.post_data}")
        if report.order_result.errors:
            lines.append(f"Errors: {', '.join(report.order_result.errors)}")
    elif report.balance_result is not None and report.balance_result.errors:
        lines.append(f"Errors: {', '.join(report.balance_result.errors)}")

    console.print(Panel.fit("\n".join(lines), title="Liquidation"))
