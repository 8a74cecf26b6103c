from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from .config import load_settings
from .di import build_container
from .exceptions import InvalidCredentialsError
from .logging import configure_logging, mask_secrets
from .runtime import run_and_close

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main entry point supporting both one-shot and CLI modes.

    - `liquidator` or `liquidator run`: fetch the balance and sell it once
    - `liquidator <typer-subcommand>`: run CLI mode (e.g. `liquidator balance`)
    """
    if argv is None:
        argv = sys.argv[1:]

    if not argv:
        return _run_once_mode([])

    if argv[0] == "run":
        return _run_once_mode(argv[1:])

    return _run_cli_mode(argv)


def _run_once_mode(argv: list[str]) -> int:
    """Run a single liquidation and exit.

    Balance and order failures are logged and still exit 0; only
    configuration and credential errors produce a non-zero status.
    """
    parser = argparse.ArgumentParser(
        prog="liquidator run", description="Sell the full balance of the configured asset"
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file (default: LIQUIDATOR_CONFIG or ./config.yml)",
    )

    args = parser.parse_args(argv)
    configure_logging(Path("logs"))

    try:
        settings = load_settings(args.config)
        mask_secrets(settings.secret_values())
        container = build_container(settings)
    except (ValueError, InvalidCredentialsError) as e:
        logger.error("Configuration error: %s", e)
        return 1

    logger.info("liquidator booting")
    try:
        report = asyncio.run(run_and_close(container))
    except InvalidCredentialsError as e:
        logger.error("Invalid credentials: %s", e)
        return 1
    logger.info("liquidator exit (%s)", report.outcome.value)

    return 0


def _run_cli_mode(argv: list[str]) -> int:
    """Run in CLI mode using Typer."""
    try:
        configure_logging(Path("logs"))

        # Import CLI app here to avoid circular import
        from .cli import run_cli
        run_cli(argv)
        return 0
    except SystemExit as e:
        return e.code if e.code else 0
    except Exception as e:
        logger.error("CLI error: %s", e, exc_info=True)
        return 1
