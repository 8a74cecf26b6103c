from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Iterable

MASK = "***"


class SecretMaskFilter(logging.Filter):
    """Replace configured credential values in log output with ``***``."""

    def __init__(self, secrets: Iterable[str] = ()):
        super().__init__()
        self.secrets: set[str] = set()
        self.update(secrets)

    def update(self, secrets: Iterable[str]) -> None:
        self.secrets.update(s for s in secrets if s)

    def _mask(self, text: str) -> str:
        # longest first so a secret containing another is masked whole
        for secret in sorted(self.secrets, key=len, reverse=True):
            text = text.replace(secret, MASK)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.secrets:
            return True
        message = record.getMessage()
        masked = self._mask(message)
        if masked != message:
            record.msg = masked
            record.args = None
        if record.exc_info and not record.exc_text:
            record.exc_text = logging.Formatter().formatException(record.exc_info)
        if record.exc_text:
            record.exc_text = self._mask(record.exc_text)
        return True


_secret_filter = SecretMaskFilter()


def mask_secrets(secrets: Iterable[str]) -> None:
    """Register credential values that must never reach a log handler."""
    _secret_filter.update(secrets)


def configure_logging(log_dir: Path | None = None) -> None:
    """Configure console and rotating file handlers with credential masking."""
    level_name = os.environ.get("LIQUIDATOR_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            log_dir / "liquidator.log",
            maxBytes=10*1024*1024,
            backupCount=5
        ))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(_secret_filter)
        root_logger.addHandler(handler)
