"""Error types raised by the liquidator."""

from __future__ import annotations


class LiquidatorError(Exception):
    """Base class for liquidator errors."""


class InvalidCredentialsError(LiquidatorError):
    """Raised when API credentials are missing or the secret is not valid base64."""


class EnvelopeError(LiquidatorError):
    """Raised when a response body does not match the API envelope."""

    def __init__(self, message: str, body: str | None = None):
        super().__init__(message)
        self.body = body
