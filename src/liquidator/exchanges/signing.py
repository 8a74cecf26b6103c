"""Request signing for the Kraken private API."""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import time
from typing import Callable

from ..exceptions import InvalidCredentialsError


def decode_secret(secret_b64: str) -> bytes:
    """Decode a base64 API secret, rejecting anything outside the alphabet."""
    try:
        return base64.b64decode(secret_b64, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidCredentialsError("API secret is not valid base64") from exc


def sign(secret_b64: str, nonce: int | str, endpoint_path: str, post_body: str) -> str:
    """Compute the ``API-Sign`` header value for a private request.

    The signature is ``base64(HMAC-SHA512(secret, path + SHA256(nonce + body)))``.

    Args:
        secret_b64: Base64-encoded API secret
        nonce: Nonce included in ``post_body``
        endpoint_path: URI path, e.g. ``/0/private/Balance``
        post_body: URL-encoded form body exactly as transmitted

    Returns:
        Base64-encoded signature

    Raises:
        InvalidCredentialsError: If the secret cannot be decoded
    """
    key = decode_secret(secret_b64)
    digest = hashlib.sha256(f"{nonce}{post_body}".encode()).digest()

    mac = hmac.new(key, digestmod=hashlib.sha512)
    mac.update(endpoint_path.encode())
    mac.update(digest)
    return base64.b64encode(mac.digest()).decode()


def _now_ms() -> int:
    return int(time.time() * 1000)


class NonceSource:
    """Millisecond nonces that never repeat or go backwards within a process."""

    def __init__(self, clock: Callable[[], int] = _now_ms):
        self._clock = clock
        self._last = 0

    def next(self) -> int:
        nonce = max(self._clock(), self._last + 1)
        self._last = nonce
        return nonce
