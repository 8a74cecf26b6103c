"""Pytest configuration and fixtures."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from liquidator.exchanges.kraken import KrakenClient
from liquidator.exchanges.signing import NonceSource

# Example key from the Kraken REST authentication guide.
KRAKEN_DOC_SECRET = (
    "kQH5HW/8p1uGOVjbgWA7FunAmGO8lsSUXNsu3eow76sz84Q18fWxnyRzBHCd3pd5nE9qa99HAZtuZuj6F1huXg=="
)
FIXED_NONCE = 1700000000000


def create_async_response(status=200, body=None):
    """Create a mock async response."""
    if body is None:
        body = b""
    elif isinstance(body, str):
        body = body.encode()
    elif not isinstance(body, bytes):
        body = json.dumps(body).encode()
    resp = AsyncMock()
    resp.status = status
    resp.read = AsyncMock(return_value=body)
    resp.__aenter__ = AsyncMock(return_value=resp)
    resp.__aexit__ = AsyncMock(return_value=None)
    return resp


def attach_session(client, *responses):
    """Replace the client's HTTP session with a mock returning ``responses`` in order."""
    mock_session = MagicMock()
    mock_session.post = MagicMock(side_effect=list(responses))
    client._ensure_session = AsyncMock(return_value=mock_session)
    return mock_session


@pytest.fixture
def api_key():
    """Test API key."""
    return "test_api_key_123456"


@pytest.fixture
def api_secret():
    """Test API secret (base64)."""
    return KRAKEN_DOC_SECRET


@pytest.fixture
def fixed_nonce_source():
    """Nonce source whose clock never moves."""
    return NonceSource(clock=lambda: FIXED_NONCE)


@pytest.fixture
def client(api_key, api_secret, fixed_nonce_source):
    """Kraken client with a deterministic nonce."""
    return KrakenClient(api_key, api_secret, nonce_source=fixed_nonce_source)


@pytest.fixture
def sample_balance_response():
    """Sample balance envelope."""
    return {"error": [], "result": {"USDC": "12.5", "ZUSD": "100.0000"}}


@pytest.fixture
def sample_order_response():
    """Sample order envelope."""
    return {"error": [], "result": {"txid": "OQCLML-BW3P3-BUCMWZ"}}
