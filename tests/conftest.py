"""
Shared test fixtures for kraken-client tests.

Provides reusable fixtures for:
- Credentials (the published Kraken signing example)
- httpx clients backed by MockTransport that record every request
- Envelope bodies
"""

import json
from typing import Any, List

import httpx
import pytest

from kraken_client.kraken_api.auth import Credential, NonceGenerator

# Secret from the Kraken REST authentication docs
DOC_SECRET_B64 = "kQH5HW/8p1uGOVjbgWA7FunAmGO8lsSUXNsu3eow76sz84Q18fWxnyRzBHCd3pd5nE9qa99HAZtuZuj6F1huXg=="


def _envelope(result: Any = None, errors: List[str] = None) -> str:
    payload = {"error": errors or []}
    if result is not None:
        payload["result"] = result
    return json.dumps(payload)


@pytest.fixture
def envelope():
    """Build a Kraken response body: envelope(result) or envelope(errors=[...])."""
    return _envelope


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------


@pytest.fixture
def credential():
    return Credential.from_base64("test-api-key", DOC_SECRET_B64)


@pytest.fixture
def nonce_generator():
    return NonceGenerator()


# ---------------------------------------------------------------------------
# Mock transport
# ---------------------------------------------------------------------------


class RecordingTransport(httpx.MockTransport):
    """MockTransport that answers every request with a fixed body and keeps the requests."""

    def __init__(self, body: str = "", status_code: int = 200):
        self.requests: List[httpx.Request] = []
        self.body = body
        self.status_code = status_code
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, text=self.body)


@pytest.fixture
def make_http_client():
    """Factory returning (httpx.AsyncClient, RecordingTransport) pairs."""
    def _make(body: str = "", status_code: int = 200):
        transport = RecordingTransport(body, status_code)
        return httpx.AsyncClient(transport=transport), transport
    return _make
