# ============================================================================
# TEST FIXTURES
# ============================================================================
# STATUS: Tests - Shared simulated endpoints and fixtures
# PURPOSE: In-process HTTP endpoints via httpx.MockTransport
# CREATED: 18 OCT 2026
# ============================================================================
"""
Shared Test Fixtures

Endpoints are simulated with httpx.MockTransport, so no test touches the
network.
"""

import asyncio
from typing import List, Optional

import httpx
import pytest

from httpcheck.defaults import reset_defaults


class EchoEndpoint:
    """
    Simulated /echo endpoint.

    Echoes the request body with a configurable status. When
    allowed_method is not "ALL", other methods get a 400.
    """

    def __init__(self, status: int = 200, allowed_method: str = "ALL"):
        self.status = status
        self.allowed_method = allowed_method
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.allowed_method != "ALL" and request.method != self.allowed_method:
            return httpx.Response(400, text="Bad Request")
        return httpx.Response(self.status, content=request.content)


class SlowEndpoint:
    """Endpoint that answers after `delay` seconds."""

    def __init__(self, delay: float, status: int = 200, text: str = "ok"):
        self.delay = delay
        self.status = status
        self.text = text
        self.requests: List[httpx.Request] = []
        self.stream: Optional["TrackingStream"] = None

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        await asyncio.sleep(self.delay)
        self.stream = TrackingStream([self.text.encode()])
        return httpx.Response(self.status, stream=self.stream)


class TrackingStream(httpx.AsyncByteStream):
    """Response body that records closing and can fail mid-read."""

    def __init__(self, chunks: List[bytes], fail: bool = False):
        self.chunks = chunks
        self.fail = fail
        self.closed = False

    async def __aiter__(self):
        for chunk in self.chunks:
            yield chunk
        if self.fail:
            raise httpx.ReadError("connection reset while reading body")

    async def aclose(self) -> None:
        self.closed = True


def mock_client(handler) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by `handler`."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def echo():
    return EchoEndpoint()


@pytest.fixture
def echo_client(echo):
    return mock_client(echo)


@pytest.fixture(autouse=True)
def fresh_defaults(monkeypatch):
    """Isolate tests from HTTPCHECK_* environment and cached defaults."""
    monkeypatch.delenv("HTTPCHECK_TIMEOUT_SECONDS", raising=False)
    monkeypatch.delenv("HTTPCHECK_METHOD", raising=False)
    reset_defaults()
    yield
    reset_defaults()
