"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - sse_body: Builds an event-stream body from delta strings
    - chunked_response: Builds an httpx.Response that streams given chunks
    - recorder: Collects ChatSession callback invocations
    - relay_config: RelayConfig pointing at a fake gateway
    - async_client: HTTPX client for relay API testing
"""

import json
from collections.abc import AsyncGenerator, AsyncIterator, Callable

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from cybermate.agent.config import RelayConfig
from cybermate.api.app import create_app
from cybermate.models.schemas import TurnError

GATEWAY_URL = "http://gateway.test/v1"


def delta_event(content: str) -> str:
    """Format one chat-completion chunk as an SSE event."""
    envelope = {"choices": [{"index": 0, "delta": {"content": content}}]}
    return f"data: {json.dumps(envelope)}\n\n"


class ChunkedStream(httpx.AsyncByteStream):
    """Async byte stream yielding pre-split chunks, one per read."""

    def __init__(self, chunks: list[bytes]) -> None:
        self._chunks = chunks

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for chunk in self._chunks:
            yield chunk


class CallbackRecorder:
    """Records ChatSession callbacks in invocation order."""

    def __init__(self) -> None:
        self.deltas: list[str] = []
        self.done_calls = 0
        self.errors: list[TurnError] = []

    def on_delta(self, content: str) -> None:
        self.deltas.append(content)

    def on_done(self) -> None:
        self.done_calls += 1

    def on_error(self, error: TurnError) -> None:
        self.errors.append(error)

    @property
    def callbacks(self) -> dict[str, Callable]:
        return {
            "on_delta": self.on_delta,
            "on_done": self.on_done,
            "on_error": self.on_error,
        }


@pytest.fixture
def sse_body() -> Callable[..., bytes]:
    """Return a builder for event-stream bodies.

    Returns:
        Function taking delta strings and ``done`` flag, returning bytes.
    """

    def build(*deltas: str, done: bool = True) -> bytes:
        body = "".join(delta_event(delta) for delta in deltas)
        if done:
            body += "data: [DONE]\n\n"
        return body.encode()

    return build


@pytest.fixture
def chunked_response() -> Callable[..., httpx.Response]:
    """Return a builder for streamed 200 responses."""

    def build(*chunks: bytes, status_code: int = 200) -> httpx.Response:
        return httpx.Response(
            status_code,
            headers={"content-type": "text/event-stream"},
            stream=ChunkedStream(list(chunks)),
        )

    return build


@pytest.fixture
def recorder() -> CallbackRecorder:
    return CallbackRecorder()


@pytest.fixture
def relay_config() -> RelayConfig:
    """Relay configuration aimed at a fake gateway.

    Returns:
        RelayConfig with a test key and deterministic model.
    """
    return RelayConfig(
        api_key="test-gateway-key",
        base_url=GATEWAY_URL,
        model_name="test/model",
        timeout=5.0,
    )


@pytest.fixture
async def async_client(relay_config: RelayConfig) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for relay testing with an unreachable gateway.

    Yields:
        Configured AsyncClient for making test requests.
    """

    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("gateway unreachable", request=request)

    upstream = httpx.AsyncClient(transport=httpx.MockTransport(refuse))
    app = create_app(config=relay_config, http_client=upstream)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    await upstream.aclose()
