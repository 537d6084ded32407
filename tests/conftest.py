"""Shared test fixtures for all test modules."""

import pytest

try:
    import httpx
except ImportError:
    httpx = None

from samm_exporter.core.models import MeasurementFamily
from samm_exporter.core.registry import MeasurementRegistry


class FakeClock:
    """Manually advanced monotonic clock for sampler tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def registry() -> MeasurementRegistry:
    """Provide an empty registry."""
    return MeasurementRegistry()


@pytest.fixture
def gauge_family(registry: MeasurementRegistry) -> MeasurementFamily:
    """Register the sampler's gauge family on the registry fixture."""
    return registry.register("samm_gauge", "This is a test metric for Gauge", ["instance"])


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a clock that only moves when advanced."""
    return FakeClock()


# === ASGI Test Fixtures ===


@pytest.fixture
def basic_asgi_app():
    """Basic ASGI app fixture that returns 200 OK."""
    from samm_exporter.adapters.frameworks.asgi import Receive, Scope, Send

    async def app(scope: Scope, receive: Receive, send: Send) -> None:
        """Simple ASGI app that returns 200 OK."""
        await send({"type": "http.response.start", "status": 200, "headers": []})
        await send({"type": "http.response.body", "body": b"OK"})

    return app


@pytest.fixture
def asgi_scope():
    """Factory fixture for creating ASGI scope dicts."""
    from samm_exporter.adapters.frameworks.asgi import Scope

    def _scope(
        method: str = "GET",
        path: str = "/metrics",
        headers: list[tuple[bytes, bytes]] | None = None,
        client: tuple[str, int] | None = ("127.0.0.1", 54321),
        query_string: bytes = b"",
    ) -> Scope:
        return {
            "type": "http",
            "method": method,
            "path": path,
            "query_string": query_string,
            "headers": headers or [],
            "client": client,
        }

    return _scope


@pytest.fixture
def asgi_receive():
    """Receive callable returning an empty request body."""

    async def receive() -> dict[str, object]:
        return {"type": "http.request", "body": b"", "more_body": False}

    return receive


@pytest.fixture
def asgi_send_capture():
    """Fixture that returns a send callable and a responses list for capture."""

    responses: list[dict[str, object]] = []

    async def send(message: dict[str, object]) -> None:
        """Capture ASGI messages."""
        responses.append(message)

    return send, responses


@pytest.fixture
def asgi_test_client():
    """Factory fixture that creates an httpx.AsyncClient for ASGI testing.

    Usage:
        async def test_something(asgi_test_client, registry):
            async with asgi_test_client(create_asgi_app(registry)) as client:
                response = await client.get("/metrics")
    """
    if httpx is None:
        pytest.skip("httpx not installed")

    def _get_client(app):
        """Return an AsyncClient context manager for the given app."""
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        )

    return _get_client
