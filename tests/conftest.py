"""
Pytest configuration for the Session Facade test suite.

This configuration sets up:
- Test markers for categorization
- fakeredis-backed Redis fixtures (no real Redis instance required)
- An in-memory FakeSessionBackend following the FakeRepository pattern
- Starlette request/response builders for backend tests
- A FastAPI app/client wired to fakeredis via dependency_overrides
"""

import sys
from pathlib import Path
from typing import Any, Callable, Optional

import fakeredis
import fakeredis.aioredis
import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.requests import Request
from starlette.responses import Response

# Add project root to Python path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from session_facade.models.domain import CookieScope  # noqa: E402
from session_facade.sessions.backend import SessionBackend  # noqa: E402


# =============================================================================
# Test Markers
# =============================================================================


def pytest_configure(config):
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Tests spanning the HTTP layer and store")


# =============================================================================
# Settings Fixture
# =============================================================================


@pytest.fixture
def test_settings():
    """
    Create test settings with safe defaults.

    Lock timeouts are short so contention tests finish quickly.
    """
    from session_facade.core.config import Settings

    return Settings(
        service_name="session-facade-test",
        environment="development",
        redis_url="redis://localhost:6379",
        session_ttl_seconds=1440,
        session_key_prefix="sessions:",
        cookie_name="SESSIONID",
        lock_timeout_seconds=0.2,
        lock_ttl_seconds=30,
        lock_poll_interval_seconds=0.01,
    )


# =============================================================================
# FakeRedis Fixtures
# =============================================================================


@pytest.fixture
def fake_server():
    """Shared in-memory Redis server; clients created from it see the same data."""
    return fakeredis.FakeServer()


@pytest_asyncio.fixture
async def fake_redis(fake_server):
    """Provide an async fake Redis client with decode_responses=True."""
    redis = fakeredis.aioredis.FakeRedis(server=fake_server, decode_responses=True)
    yield redis
    await redis.aclose()


@pytest.fixture
def sync_redis(fake_server):
    """Synchronous view of the same fake server, for assertions from sync tests."""
    return fakeredis.FakeRedis(server=fake_server, decode_responses=True)


# =============================================================================
# Starlette Request / Response Builders
# =============================================================================


@pytest.fixture
def make_request() -> Callable[..., Request]:
    """
    Factory for Starlette requests with a given host and cookies.

    Example:
        >>> request = make_request(host="www.example.com", cookies={"SESSIONID": "abc"})
    """

    def _make(host: str = "app.example.com", cookies: Optional[dict[str, str]] = None) -> Request:
        headers = [(b"host", host.encode("latin-1"))]
        if cookies:
            cookie_header = "; ".join(f"{name}={value}" for name, value in cookies.items())
            headers.append((b"cookie", cookie_header.encode("latin-1")))
        scope = {
            "type": "http",
            "method": "GET",
            "scheme": "http",
            "path": "/",
            "root_path": "",
            "query_string": b"",
            "headers": headers,
            "server": (host, 80),
        }
        return Request(scope)

    return _make


@pytest.fixture
def response() -> Response:
    """An empty response collecting Set-Cookie headers."""
    return Response()


# =============================================================================
# FakeSessionBackend (FakeRepository pattern)
# =============================================================================


class FakeSessionBackend(SessionBackend):
    """
    In-memory SessionBackend recording every call it receives.

    ``stored`` plays the part of the persisted record; ``values`` is the
    working copy between start_or_resume() and write/destroy.
    """

    def __init__(self, host: str = "app.example.com", request_cookie: bool = True) -> None:
        self.host = host
        self.request_cookie = request_cookie
        self.stored: dict[str, Any] = {}
        self.calls: list[str] = []
        self.expired_cookies: list[tuple[str, str, Optional[str]]] = []
        self.scope = CookieScope()
        self.started_scopes: list[CookieScope] = []
        self._working: Optional[dict[str, Any]] = None

    async def start_or_resume(self) -> None:
        self.calls.append("start_or_resume")
        self.started_scopes.append(self.scope)
        self._working = dict(self.stored)

    async def write_and_release(self) -> None:
        self.calls.append("write_and_release")
        self.stored = dict(self._working or {})
        self._working = None

    async def destroy_session(self) -> None:
        self.calls.append("destroy_session")
        self.stored = {}
        self._working = None

    @property
    def values(self) -> dict[str, Any]:
        if self._working is None:
            raise AssertionError("values accessed while the fake session is not started")
        return self._working

    @property
    def cookie_name(self) -> str:
        return "SESSIONID"

    def set_cookie_scope(self, lifetime_seconds: int, path: str, domain: Optional[str]) -> None:
        self.calls.append("set_cookie_scope")
        self.scope = CookieScope(lifetime_seconds=lifetime_seconds, path=path, domain=domain)

    def get_cookie_scope(self) -> CookieScope:
        return self.scope

    def has_request_cookie(self) -> bool:
        return self.request_cookie

    def expire_cookie(self, name: str, path: str, domain: Optional[str]) -> None:
        self.calls.append("expire_cookie")
        self.expired_cookies.append((name, path, domain))

    def request_host(self) -> str:
        return self.host


@pytest.fixture
def fake_backend() -> FakeSessionBackend:
    """Provide an in-memory session backend."""
    return FakeSessionBackend()


@pytest.fixture
def make_fake_backend() -> Callable[..., FakeSessionBackend]:
    """Factory for in-memory backends with a custom host or cookie presence."""
    return FakeSessionBackend


# =============================================================================
# FastAPI App / Client Fixtures
# =============================================================================


@pytest.fixture
def session_app(fake_server, test_settings) -> FastAPI:
    """
    Create an app with the session and health routers, backed by fakeredis.

    A new FakeRedis client is handed out per request: TestClient may run each
    request on its own event loop, while the shared FakeServer keeps the data.
    """
    from session_facade.api.deps import get_redis, get_settings
    from session_facade.api.errors import register_exception_handlers
    from session_facade.api.middleware.logging import RequestLoggingMiddleware
    from session_facade.api.routes.health import router as health_router
    from session_facade.api.routes.session import router as session_router

    app = FastAPI(title="Session Facade Test App")
    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)
    app.include_router(health_router)
    app.include_router(session_router)

    app.dependency_overrides[get_redis] = lambda: fakeredis.aioredis.FakeRedis(
        server=fake_server, decode_responses=True
    )
    app.dependency_overrides[get_settings] = lambda: test_settings
    return app


@pytest.fixture
def client(session_app) -> TestClient:
    """Synchronous test client for the session app."""
    return TestClient(session_app)
