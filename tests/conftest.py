"""Shared fixtures: isolated settings, app instances and stubbed provider HTTP."""

import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from config import Settings
from routes.deps import get_http_client


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_settings(tmp_path):
    """Build Settings from an explicit environment, never the real one."""

    def _make(**env) -> Settings:
        return Settings(config_path=tmp_path / "missing.yaml", environ=env)

    return _make


@pytest.fixture
def make_client():
    """Create a TestClient whose provider calls go to `handler` instead of the network."""

    def _make(settings: Settings, handler=None) -> TestClient:
        app = create_app(settings)
        if handler is not None:

            async def _client():
                async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
                    yield client

            app.dependency_overrides[get_http_client] = _client
        return TestClient(app)

    return _make
