# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures for SUDIA tests."""

import os
from typing import Generator

import httpx
import pytest

# Set test environment variables before importing app
os.environ.setdefault("TESTING", "true")
os.environ.setdefault("API_WARM_CACHE", "false")
os.environ.setdefault("BACKEND_USE_PROXIES", "false")

from sudia.config import BackendSettings, GeocodingSettings, RoutingSettings
from tests.sample_data import backend_routes

BACKEND_URL = "http://backend.test"
ROUTER_URL = "http://router.test"
GEOCODER_URL = "http://geocoder.test"


class FakeBackend:
    """In-memory stand-in for the heritage REST backend.

    Maps request paths to JSON payloads; unknown paths answer 404. An
    ``httpx.Response`` can be registered to force a status code.
    """

    def __init__(self, routes: dict):
        self.routes = routes
        self.calls: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        # Raw path keeps percent-encoding so quoted ids stay distinguishable
        path = request.url.raw_path.decode("ascii").split("?")[0]
        self.calls.append(path)
        payload = self.routes.get(path)
        if payload is None:
            return httpx.Response(404, json={"detail": "Not Found"})
        if isinstance(payload, httpx.Response):
            return payload
        return httpx.Response(200, json=payload)

    def count(self, path: str) -> int:
        return self.calls.count(path)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio for async tests."""
    return "asyncio"


# =============================================================================
# Connectors and services
# =============================================================================

@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend(backend_routes())


@pytest.fixture
def backend_settings() -> BackendSettings:
    return BackendSettings(base_url=BACKEND_URL, timeout=1.0, use_proxies=False)


@pytest.fixture
def connector(fake_backend, backend_settings):
    from sudia.connectors import BackendConnector

    return BackendConnector(config=backend_settings, http_client=fake_backend.client())


@pytest.fixture
def service(connector):
    from sudia.services import MapDataService

    return MapDataService(connector=connector)


@pytest.fixture
def routing_settings() -> RoutingSettings:
    return RoutingSettings(base_url=ROUTER_URL, timeout=1.0)


@pytest.fixture
def geocoding_settings() -> GeocodingSettings:
    return GeocodingSettings(base_url=GEOCODER_URL, timeout=1.0)


@pytest.fixture
def test_client() -> Generator:
    """Create a test client for the FastAPI application."""
    from fastapi.testclient import TestClient
    from api.main import app

    with TestClient(app) as client:
        yield client


@pytest.fixture
def api_client(service) -> Generator:
    """Test client whose service reads from the fake backend.

    Routing and geocoding keep the app's own connectors; tests that need
    them override ``get_router``/``get_geocoder`` themselves.
    """
    from fastapi.testclient import TestClient
    from api.dependencies import get_service
    from api.main import app

    app.dependency_overrides[get_service] = lambda: service
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
