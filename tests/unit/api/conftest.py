"""Fixtures for API unit tests: in-memory stores, mock notifier, AsyncClient, identity headers."""

import pytest
from httpx import ASGITransport, AsyncClient

from freight_amendments.main import app


@pytest.fixture
def app_with_overrides(repository, shipments, audit_repository, unit_of_work, notifier, fake_redis):
    """App with persistence, cache and broker overridden for testing."""
    from freight_amendments.api import dependencies

    app.dependency_overrides[dependencies.get_amendment_repository] = lambda: repository
    app.dependency_overrides[dependencies.get_shipment_directory] = lambda: shipments
    app.dependency_overrides[dependencies.get_audit_repository] = lambda: audit_repository
    app.dependency_overrides[dependencies.get_unit_of_work] = lambda: unit_of_work
    app.dependency_overrides[dependencies.get_notifier] = lambda: notifier
    app.dependency_overrides[dependencies.get_redis_client] = lambda: fake_redis
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(app_with_overrides):
    """Async HTTP client for testing; uses overridden app."""
    transport = ASGITransport(app=app_with_overrides)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def client_headers():
    return {"X-User-ID": "client-1", "X-User-Role": "client_admin"}


@pytest.fixture
def admin_headers():
    return {"X-User-ID": "admin-1", "X-User-Role": "amendment_reviewer"}


@pytest.fixture
def vendor_headers():
    return {"X-User-ID": "vendor-1", "X-User-Role": "vendor_admin"}


@pytest.fixture
def other_vendor_headers():
    return {"X-User-ID": "vendor-2", "X-User-Role": "vendor_admin"}
