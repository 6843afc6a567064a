"""Error Handlers — centralized formatter behavior in production-like and development modes.

Tests cover:
    - Unmatched routes and unsupported verbs → 404 "Route not found"
    - DatabaseError → 400 "Database operation failed"; detail only in development
    - DatabaseUnavailableError → 500 with a generic message
    - Unexpected exceptions → 500; message and stack only in development
"""

import pytest
from httpx import ASGITransport, AsyncClient

from bank_api.api.dependencies import get_customer_service
from bank_api.config import Settings
from bank_api.core.errors import DatabaseError, DatabaseUnavailableError
from bank_api.main import create_app
from bank_api.services.customer_service import CustomerService


class ExplodingGateway:
    """Gateway whose every call raises the configured exception."""

    def __init__(self, exc: Exception):
        self.exc = exc

    async def list_all(self):
        raise self.exc

    async def get(self, customer_id):
        raise self.exc

    async def create(self, fields):
        raise self.exc

    async def update(self, customer_id, fields):
        raise self.exc

    async def delete(self, customer_id):
        raise self.exc


@pytest.fixture
async def make_client(settings):
    """Build a client whose customer service fails with exc, in the given environment."""
    clients = []

    async def _make(exc: Exception, environment: str = "production") -> AsyncClient:
        app = create_app(Settings(**{**settings.model_dump(), "environment": environment}))
        app.dependency_overrides[get_customer_service] = (
            lambda: CustomerService(ExplodingGateway(exc))
        )
        client = AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
        )
        clients.append(client)
        return client

    yield _make
    for client in clients:
        await client.aclose()


# ─── Route fallback ──────────────────────────────────────────────

async def test_unknown_route_returns_404(client):
    res = await client.get("/api/unknown")
    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "Route not found"}


async def test_unsupported_verb_returns_route_not_found(client):
    res = await client.patch("/api/customers/1", json={})
    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "Route not found"}


# ─── Database failures ───────────────────────────────────────────

async def test_database_error_hides_detail_in_production(make_client, sample_customer):
    client = await make_client(DatabaseError("value too long", "commit"))
    res = await client.post("/api/customers", json=sample_customer)
    assert res.status_code == 400
    assert res.json() == {"success": False, "message": "Database operation failed"}


async def test_database_error_shows_detail_in_development(make_client, sample_customer):
    client = await make_client(DatabaseError("value too long", "commit"), "development")
    res = await client.post("/api/customers", json=sample_customer)
    assert res.status_code == 400
    body = res.json()
    assert body["message"] == "Database operation failed"
    assert "value too long" in body["error"]


async def test_database_error_on_list(make_client):
    client = await make_client(DatabaseError("relation missing", "query"))
    res = await client.get("/api/customers")
    assert res.status_code == 400
    assert res.json()["message"] == "Database operation failed"


async def test_database_unavailable_is_500(make_client):
    client = await make_client(DatabaseUnavailableError("connection refused"))
    res = await client.get("/api/customers")
    assert res.status_code == 500
    assert res.json() == {"success": False, "message": "Internal Server Error"}


async def test_validation_precedes_persistence_failure(make_client):
    client = await make_client(DatabaseError("never reached", "commit"))
    res = await client.post("/api/customers", json={"firstName": "Matti"})
    assert res.status_code == 400
    assert res.json()["message"].startswith("Missing required fields")


# ─── Unexpected failures ─────────────────────────────────────────

async def test_unexpected_error_is_generic_in_production(make_client):
    client = await make_client(RuntimeError("secret internals"))
    res = await client.get("/api/customers/1")
    assert res.status_code == 500
    assert res.json() == {"success": False, "message": "Internal Server Error"}


async def test_unexpected_error_exposes_stack_in_development(make_client):
    client = await make_client(RuntimeError("secret internals"), "development")
    res = await client.get("/api/customers/1")
    assert res.status_code == 500
    body = res.json()
    assert body["success"] is False
    assert body["message"] == "secret internals"
    assert "RuntimeError" in body["stack"]
