# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.

Every test gets its own in-memory backend. Signing in is simulated by
overriding the identity dependencies, so the roles and approval status
the app sees always come from the tables, exactly as in production.
"""

import pytest
from fastapi.testclient import TestClient
from typing import Generator

from main import create_app
from core.backends import MemoryBackend, get_backend
from core.data_access import DataGateway
from core.ownership import OwnerResolver
from dependencies.auth import build_current_user, get_identity, get_optional_identity
from models.auth import Identity
from models.enums import AppRole
from services.registration import handle_new_user


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture(scope="function")
def app(backend):
    """Create a test FastAPI application instance bound to the test backend."""
    app = create_app()
    app.dependency_overrides[get_backend] = lambda: backend
    yield app
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login_as(app):
    """Make subsequent requests carry the given identity."""
    def _login(user_id: str, email: str = None) -> Identity:
        identity = Identity(
            id=user_id,
            email=email or f"{user_id}@example.com",
            access_token=f"token-{user_id}",
        )
        app.dependency_overrides[get_identity] = lambda: identity
        app.dependency_overrides[get_optional_identity] = lambda: identity
        return identity
    return _login


@pytest.fixture
def logout(app):
    def _logout():
        app.dependency_overrides.pop(get_identity, None)
        app.dependency_overrides[get_optional_identity] = lambda: None
    return _logout


# ------------------------------------------------------------
# Seeding helpers (service-role writes, like the signup trigger)
# ------------------------------------------------------------
@pytest.fixture
def make_owner(backend):
    def _make(user_id: str, status: str = "approved", email: str = None):
        handle_new_user(backend, user_id, email or f"{user_id}@example.com", full_name=user_id.title())
        backend.update("profiles", user_id, {"approval_status": status})
        return build_current_user(backend, Identity(id=user_id, email=email or f"{user_id}@example.com"))
    return _make


@pytest.fixture
def make_admin(backend):
    def _make(user_id: str = "admin-1"):
        handle_new_user(backend, user_id, f"{user_id}@example.com", full_name="Admin")
        backend.insert("user_roles", {"user_id": user_id, "role": AppRole.super_admin.value})
        return build_current_user(backend, Identity(id=user_id, email=f"{user_id}@example.com"))
    return _make


@pytest.fixture
def owner(make_owner):
    return make_owner("owner-1")


@pytest.fixture
def other_owner(make_owner):
    return make_owner("owner-2")


@pytest.fixture
def admin(make_admin):
    return make_admin()


@pytest.fixture
def gateway_for(backend):
    def _gateway(user) -> DataGateway:
        return DataGateway(backend, user)
    return _gateway


@pytest.fixture
def resolver(backend) -> OwnerResolver:
    return OwnerResolver(backend)


@pytest.fixture
def portfolio(backend):
    """
    Seed one property chain for an owner id:
    property → unit → tenant → lease → payment, plus a maintenance request.
    """
    def _seed(owner_id: str, suffix: str = "") -> dict:
        prop = backend.insert("properties", {
            "owner_id": owner_id, "name": f"Hostel{suffix}", "type": "hostel", "address": "1 Main St",
        })
        unit = backend.insert("units", {
            "property_id": prop["id"], "unit_number": f"10{suffix or '1'}", "rent_amount": 300.0,
            "capacity": 1, "amenities": [], "status": "occupied",
        })
        tenant = backend.insert("tenants", {"owner_id": owner_id, "full_name": f"Tenant{suffix}"})
        lease = backend.insert("leases", {
            "unit_id": unit["id"], "tenant_id": tenant["id"], "start_date": "2026-01-01",
            "end_date": "2026-12-31", "monthly_rent": 300.0, "status": "active",
        })
        payment = backend.insert("payments", {
            "lease_id": lease["id"], "amount": 300.0, "due_date": "2026-10-01", "status": "pending",
        })
        request = backend.insert("maintenance_requests", {
            "unit_id": unit["id"], "title": "Leaking tap", "priority": "high", "status": "pending",
        })
        return {
            "property": prop, "unit": unit, "tenant": tenant,
            "lease": lease, "payment": payment, "maintenance": request,
        }
    return _seed

