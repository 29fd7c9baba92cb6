# tests/test_data_access.py

"""
Tests for the DataGateway: filtered reads, authorized writes.
"""

import pytest

from core.errors import PermissionDenied, RecordNotFound


def test_select_returns_only_visible_rows(owner, other_owner, portfolio, gateway_for):
    portfolio(owner.id)
    portfolio(other_owner.id, suffix="b")

    rows = gateway_for(owner).select("properties")
    assert len(rows) == 1
    assert rows[0]["owner_id"] == owner.id


def test_get_hides_other_owners_row(owner, other_owner, portfolio, gateway_for):
    theirs = portfolio(other_owner.id)
    gateway = gateway_for(owner)

    assert gateway.get("units", theirs["unit"]["id"]) is None
    with pytest.raises(RecordNotFound):
        gateway.get_or_404("units", theirs["unit"]["id"])


def test_denied_write_changes_nothing(owner, other_owner, portfolio, gateway_for, backend):
    theirs = portfolio(other_owner.id)
    gateway = gateway_for(owner)

    with pytest.raises(PermissionDenied):
        gateway.update("properties", theirs["property"]["id"], {"name": "Hijacked"})
    with pytest.raises(PermissionDenied):
        gateway.delete("properties", theirs["property"]["id"])
    with pytest.raises(PermissionDenied):
        gateway.insert("units", {"property_id": theirs["property"]["id"], "unit_number": "X"})

    assert backend.get("properties", theirs["property"]["id"])["name"] == "Hostel"
    assert len(backend.select("units")) == 1


def test_missing_row_write(owner, admin, gateway_for):
    with pytest.raises(PermissionDenied):
        gateway_for(owner).update("properties", "nope", {"name": "x"})
    with pytest.raises(RecordNotFound):
        gateway_for(admin).update("properties", "nope", {"name": "x"})


def test_delete_property_cascades(owner, portfolio, gateway_for, backend):
    chain = portfolio(owner.id)
    gateway_for(owner).delete("properties", chain["property"]["id"])

    for table in ("units", "leases", "payments", "maintenance_requests"):
        assert backend.select(table) == [], table
    # tenants hang off the owner, not the property
    assert len(backend.select("tenants")) == 1


def test_count_and_limit(owner, portfolio, gateway_for):
    portfolio(owner.id)
    portfolio(owner.id, suffix="b")
    gateway = gateway_for(owner)

    assert gateway.count("units") == 2
    assert len(gateway.select("units", limit=1)) == 1
    assert gateway.count("payments", {"status": "paid"}) == 0


def test_admin_cannot_create_orphan_rows(admin, owner, portfolio, gateway_for, backend):
    mine = portfolio(owner.id)
    gateway = gateway_for(admin)

    with pytest.raises(PermissionDenied):
        gateway.insert("units", {"property_id": "does-not-exist", "unit_number": "X"})
    with pytest.raises(PermissionDenied):
        gateway.update("units", mine["unit"]["id"], {"property_id": None})

    assert len(backend.select("units")) == 1
    assert backend.get("units", mine["unit"]["id"])["property_id"] == mine["property"]["id"]


def test_admin_removes_existing_orphan(admin, gateway_for, backend):
    orphan = backend.insert("units", {"property_id": "gone", "unit_number": "9"})
    gateway_for(admin).delete("units", orphan["id"])
    assert backend.select("units") == []
