# tests/test_resources.py

"""
Tests for the owned-resource routes (properties, units, tenants, leases,
payments, maintenance requests).
"""


def test_full_chain_through_api(client, login_as, owner):
    login_as(owner.id)

    prop = client.post("/properties", json={"name": "Campus View", "type": "hostel", "address": "2 Hill Rd"}).json()
    unit = client.post("/units", json={
        "property_id": prop["id"], "unit_number": "101", "rent_amount": 250, "amenities": ["wifi"],
    })
    assert unit.status_code == 201
    unit = unit.json()
    assert unit["unit_number"] == "101"
    assert unit["capacity"] == 1
    assert unit["status"] == "available"

    tenant = client.post("/tenants", json={"full_name": "Kofi Boateng", "phone": "0240000000"}).json()
    assert tenant["owner_id"] == owner.id

    lease = client.post("/leases", json={
        "unit_id": unit["id"], "tenant_id": tenant["id"],
        "start_date": "2026-09-01", "end_date": "2027-06-30",
        "monthly_rent": 250, "payment_schedule": "semester", "semester_amount": 1200,
    })
    assert lease.status_code == 201
    lease = lease.json()

    payment = client.post("/payments", json={"lease_id": lease["id"], "amount": 1200, "due_date": "2026-09-01"})
    assert payment.status_code == 201
    assert payment.json()["status"] == "pending"

    assert client.get("/units", params={"property_id": prop["id"]}).json()[0]["id"] == unit["id"]
    assert client.get("/leases", params={"tenant_id": tenant["id"]}).json()[0]["id"] == lease["id"]
    assert client.get("/payments", params={"status": "pending"}).json()[0]["amount"] == 1200


def test_lease_rejects_foreign_tenant(client, login_as, owner, other_owner, portfolio):
    mine = portfolio(owner.id)
    theirs = portfolio(other_owner.id, suffix="b")
    login_as(owner.id)

    response = client.post("/leases", json={
        "unit_id": mine["unit"]["id"], "tenant_id": theirs["tenant"]["id"],
        "start_date": "2026-01-01", "end_date": "2026-12-31", "monthly_rent": 100,
    })
    assert response.status_code == 403


def test_lease_dates_validated(client, login_as, owner, portfolio):
    mine = portfolio(owner.id)
    login_as(owner.id)

    response = client.post("/leases", json={
        "unit_id": mine["unit"]["id"], "tenant_id": mine["tenant"]["id"],
        "start_date": "2026-12-31", "end_date": "2026-01-01", "monthly_rent": 100,
    })
    assert response.status_code == 422

    response = client.patch(f"/leases/{mine['lease']['id']}", json={"end_date": "2025-06-01"})
    assert response.status_code == 400


def test_empty_update_is_400(client, login_as, owner, portfolio):
    mine = portfolio(owner.id)
    login_as(owner.id)
    assert client.patch(f"/properties/{mine['property']['id']}", json={}).status_code == 400


def test_maintenance_resolution_timestamp(client, login_as, owner, portfolio):
    mine = portfolio(owner.id)
    login_as(owner.id)

    created = client.post("/maintenance", json={"unit_id": mine["unit"]["id"], "title": "Broken window"}).json()
    assert created["reported_by"] == owner.id
    assert created["priority"] == "medium"

    resolved = client.patch(f"/maintenance/{created['id']}", json={"status": "resolved"}).json()
    assert resolved["resolved_at"]

    reopened = client.patch(f"/maintenance/{created['id']}", json={"status": "in_progress"}).json()
    assert reopened["resolved_at"] is None


def test_delete_tenant_cascades_to_leases(client, login_as, owner, portfolio, backend):
    mine = portfolio(owner.id)
    login_as(owner.id)

    assert client.delete(f"/tenants/{mine['tenant']['id']}").status_code == 204
    assert backend.select("leases") == []
    assert backend.select("payments") == []
    assert len(backend.select("units")) == 1


def test_admin_can_manage_any_owners_rows(client, login_as, admin, owner, portfolio):
    mine = portfolio(owner.id)
    login_as(admin.id)

    response = client.patch(f"/units/{mine['unit']['id']}", json={"status": "maintenance"})
    assert response.status_code == 200
    assert response.json()["status"] == "maintenance"
    assert client.get("/units/does-not-exist").status_code == 404


def test_clearing_required_columns_is_400(client, login_as, owner, portfolio, backend):
    mine = portfolio(owner.id)
    login_as(owner.id)

    response = client.patch(f"/units/{mine['unit']['id']}", json={"unit_number": None, "rent_amount": None})
    assert response.status_code == 400
    assert "rent_amount" in response.json()["detail"]
    unit = backend.get("units", mine["unit"]["id"])
    assert unit["unit_number"] == "101"
    assert unit["rent_amount"] == 300.0

    response = client.patch(f"/properties/{mine['property']['id']}", json={"name": "   "})
    assert response.status_code == 400
    assert backend.get("properties", mine["property"]["id"])["name"] == "Hostel"

    # optional columns may still be cleared
    assert client.patch(f"/properties/{mine['property']['id']}", json={"description": None}).status_code == 200


def test_blank_required_column_on_create_is_400(client, login_as, owner, backend):
    login_as(owner.id)
    response = client.post("/properties", json={"name": "   ", "type": "hostel", "address": "1 Main St"})
    assert response.status_code == 400
    assert backend.select("properties") == []
