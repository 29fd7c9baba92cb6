# tests/test_scenarios.py

"""
End-to-end flows through the HTTP API.
"""

from unittest.mock import patch

from tests.factories import mock_signup_client, signup_payload


# ------------------------------------------------------------
# New owner: signup → pending → approved → working
# ------------------------------------------------------------
def test_new_owner_waits_for_approval_then_works(client, login_as, admin, backend):
    with patch("routers.auth.get_supabase_client", return_value=mock_signup_client()):
        response = client.post("/auth/signup", json=signup_payload())
    assert response.status_code == 201
    assert response.json()["approval_status"] == "pending"

    profile = backend.get("profiles", "new-owner")
    assert profile["approval_status"] == "pending"
    assert profile["city"] == "Accra"
    assert profile["payment_provider"] == "MTN"
    assert profile["terms_accepted_at"]
    roles = [r["role"] for r in backend.select("user_roles", {"user_id": "new-owner"})]
    assert roles == ["property_owner"]

    login_as("new-owner", "ama@example.com")
    assert client.get("/session/guard").json()["view"] == "awaiting_approval"
    assert client.post("/properties", json={
        "name": "Sunrise Hostel", "type": "hostel", "address": "1 Campus Rd",
    }).status_code == 403

    login_as(admin.id)
    assert client.post("/admin/users/new-owner/approve").status_code == 200

    login_as("new-owner", "ama@example.com")
    assert client.get("/session/guard").json()["state"] == "approved"
    response = client.post("/properties", json={
        "name": "Sunrise Hostel", "type": "hostel", "address": "1 Campus Rd",
    })
    assert response.status_code == 201
    assert response.json()["owner_id"] == "new-owner"


# ------------------------------------------------------------
# Two approved owners never see or touch each other's data
# ------------------------------------------------------------
def test_owners_are_isolated(client, login_as, owner, other_owner, portfolio):
    theirs = portfolio(other_owner.id)
    login_as(owner.id)

    assert client.get("/properties").json() == []
    assert client.get("/payments").json() == []
    assert client.get(f"/properties/{theirs['property']['id']}").status_code == 404
    assert client.get(f"/units/{theirs['unit']['id']}").status_code == 404

    response = client.patch(f"/properties/{theirs['property']['id']}", json={"name": "Mine now"})
    assert response.status_code == 403
    assert client.delete(f"/leases/{theirs['lease']['id']}").status_code == 403

    response = client.post("/units", json={
        "property_id": theirs["property"]["id"], "unit_number": "666", "rent_amount": 1,
    })
    assert response.status_code == 403

    login_as(other_owner.id)
    data = client.get(f"/properties/{theirs['property']['id']}").json()
    assert data["name"] == "Hostel"
    assert len(client.get("/units").json()) == 1


def test_owner_id_in_payload_is_ignored(client, login_as, owner, other_owner):
    login_as(owner.id)
    response = client.post("/properties", json={
        "name": "Sneaky", "type": "rental", "address": "x", "owner_id": other_owner.id,
    })
    assert response.status_code == 201
    assert response.json()["owner_id"] == owner.id


# ------------------------------------------------------------
# Rejected owner
# ------------------------------------------------------------
def test_rejected_owner_is_shut_out(client, login_as, admin, make_owner, portfolio):
    make_owner("owner-9", status="pending")
    portfolio("owner-9")

    login_as(admin.id)
    assert client.post("/admin/users/owner-9/reject").status_code == 200

    login_as("owner-9")
    decision = client.get("/session/guard").json()
    assert decision["view"] == "access_denied"
    assert decision["actions"] == ["sign_out"]
    assert client.get("/properties").status_code == 403

    # the admin still sees everything
    login_as(admin.id)
    assert len(client.get("/properties").json()) == 1
    logs = client.get("/admin/activity-logs").json()["data"]
    assert logs[0]["action"] == "user_rejected"
