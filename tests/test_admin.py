# tests/test_admin.py

"""
Tests for the super-admin console routes.
"""


def test_list_users_with_roles_and_filter(client, login_as, admin, make_owner):
    make_owner("owner-9", status="pending")
    make_owner("owner-8", status="approved")
    login_as(admin.id)

    users = client.get("/admin/users").json()["data"]
    assert {u["id"] for u in users} == {"admin-1", "owner-9", "owner-8"}
    admin_row = next(u for u in users if u["id"] == "admin-1")
    assert admin_row["roles"] == ["property_owner", "super_admin"]

    pending = client.get("/admin/users", params={"status": "pending"}).json()["data"]
    assert {u["id"] for u in pending} == {"admin-1", "owner-9"}


def test_get_user(client, login_as, admin, owner):
    login_as(admin.id)
    data = client.get(f"/admin/users/{owner.id}").json()["data"]
    assert data["roles"] == ["property_owner"]
    assert client.get("/admin/users/ghost").status_code == 404


def test_grant_and_revoke_role_is_audited(client, login_as, admin, owner):
    login_as(admin.id)

    response = client.post(f"/admin/users/{owner.id}/roles", json={"role": "super_admin"})
    assert response.status_code == 201
    assert client.post(f"/admin/users/{owner.id}/roles", json={"role": "super_admin"}).status_code == 409

    response = client.delete(f"/admin/users/{owner.id}/roles/super_admin")
    assert response.status_code == 200

    actions = [e["action"] for e in client.get("/admin/activity-logs").json()["data"]]
    assert sorted(actions) == ["role_granted", "role_revoked"]


def test_cannot_remove_last_super_admin(client, login_as, admin):
    login_as(admin.id)
    response = client.delete(f"/admin/users/{admin.id}/roles/super_admin")
    assert response.status_code == 400


def test_activity_log_filters(client, login_as, admin, make_owner):
    make_owner("owner-9", status="pending")
    make_owner("owner-8", status="pending")
    login_as(admin.id)
    client.post("/admin/users/owner-9/approve")
    client.post("/admin/users/owner-8/reject")

    logs = client.get("/admin/activity-logs", params={"action": "user_rejected"}).json()["data"]
    assert [e["target_user_id"] for e in logs] == ["owner-8"]
    logs = client.get("/admin/activity-logs", params={"target_user_id": "owner-9"}).json()["data"]
    assert [e["action"] for e in logs] == ["user_approved"]


def test_admin_stats_route(client, login_as, admin, make_owner):
    make_owner("owner-9", status="rejected")
    login_as(admin.id)
    data = client.get("/admin/stats").json()["data"]
    assert data["rejected"] == 1


def test_owner_cannot_read_audit_log(client, login_as, owner):
    login_as(owner.id)
    assert client.get("/admin/activity-logs").status_code == 403
    assert client.get("/admin/users").status_code == 403
