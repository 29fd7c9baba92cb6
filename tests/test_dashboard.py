# tests/test_dashboard.py

"""
Tests for dashboard counters and reports.
"""

from datetime import date

from services.dashboard_service import admin_stats, owner_stats, recent_activity, reports


def test_owner_stats_cover_only_own_chain(owner, other_owner, portfolio, gateway_for):
    portfolio(owner.id)
    portfolio(other_owner.id, suffix="b")
    portfolio(other_owner.id, suffix="c")

    stats = owner_stats(gateway_for(owner))
    assert stats == {"properties": 1, "units": 1, "tenants": 1, "pending_payments": 1}


def test_admin_sees_platform_totals(admin, owner, other_owner, portfolio, gateway_for, make_owner):
    make_owner("owner-9", status="pending")
    portfolio(owner.id)
    portfolio(other_owner.id, suffix="b")

    stats = admin_stats(gateway_for(admin))
    assert stats["total_properties"] == 2
    assert stats["pending"] == 2  # owner-9 and the admin's own profile
    assert stats["approved"] == 2
    assert stats["total_users"] == 4


def test_recent_activity_is_newest_first(owner, portfolio, gateway_for):
    portfolio(owner.id)
    activity = recent_activity(gateway_for(owner))

    assert {a["type"] for a in activity} == {"payment", "lease", "maintenance", "tenant"}
    stamps = [a["created_at"] for a in activity]
    assert stamps == sorted(stamps, reverse=True)
    lease = next(a for a in activity if a["type"] == "lease")
    assert lease["description"] == "Tenant - Unit 101"


def test_reports(owner, portfolio, gateway_for, backend):
    chain = portfolio(owner.id)
    backend.insert("payments", {
        "lease_id": chain["lease"]["id"], "amount": 500.0, "due_date": "2026-10-05", "status": "paid",
    })
    backend.insert("payments", {
        "lease_id": chain["lease"]["id"], "amount": 100.0, "due_date": "2025-01-05", "status": "paid",
    })
    backend.insert("units", {
        "property_id": chain["property"]["id"], "unit_number": "102", "rent_amount": 200.0, "status": "available",
    })

    data = reports(gateway_for(owner), today=date(2026, 10, 19))

    assert data["occupancy"] == {"available": 1, "occupied": 1, "maintenance": 0}
    assert data["occupancy_rate"] == 50
    assert data["properties"][0]["units"] == 2
    assert [m["month"] for m in data["payments_by_month"]] == [
        "May 26", "Jun 26", "Jul 26", "Aug 26", "Sep 26", "Oct 26",
    ]
    october = data["payments_by_month"][-1]
    assert october["paid"] == 500.0
    assert october["pending"] == 300.0
    assert data["total_revenue"] == 600.0
    assert data["maintenance_by_priority"]["high"] == 1
    assert data["open_maintenance"] == 1
    assert data["total_tenants"] == 1


def test_dashboard_routes(client, login_as, owner, portfolio):
    portfolio(owner.id)
    login_as(owner.id)

    assert client.get("/dashboard/stats").json()["units"] == 1
    assert len(client.get("/dashboard/recent-activity", params={"limit": 2}).json()) == 2
    assert client.get("/dashboard/reports").status_code == 200
