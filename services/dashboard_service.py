# services/dashboard_service.py

"""
Dashboard and report aggregations.

All numbers are computed from rows the caller can see through the
gateway, so an owner's dashboard covers only their own chain and a super
admin's covers everything. Independent reads run concurrently and are
merged locally.
"""

from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Callable, Dict, List

from core.config import settings
from core.data_access import DataGateway
from models.enums import ApprovalStatus, MaintenancePriority, MaintenanceStatus, PaymentStatus, UnitStatus


MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def run_concurrently(jobs: Dict[str, Callable[[], object]]) -> Dict[str, object]:
    """Run independent read jobs in a thread pool; the first failure propagates."""
    with ThreadPoolExecutor(max_workers=settings.DASHBOARD_MAX_WORKERS) as executor:
        futures = {name: executor.submit(job) for name, job in jobs.items()}
        return {name: future.result() for name, future in futures.items()}


# -----------------------------------------------------
# Owner dashboard
# -----------------------------------------------------
def owner_stats(gateway: DataGateway) -> dict:
    return run_concurrently({
        "properties": lambda: gateway.count("properties"),
        "units": lambda: gateway.count("units"),
        "tenants": lambda: gateway.count("tenants"),
        "pending_payments": lambda: gateway.count("payments", {"status": PaymentStatus.pending.value}),
    })


def _tenant_name(gateway: DataGateway, tenant_id) -> str:
    tenant = gateway.get("tenants", tenant_id) if tenant_id else None
    return tenant.get("full_name") if tenant else "Unknown"


def _unit_number(gateway: DataGateway, unit_id) -> str:
    unit = gateway.get("units", unit_id) if unit_id else None
    return unit.get("unit_number") if unit else "N/A"


def recent_activity(gateway: DataGateway, per_type: int = 3, limit: int = 10) -> List[dict]:
    def recent(table):
        return lambda: gateway.select(table, order_by="created_at", desc=True, limit=per_type)

    rows = run_concurrently({
        "payments": recent("payments"),
        "leases": recent("leases"),
        "maintenance_requests": recent("maintenance_requests"),
        "tenants": recent("tenants"),
    })

    activities = []
    for payment in rows["payments"]:
        lease = gateway.get("leases", payment.get("lease_id")) or {}
        activities.append({
            "id": f"payment-{payment['id']}",
            "type": "payment",
            "title": f"Payment {payment.get('status')}",
            "description": f"{_tenant_name(gateway, lease.get('tenant_id'))} - {float(payment.get('amount') or 0):,.2f}",
            "created_at": payment.get("created_at"),
        })
    for lease in rows["leases"]:
        activities.append({
            "id": f"lease-{lease['id']}",
            "type": "lease",
            "title": f"Lease {lease.get('status')}",
            "description": f"{_tenant_name(gateway, lease.get('tenant_id'))} - Unit {_unit_number(gateway, lease.get('unit_id'))}",
            "created_at": lease.get("created_at"),
        })
    for request in rows["maintenance_requests"]:
        activities.append({
            "id": f"maintenance-{request['id']}",
            "type": "maintenance",
            "title": request.get("title"),
            "description": f"Unit {_unit_number(gateway, request.get('unit_id'))} - {request.get('status')}",
            "created_at": request.get("created_at"),
        })
    for tenant in rows["tenants"]:
        activities.append({
            "id": f"tenant-{tenant['id']}",
            "type": "tenant",
            "title": "New tenant",
            "description": tenant.get("full_name"),
            "created_at": tenant.get("created_at"),
        })

    activities.sort(key=lambda a: a.get("created_at") or "", reverse=True)
    return activities[:limit]


# -----------------------------------------------------
# Reports
# -----------------------------------------------------
def _month_key(d: date) -> str:
    return f"{MONTH_NAMES[d.month - 1]} {str(d.year)[-2:]}"


def _last_months(today: date, count: int = 6) -> List[str]:
    keys = []
    for back in range(count - 1, -1, -1):
        month_index = today.year * 12 + (today.month - 1) - back
        keys.append(_month_key(date(month_index // 12, month_index % 12 + 1, 1)))
    return keys


def _as_date(value):
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def reports(gateway: DataGateway, today: date = None) -> dict:
    today = today or date.today()
    rows = run_concurrently({
        "units": lambda: gateway.select("units"),
        "properties": lambda: gateway.select("properties"),
        "payments": lambda: gateway.select("payments"),
        "maintenance": lambda: gateway.select("maintenance_requests"),
        "tenants": lambda: gateway.count("tenants"),
    })
    units, properties, payments, maintenance = (
        rows["units"], rows["properties"], rows["payments"], rows["maintenance"]
    )

    # occupancy
    unit_status = Counter(u.get("status") or UnitStatus.available.value for u in units)
    occupied = unit_status.get(UnitStatus.occupied.value, 0)
    occupancy_rate = round(occupied / len(units) * 100) if units else 0

    property_stats = []
    for prop in properties:
        prop_units = [u for u in units if u.get("property_id") == prop["id"]]
        if prop_units:
            property_stats.append({
                "property_id": prop["id"],
                "name": prop.get("name"),
                "units": len(prop_units),
                "occupied": sum(1 for u in prop_units if u.get("status") == UnitStatus.occupied.value),
            })

    # payments by due month (last six months) and revenue
    monthly = {key: {s: 0.0 for s in PaymentStatus.list()} for key in _last_months(today)}
    for payment in payments:
        due = _as_date(payment.get("due_date"))
        status = payment.get("status") or PaymentStatus.pending.value
        if due and _month_key(due) in monthly and status in PaymentStatus.list():
            monthly[_month_key(due)][status] += float(payment.get("amount") or 0)

    total_revenue = sum(
        float(p.get("amount") or 0) for p in payments if p.get("status") == PaymentStatus.paid.value
    )

    # maintenance
    priority_counts = Counter(m.get("priority") or MaintenancePriority.medium.value for m in maintenance)
    status_counts = Counter(m.get("status") or MaintenanceStatus.pending.value for m in maintenance)

    return {
        "occupancy": {s: unit_status.get(s, 0) for s in UnitStatus.list()},
        "occupancy_rate": occupancy_rate,
        "properties": property_stats,
        "payments_by_month": [{"month": k, **v} for k, v in monthly.items()],
        "total_revenue": total_revenue,
        "maintenance_by_priority": {p: priority_counts.get(p, 0) for p in MaintenancePriority.list()},
        "maintenance_by_status": {s: status_counts.get(s, 0) for s in MaintenanceStatus.list()},
        "open_maintenance": sum(1 for m in maintenance if m.get("status") != MaintenanceStatus.resolved.value),
        "total_tenants": rows["tenants"],
    }


# -----------------------------------------------------
# Admin dashboard
# -----------------------------------------------------
def admin_stats(gateway: DataGateway) -> dict:
    rows = run_concurrently({
        "profiles": lambda: gateway.select("profiles"),
        "properties": lambda: gateway.count("properties"),
        "units": lambda: gateway.count("units"),
        "leases": lambda: gateway.count("leases"),
        "payments": lambda: gateway.count("payments"),
    })
    statuses = Counter(p.get("approval_status") or ApprovalStatus.pending.value for p in rows["profiles"])

    return {
        "total_users": len(rows["profiles"]),
        "pending": statuses.get(ApprovalStatus.pending.value, 0),
        "approved": statuses.get(ApprovalStatus.approved.value, 0),
        "rejected": statuses.get(ApprovalStatus.rejected.value, 0),
        "total_properties": rows["properties"],
        "total_units": rows["units"],
        "total_leases": rows["leases"],
        "total_payments": rows["payments"],
    }
