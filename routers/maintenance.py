# routers/maintenance.py

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Response

from core.data_access import DataGateway
from core.utils import changed_values, row_values
from dependencies.auth import get_approved_gateway
from models.enums import MaintenancePriority, MaintenanceStatus
from models.maintenance import MaintenanceCreate, MaintenanceUpdate


router = APIRouter(
    prefix="/maintenance",
    tags=["Maintenance"],
)

TABLE = "maintenance_requests"


@router.get("")
def list_requests(
    unit_id: Optional[str] = None,
    status: Optional[MaintenanceStatus] = None,
    priority: Optional[MaintenancePriority] = None,
    gateway: DataGateway = Depends(get_approved_gateway),
):
    filters = {}
    if unit_id:
        filters["unit_id"] = unit_id
    if status:
        filters["status"] = status.value
    if priority:
        filters["priority"] = priority.value
    return gateway.select(TABLE, filters, order_by="created_at", desc=True)


@router.get("/{request_id}")
def get_request(request_id: str, gateway: DataGateway = Depends(get_approved_gateway)):
    return gateway.get_or_404(TABLE, request_id)


@router.post("", status_code=201)
def create_request(payload: MaintenanceCreate, gateway: DataGateway = Depends(get_approved_gateway)):
    data = row_values(payload)
    data["reported_by"] = gateway.user.id
    return gateway.insert(TABLE, data)


@router.patch("/{request_id}")
def update_request(request_id: str, payload: MaintenanceUpdate, gateway: DataGateway = Depends(get_approved_gateway)):
    updates = changed_values(payload)
    if updates.get("status") == MaintenanceStatus.resolved.value:
        updates["resolved_at"] = datetime.now(timezone.utc).isoformat()
    elif "status" in updates:
        updates["resolved_at"] = None
    return gateway.update(TABLE, request_id, updates)


@router.delete("/{request_id}", status_code=204)
def delete_request(request_id: str, gateway: DataGateway = Depends(get_approved_gateway)):
    gateway.delete(TABLE, request_id)
    return Response(status_code=204)
