# routers/leases.py

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response

from core.data_access import DataGateway
from core.utils import changed_values, row_values
from dependencies.auth import get_approved_gateway
from models.enums import LeaseStatus
from models.lease import LeaseCreate, LeaseUpdate


router = APIRouter(
    prefix="/leases",
    tags=["Leases"],
)

TABLE = "leases"


@router.get("")
def list_leases(
    unit_id: Optional[str] = None,
    tenant_id: Optional[str] = None,
    status: Optional[LeaseStatus] = None,
    gateway: DataGateway = Depends(get_approved_gateway),
):
    filters = {}
    if unit_id:
        filters["unit_id"] = unit_id
    if tenant_id:
        filters["tenant_id"] = tenant_id
    if status:
        filters["status"] = status.value
    return gateway.select(TABLE, filters, order_by="created_at", desc=True)


@router.get("/{lease_id}")
def get_lease(lease_id: str, gateway: DataGateway = Depends(get_approved_gateway)):
    return gateway.get_or_404(TABLE, lease_id)


# -------------------------------------------------------------
# CREATE Lease: unit and tenant must both belong to the caller
# -------------------------------------------------------------
@router.post("", status_code=201)
def create_lease(payload: LeaseCreate, gateway: DataGateway = Depends(get_approved_gateway)):
    return gateway.insert(TABLE, row_values(payload))


@router.patch("/{lease_id}")
def update_lease(lease_id: str, payload: LeaseUpdate, gateway: DataGateway = Depends(get_approved_gateway)):
    updates = changed_values(payload)
    # invisible rows fall through to the gateway, which denies the write
    current = gateway.get(TABLE, lease_id) or {}
    start = updates.get("start_date", current.get("start_date"))
    end = updates.get("end_date", current.get("end_date"))
    if start and end and str(end) < str(start):
        raise HTTPException(400, "end_date must be on or after start_date")
    return gateway.update(TABLE, lease_id, updates)


@router.delete("/{lease_id}", status_code=204)
def delete_lease(lease_id: str, gateway: DataGateway = Depends(get_approved_gateway)):
    gateway.delete(TABLE, lease_id)
    return Response(status_code=204)
