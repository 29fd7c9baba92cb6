# routers/units.py

from typing import Optional

from fastapi import APIRouter, Depends, Response

from core.data_access import DataGateway
from core.utils import changed_values, row_values
from dependencies.auth import get_approved_gateway
from models.enums import UnitStatus
from models.unit import UnitCreate, UnitUpdate


router = APIRouter(
    prefix="/units",
    tags=["Units"],
)

TABLE = "units"


# -------------------------------------------------------------
# LIST Units (optionally for one property)
# -------------------------------------------------------------
@router.get("")
def list_units(
    property_id: Optional[str] = None,
    status: Optional[UnitStatus] = None,
    gateway: DataGateway = Depends(get_approved_gateway),
):
    filters = {}
    if property_id:
        filters["property_id"] = property_id
    if status:
        filters["status"] = status.value
    return gateway.select(TABLE, filters, order_by="unit_number")


@router.get("/{unit_id}")
def get_unit(unit_id: str, gateway: DataGateway = Depends(get_approved_gateway)):
    return gateway.get_or_404(TABLE, unit_id)


# -------------------------------------------------------------
# CREATE Unit: property must belong to the caller
# -------------------------------------------------------------
@router.post("", status_code=201)
def create_unit(payload: UnitCreate, gateway: DataGateway = Depends(get_approved_gateway)):
    return gateway.insert(TABLE, row_values(payload))


@router.patch("/{unit_id}")
def update_unit(unit_id: str, payload: UnitUpdate, gateway: DataGateway = Depends(get_approved_gateway)):
    return gateway.update(TABLE, unit_id, changed_values(payload))


@router.delete("/{unit_id}", status_code=204)
def delete_unit(unit_id: str, gateway: DataGateway = Depends(get_approved_gateway)):
    gateway.delete(TABLE, unit_id)
    return Response(status_code=204)
