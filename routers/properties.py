# routers/properties.py

from fastapi import APIRouter, Depends, Response

from core.data_access import DataGateway
from core.utils import changed_values, row_values
from dependencies.auth import get_approved_gateway
from models.property import PropertyCreate, PropertyUpdate


router = APIRouter(
    prefix="/properties",
    tags=["Properties"],
)

TABLE = "properties"


@router.get("", summary="List visible properties")
def list_properties(gateway: DataGateway = Depends(get_approved_gateway)):
    return gateway.select(TABLE, order_by="created_at", desc=True)


@router.get("/{property_id}", summary="Get property")
def get_property(property_id: str, gateway: DataGateway = Depends(get_approved_gateway)):
    return gateway.get_or_404(TABLE, property_id)


@router.post("", status_code=201, summary="Create property")
def create_property(payload: PropertyCreate, gateway: DataGateway = Depends(get_approved_gateway)):
    data = row_values(payload)
    # owner always comes from the session
    data["owner_id"] = gateway.user.id
    return gateway.insert(TABLE, data)


@router.patch("/{property_id}", summary="Update property")
def update_property(
    property_id: str,
    payload: PropertyUpdate,
    gateway: DataGateway = Depends(get_approved_gateway),
):
    return gateway.update(TABLE, property_id, changed_values(payload))


@router.delete("/{property_id}", status_code=204, summary="Delete property (cascades to units)")
def delete_property(property_id: str, gateway: DataGateway = Depends(get_approved_gateway)):
    gateway.delete(TABLE, property_id)
    return Response(status_code=204)
