# routers/tenants.py

from fastapi import APIRouter, Depends, Response

from core.data_access import DataGateway
from core.utils import changed_values, row_values
from dependencies.auth import get_approved_gateway
from models.tenant import TenantCreate, TenantUpdate


router = APIRouter(
    prefix="/tenants",
    tags=["Tenants"],
)

TABLE = "tenants"


@router.get("")
def list_tenants(gateway: DataGateway = Depends(get_approved_gateway)):
    return gateway.select(TABLE, order_by="created_at", desc=True)


@router.get("/{tenant_id}")
def get_tenant(tenant_id: str, gateway: DataGateway = Depends(get_approved_gateway)):
    return gateway.get_or_404(TABLE, tenant_id)


@router.post("", status_code=201)
def create_tenant(payload: TenantCreate, gateway: DataGateway = Depends(get_approved_gateway)):
    data = row_values(payload)
    data["owner_id"] = gateway.user.id
    return gateway.insert(TABLE, data)


@router.patch("/{tenant_id}")
def update_tenant(tenant_id: str, payload: TenantUpdate, gateway: DataGateway = Depends(get_approved_gateway)):
    return gateway.update(TABLE, tenant_id, changed_values(payload))


@router.delete("/{tenant_id}", status_code=204)
def delete_tenant(tenant_id: str, gateway: DataGateway = Depends(get_approved_gateway)):
    gateway.delete(TABLE, tenant_id)
    return Response(status_code=204)
