# routers/payments.py

from typing import Optional

from fastapi import APIRouter, Depends, Response

from core.data_access import DataGateway
from core.utils import changed_values, row_values
from dependencies.auth import get_approved_gateway
from models.enums import PaymentStatus
from models.payment import PaymentCreate, PaymentUpdate


router = APIRouter(
    prefix="/payments",
    tags=["Payments"],
)

TABLE = "payments"


@router.get("")
def list_payments(
    lease_id: Optional[str] = None,
    status: Optional[PaymentStatus] = None,
    gateway: DataGateway = Depends(get_approved_gateway),
):
    filters = {}
    if lease_id:
        filters["lease_id"] = lease_id
    if status:
        filters["status"] = status.value
    return gateway.select(TABLE, filters, order_by="due_date", desc=True)


@router.get("/{payment_id}")
def get_payment(payment_id: str, gateway: DataGateway = Depends(get_approved_gateway)):
    return gateway.get_or_404(TABLE, payment_id)


@router.post("", status_code=201)
def create_payment(payload: PaymentCreate, gateway: DataGateway = Depends(get_approved_gateway)):
    return gateway.insert(TABLE, row_values(payload))


@router.patch("/{payment_id}")
def update_payment(payment_id: str, payload: PaymentUpdate, gateway: DataGateway = Depends(get_approved_gateway)):
    return gateway.update(TABLE, payment_id, changed_values(payload))


@router.delete("/{payment_id}", status_code=204)
def delete_payment(payment_id: str, gateway: DataGateway = Depends(get_approved_gateway)):
    gateway.delete(TABLE, payment_id)
    return Response(status_code=204)
