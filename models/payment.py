# models/payment.py

from typing import ClassVar, FrozenSet, Optional
from datetime import date
from pydantic import BaseModel, Field

from models.enums import PaymentStatus


# Columns that are NOT NULL in the schema.
PAYMENT_NOT_NULL = frozenset({"lease_id", "amount", "due_date", "status"})


class PaymentBase(BaseModel):
    NOT_NULL: ClassVar[FrozenSet[str]] = PAYMENT_NOT_NULL

    lease_id: str
    amount: float = Field(..., ge=0)
    due_date: date
    payment_date: Optional[date] = None
    status: PaymentStatus = PaymentStatus.pending
    payment_method: Optional[str] = None
    notes: Optional[str] = None


class PaymentCreate(PaymentBase):
    pass


class PaymentUpdate(BaseModel):
    NOT_NULL: ClassVar[FrozenSet[str]] = PAYMENT_NOT_NULL

    lease_id: Optional[str] = None
    amount: Optional[float] = Field(None, ge=0)
    due_date: Optional[date] = None
    payment_date: Optional[date] = None
    status: Optional[PaymentStatus] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None
