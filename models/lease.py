# models/lease.py

from typing import ClassVar, FrozenSet, Optional
from datetime import date
from pydantic import BaseModel, Field, model_validator

from models.enums import LeaseStatus, PaymentSchedule


# Columns that are NOT NULL in the schema.
LEASE_NOT_NULL = frozenset({"unit_id", "tenant_id", "start_date", "end_date", "monthly_rent", "status", "payment_schedule"})


class LeaseBase(BaseModel):
    NOT_NULL: ClassVar[FrozenSet[str]] = LEASE_NOT_NULL

    unit_id: str
    tenant_id: str
    start_date: date
    end_date: date
    monthly_rent: float = Field(..., ge=0)
    deposit_amount: Optional[float] = Field(None, ge=0)
    status: LeaseStatus = LeaseStatus.active
    payment_schedule: PaymentSchedule = PaymentSchedule.monthly
    semester_amount: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None


class LeaseCreate(LeaseBase):
    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class LeaseUpdate(BaseModel):
    NOT_NULL: ClassVar[FrozenSet[str]] = LEASE_NOT_NULL

    unit_id: Optional[str] = None
    tenant_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    monthly_rent: Optional[float] = Field(None, ge=0)
    deposit_amount: Optional[float] = Field(None, ge=0)
    status: Optional[LeaseStatus] = None
    payment_schedule: Optional[PaymentSchedule] = None
    semester_amount: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None
