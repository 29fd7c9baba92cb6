# models/unit.py

from typing import ClassVar, FrozenSet, List, Optional
from pydantic import BaseModel, Field

from models.enums import UnitStatus


# Columns that are NOT NULL in the schema.
UNIT_NOT_NULL = frozenset({"property_id", "unit_number", "capacity", "amenities", "rent_amount", "status"})


class UnitBase(BaseModel):
    NOT_NULL: ClassVar[FrozenSet[str]] = UNIT_NOT_NULL

    property_id: str
    unit_number: str
    unit_type: Optional[str] = None
    capacity: int = Field(1, ge=1)
    amenities: List[str] = []
    rent_amount: float = Field(..., ge=0)
    status: UnitStatus = UnitStatus.available


class UnitCreate(UnitBase):
    pass


class UnitUpdate(BaseModel):
    NOT_NULL: ClassVar[FrozenSet[str]] = UNIT_NOT_NULL

    property_id: Optional[str] = None
    unit_number: Optional[str] = None
    unit_type: Optional[str] = None
    capacity: Optional[int] = Field(None, ge=1)
    amenities: Optional[List[str]] = None
    rent_amount: Optional[float] = Field(None, ge=0)
    status: Optional[UnitStatus] = None
