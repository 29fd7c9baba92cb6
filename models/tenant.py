# models/tenant.py

from typing import ClassVar, FrozenSet, Optional
from pydantic import BaseModel


# Columns that are NOT NULL in the schema.
TENANT_NOT_NULL = frozenset({"full_name"})


class TenantBase(BaseModel):
    NOT_NULL: ClassVar[FrozenSet[str]] = TENANT_NOT_NULL

    full_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    id_number: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None


class TenantCreate(TenantBase):
    pass


class TenantUpdate(BaseModel):
    NOT_NULL: ClassVar[FrozenSet[str]] = TENANT_NOT_NULL

    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    id_number: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
