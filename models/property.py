# models/property.py

from typing import ClassVar, FrozenSet, Optional
from pydantic import BaseModel

from models.enums import PropertyType


# Columns that are NOT NULL in the schema.
PROPERTY_NOT_NULL = frozenset({"name", "type", "address"})


class PropertyBase(BaseModel):
    NOT_NULL: ClassVar[FrozenSet[str]] = PROPERTY_NOT_NULL

    name: str
    type: PropertyType
    address: str
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None


class PropertyCreate(PropertyBase):
    """owner_id is always taken from the session, never from the payload."""
    pass


class PropertyUpdate(BaseModel):
    NOT_NULL: ClassVar[FrozenSet[str]] = PROPERTY_NOT_NULL

    name: Optional[str] = None
    type: Optional[PropertyType] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
