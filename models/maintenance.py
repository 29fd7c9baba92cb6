# models/maintenance.py

from typing import ClassVar, FrozenSet, Optional
from pydantic import BaseModel

from models.enums import MaintenancePriority, MaintenanceStatus


# Columns that are NOT NULL in the schema.
MAINTENANCE_NOT_NULL = frozenset({"unit_id", "title", "priority", "status"})


class MaintenanceCreate(BaseModel):
    NOT_NULL: ClassVar[FrozenSet[str]] = MAINTENANCE_NOT_NULL

    unit_id: str
    title: str
    description: Optional[str] = None
    priority: MaintenancePriority = MaintenancePriority.medium
    status: MaintenanceStatus = MaintenanceStatus.pending


class MaintenanceUpdate(BaseModel):
    NOT_NULL: ClassVar[FrozenSet[str]] = MAINTENANCE_NOT_NULL

    unit_id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[MaintenancePriority] = None
    status: Optional[MaintenanceStatus] = None
