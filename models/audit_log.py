# models/audit_log.py

from typing import Any, Dict, Optional
from datetime import datetime
from pydantic import BaseModel


class AuditLogRead(BaseModel):
    id: str
    admin_id: str
    action: str
    target_user_id: Optional[str] = None
    target_user_email: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None
