# services/audit_service.py

from typing import Any, Dict, List, Optional

from core.data_access import DataGateway
from core.logging_config import logger


AUDIT_TABLE = "admin_activity_logs"


def record_admin_action(
    gateway: DataGateway,
    action: str,
    target_user_id: Optional[str] = None,
    target_user_email: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> Optional[dict]:
    """
    Append one audit entry for the acting admin.
    Failure is reported locally and returns None; it never undoes the
    action being audited.
    """
    entry = {
        "admin_id": gateway.user.id,
        "action": action,
        "target_user_id": target_user_id,
        "target_user_email": target_user_email,
        "details": details or {},
    }

    try:
        return gateway.insert(AUDIT_TABLE, entry)
    except Exception as e:
        logger.warning(f"Audit log write failed ({action} → {target_user_id}): {e}")
        return None


def list_admin_actions(
    gateway: DataGateway,
    action: Optional[str] = None,
    target_user_id: Optional[str] = None,
    limit: int = 100,
) -> List[dict]:
    filters = {}
    if action:
        filters["action"] = action
    if target_user_id:
        filters["target_user_id"] = target_user_id

    return gateway.select(AUDIT_TABLE, filters, order_by="created_at", desc=True, limit=limit)
