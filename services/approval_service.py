# services/approval_service.py

from dataclasses import dataclass
from typing import Optional

from core.data_access import DataGateway
from core.errors import InvalidApprovalStatus, PermissionDenied, RecordNotFound
from core.logging_config import logger
from core.notifications import notify_approval_decision
from models.enums import ApprovalStatus
from services.audit_service import record_admin_action


ACTIONS = {
    ApprovalStatus.approved: "user_approved",
    ApprovalStatus.rejected: "user_rejected",
}


@dataclass
class ApprovalResult:
    user_id: str
    email: Optional[str]
    previous_status: Optional[str]
    approval_status: str
    audit_entry_id: Optional[str]

    @property
    def audit_logged(self) -> bool:
        return self.audit_entry_id is not None

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "email": self.email,
            "previous_status": self.previous_status,
            "approval_status": self.approval_status,
            "audit_logged": self.audit_logged,
        }


def set_approval_status(gateway: DataGateway, target_user_id: str, new_status) -> ApprovalResult:
    """
    Super admin transition of a profile's approval_status.

    Any status may move to approved or rejected, including a repeat of the
    current one; every call that persists writes its own audit entry. The
    audit entry is written only after the status update succeeded, and a
    failed audit write leaves the update in place.
    """
    if not gateway.user.is_super_admin:
        raise PermissionDenied("Only a super admin can change approval status")

    try:
        status = ApprovalStatus(str(new_status))
    except ValueError as e:
        raise InvalidApprovalStatus() from e
    if status not in ACTIONS:
        raise InvalidApprovalStatus()

    profile = gateway.get("profiles", target_user_id)
    if profile is None:
        raise RecordNotFound("User not found")

    previous = profile.get("approval_status")
    gateway.update("profiles", target_user_id, {"approval_status": status.value})
    logger.info(
        f"Admin {gateway.user.id} set {target_user_id} approval_status {previous} → {status.value}"
    )

    entry = record_admin_action(
        gateway,
        ACTIONS[status],
        target_user_id=target_user_id,
        target_user_email=profile.get("email"),
        details={"previous_status": previous, "new_status": status.value},
    )

    notify_approval_decision(profile.get("email"), profile.get("full_name"), status.value)

    return ApprovalResult(
        user_id=target_user_id,
        email=profile.get("email"),
        previous_status=previous,
        approval_status=status.value,
        audit_entry_id=entry.get("id") if entry else None,
    )
