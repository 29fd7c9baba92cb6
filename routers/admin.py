# routers/admin.py

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from core.data_access import DataGateway
from core.errors import RecordNotFound
from core.logging_config import logger
from core.storage import presign_id_document
from dependencies.auth import get_admin_gateway
from models.audit_log import AuditLogRead
from models.enums import AppRole, ApprovalStatus
from models.profile import ApprovalUpdate
from services.approval_service import set_approval_status
from services.audit_service import list_admin_actions, record_admin_action
from services.dashboard_service import admin_stats


router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
)


class RoleAssignment(BaseModel):
    role: AppRole


# -----------------------------------------------------
# Helpers
# -----------------------------------------------------
def roles_by_user(gateway: DataGateway) -> dict:
    mapping: dict = {}
    for row in gateway.select("user_roles"):
        mapping.setdefault(row["user_id"], []).append(row["role"])
    return mapping


def prevent_removing_last_super_admin(gateway: DataGateway, user_id: str):
    admins = gateway.select("user_roles", {"role": AppRole.super_admin.value})
    admin_ids = {r["user_id"] for r in admins}
    if user_id in admin_ids and len(admin_ids) == 1:
        raise HTTPException(400, "Cannot remove the last remaining super_admin.")


# -----------------------------------------------------
# 1️⃣ LIST USERS
# -----------------------------------------------------
@router.get("/users", summary="Admin: List user profiles")
def list_users(
    status: Optional[ApprovalStatus] = None,
    gateway: DataGateway = Depends(get_admin_gateway),
):
    filters = {"approval_status": status.value} if status else None
    profiles = gateway.select("profiles", filters, order_by="created_at", desc=True)
    roles = roles_by_user(gateway)
    return {
        "success": True,
        "data": [{**p, "roles": sorted(roles.get(p["id"], []))} for p in profiles],
    }


# -----------------------------------------------------
# 2️⃣ GET USER
# -----------------------------------------------------
@router.get("/users/{user_id}", summary="Admin: Get user profile")
def get_user(user_id: str, gateway: DataGateway = Depends(get_admin_gateway)):
    profile = gateway.get("profiles", user_id)
    if not profile:
        raise RecordNotFound("User not found")
    roles = [r["role"] for r in gateway.select("user_roles", {"user_id": user_id})]
    return {"success": True, "data": {**profile, "roles": sorted(roles)}}


@router.get("/users/{user_id}/id-document", summary="Admin: Temporary link to a user's ID document")
def get_user_id_document(user_id: str, gateway: DataGateway = Depends(get_admin_gateway)):
    profile = gateway.get("profiles", user_id)
    if not profile:
        raise RecordNotFound("User not found")
    return {"url": presign_id_document(gateway.user, profile.get("id_document_url"))}


# -----------------------------------------------------
# 3️⃣ APPROVAL
# -----------------------------------------------------
@router.post("/users/{user_id}/approve", summary="Admin: Approve owner account")
def approve_user(user_id: str, gateway: DataGateway = Depends(get_admin_gateway)):
    result = set_approval_status(gateway, user_id, ApprovalStatus.approved)
    return {"success": True, "data": result.to_dict()}


@router.post("/users/{user_id}/reject", summary="Admin: Reject owner account")
def reject_user(user_id: str, gateway: DataGateway = Depends(get_admin_gateway)):
    result = set_approval_status(gateway, user_id, ApprovalStatus.rejected)
    return {"success": True, "data": result.to_dict()}


@router.patch("/users/{user_id}/approval", summary="Admin: Set approval status")
def update_approval(
    user_id: str,
    payload: ApprovalUpdate,
    gateway: DataGateway = Depends(get_admin_gateway),
):
    result = set_approval_status(gateway, user_id, payload.approval_status)
    return {"success": True, "data": result.to_dict()}


# -----------------------------------------------------
# 4️⃣ ROLES
# -----------------------------------------------------
@router.get("/users/{user_id}/roles", summary="Admin: List a user's roles")
def list_roles(user_id: str, gateway: DataGateway = Depends(get_admin_gateway)):
    return {"success": True, "data": gateway.select("user_roles", {"user_id": user_id})}


@router.post("/users/{user_id}/roles", status_code=201, summary="Admin: Grant role")
def grant_role(
    user_id: str,
    payload: RoleAssignment,
    gateway: DataGateway = Depends(get_admin_gateway),
):
    profile = gateway.get("profiles", user_id)
    if not profile:
        raise RecordNotFound("User not found")

    row = gateway.insert("user_roles", {"user_id": user_id, "role": payload.role.value})
    logger.info(f"Admin {gateway.user.id} granted {payload.role.value} to {user_id}")
    record_admin_action(
        gateway,
        "role_granted",
        target_user_id=user_id,
        target_user_email=profile.get("email"),
        details={"role": payload.role.value},
    )
    return {"success": True, "data": row}


@router.delete("/users/{user_id}/roles/{role}", summary="Admin: Revoke role")
def revoke_role(
    user_id: str,
    role: AppRole,
    gateway: DataGateway = Depends(get_admin_gateway),
):
    rows = gateway.select("user_roles", {"user_id": user_id, "role": role.value})
    if not rows:
        raise RecordNotFound("Role assignment not found")

    if role == AppRole.super_admin:
        prevent_removing_last_super_admin(gateway, user_id)

    gateway.delete("user_roles", rows[0]["id"])
    logger.info(f"Admin {gateway.user.id} revoked {role.value} from {user_id}")

    profile = gateway.get("profiles", user_id) or {}
    record_admin_action(
        gateway,
        "role_revoked",
        target_user_id=user_id,
        target_user_email=profile.get("email"),
        details={"role": role.value},
    )
    return {"success": True, "data": {"user_id": user_id, "role": role.value}}


# -----------------------------------------------------
# 5️⃣ DASHBOARD & ACTIVITY LOG
# -----------------------------------------------------
@router.get("/stats", summary="Admin: Platform statistics")
def read_stats(gateway: DataGateway = Depends(get_admin_gateway)):
    return {"success": True, "data": admin_stats(gateway)}


@router.get("/activity-logs", summary="Admin: Activity log")
def read_activity_logs(
    action: Optional[str] = None,
    target_user_id: Optional[str] = None,
    limit: int = Query(100, ge=1, le=500),
    gateway: DataGateway = Depends(get_admin_gateway),
):
    entries = list_admin_actions(gateway, action=action, target_user_id=target_user_id, limit=limit)
    return {
        "success": True,
        "data": [AuditLogRead(**e).model_dump(mode="json") for e in entries],
    }
