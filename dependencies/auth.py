from typing import List, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from core.backends import get_backend
from core.data_access import DataGateway
from core.errors import ApprovalBlocked, AuthenticationRequired, PermissionDenied, TransientServiceFailure
from core.guard import GuardDecision, evaluate_guard
from core.logging_config import logger
from core.supabase_client import get_supabase_client
from models.auth import CurrentUser, Identity


bearer_scheme = HTTPBearer(auto_error=False)


# ============================================================
# TOKEN → IDENTITY (Supabase Auth is authoritative)
# ============================================================
def verify_token(token: str) -> Identity:
    client = get_supabase_client()
    if not client:
        raise TransientServiceFailure("Supabase client not configured")

    try:
        auth_resp = client.auth.get_user(token)
    except Exception as e:
        logger.info(f"Token rejected: {type(e).__name__}")
        raise AuthenticationRequired() from e

    auth_user = getattr(auth_resp, "user", None)
    if not auth_user or not auth_user.email:
        raise AuthenticationRequired()

    return Identity(id=auth_user.id, email=auth_user.email, access_token=token)


def get_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Identity:
    if not credentials:
        raise AuthenticationRequired("Authentication required")
    return verify_token(credentials.credentials)


def get_optional_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Identity]:
    """
    Optional authentication for hybrid endpoints.
    Returns None for a missing or invalid token instead of raising.
    """
    if not credentials:
        return None
    try:
        return verify_token(credentials.credentials)
    except AuthenticationRequired:
        return None


# ============================================================
# IDENTITY → CURRENT USER (roles from user_roles, never from metadata)
# ============================================================
def load_roles(backend, user_id: str) -> List[str]:
    rows = backend.select("user_roles", {"user_id": user_id})
    return sorted({str(r["role"]) for r in rows})


def build_current_user(backend, identity: Identity) -> CurrentUser:
    return CurrentUser(
        id=identity.id,
        email=identity.email,
        roles=load_roles(backend, identity.id),
        access_token=identity.access_token,
    )


def get_current_user(
    identity: Identity = Depends(get_identity),
    backend=Depends(get_backend),
) -> CurrentUser:
    return build_current_user(backend, identity)


def get_gateway(
    current_user: CurrentUser = Depends(get_current_user),
    backend=Depends(get_backend),
) -> DataGateway:
    return DataGateway(backend, current_user)


# ============================================================
# GUARD (coarse, per request)
# ============================================================
def guard_decision_for(backend, user: Optional[CurrentUser], path: str) -> GuardDecision:
    if user is None:
        return evaluate_guard(None, requested_path=path)

    profile = backend.get("profiles", user.id)
    status = profile.get("approval_status") if profile else None
    return evaluate_guard(user.id, user.roles, status, requested_path=path)


def require_approved_user(
    request: Request,
    current_user: CurrentUser = Depends(get_current_user),
    backend=Depends(get_backend),
) -> CurrentUser:
    decision = guard_decision_for(backend, current_user, request.url.path)
    if not decision.allowed:
        raise ApprovalBlocked(
            "Your account is pending approval"
            if decision.state.value == "pending"
            else "Your account access has been denied",
            extra={
                "approval_status": decision.state.value,
                "view": decision.view,
                "actions": list(decision.actions),
            },
        )
    return current_user


def get_approved_gateway(
    current_user: CurrentUser = Depends(require_approved_user),
    backend=Depends(get_backend),
) -> DataGateway:
    return DataGateway(backend, current_user)


# ============================================================
# ROLE CHECK
# ============================================================
def require_super_admin(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not current_user.is_super_admin:
        raise PermissionDenied("Super admin role required")
    return current_user


def get_admin_gateway(
    current_user: CurrentUser = Depends(require_super_admin),
    backend=Depends(get_backend),
) -> DataGateway:
    return DataGateway(backend, current_user)
