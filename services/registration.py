# services/registration.py

from core.backends import utcnow_iso
from core.config import settings
from core.data_access import DataGateway
from core.errors import AppError, DuplicateRecord, TransientServiceFailure, service_failure
from core.logging_config import logger
from dependencies.auth import load_roles
from models.auth import CurrentUser
from models.enums import AppRole, ApprovalStatus
from models.signup import SignupRequest, SignupResponse


# -----------------------------------------------------
# New identity → profile + default role
# -----------------------------------------------------
def handle_new_user(backend, user_id: str, email: str, full_name: str = None) -> dict:
    """
    Creates the pending profile and the single property_owner role for a
    freshly registered identity. Runs with service-role rights (it is the
    application side of the database's on-signup trigger) and is idempotent:
    if the trigger already created the rows nothing is duplicated.
    """
    profile = backend.get("profiles", user_id)
    if profile is None:
        profile = backend.insert(
            "profiles",
            {
                "id": user_id,
                "email": email,
                "full_name": full_name,
                "approval_status": ApprovalStatus.pending.value,
            },
        )
        logger.info(f"Created pending profile for {email}")

    if not backend.select("user_roles", {"user_id": user_id}):
        backend.insert(
            "user_roles",
            {"user_id": user_id, "role": AppRole.property_owner.value},
        )

    return profile


# -----------------------------------------------------
# Public signup (identity + profile + KYC details)
# -----------------------------------------------------
def register_owner(backend, client, payload: SignupRequest) -> SignupResponse:
    if client is None:
        raise TransientServiceFailure("Supabase client not configured")

    email = payload.email.strip().lower()

    try:
        auth_resp = client.auth.sign_up(
            {
                "email": email,
                "password": payload.password,
                "options": {
                    "email_redirect_to": f"{settings.FRONTEND_URL.rstrip('/')}/",
                    "data": {"full_name": payload.full_name.strip()},
                },
            }
        )
    except Exception as e:
        if "already" in str(e).lower():
            raise DuplicateRecord("An account with this email already exists") from e
        raise service_failure(e, "Sign up") from e

    auth_user = getattr(auth_resp, "user", None)
    if not auth_user:
        raise TransientServiceFailure("Failed to create account")

    handle_new_user(backend, auth_user.id, auth_user.email or email, payload.full_name.strip())

    # KYC fields are self-service columns: written as the new user, through the gateway
    new_user = CurrentUser(
        id=auth_user.id,
        email=auth_user.email or email,
        roles=load_roles(backend, auth_user.id),
    )
    details = payload.kyc_fields()
    details["terms_accepted_at"] = utcnow_iso()
    try:
        DataGateway(backend, new_user).update("profiles", auth_user.id, details)
    except AppError as e:
        # account exists either way; the owner can complete the details later
        logger.warning(f"Profile details not saved for {auth_user.id}: {e.detail}")

    session = getattr(auth_resp, "session", None)
    return SignupResponse(
        user_id=auth_user.id,
        email=new_user.email,
        approval_status=ApprovalStatus.pending.value,
        access_token=getattr(session, "access_token", None),
    )
