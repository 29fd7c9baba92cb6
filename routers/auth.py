from fastapi import APIRouter, Depends, File, UploadFile

from core.backends import get_backend
from core.data_access import DataGateway
from core.errors import AuthenticationRequired, TransientServiceFailure
from core.logging_config import logger
from core.storage import presign_id_document, upload_id_document
from core.supabase_client import get_supabase_client
from dependencies.auth import get_current_user, get_gateway
from models.auth import CurrentUser, LoginRequest, TokenResponse
from models.profile import ProfileRead, ProfileUpdate
from models.signup import SignupRequest, SignupResponse
from services.registration import register_owner


router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
)


# ============================================================
# SIGNUP (owner registration wizard)
# ============================================================
@router.post("/signup", response_model=SignupResponse, status_code=201, summary="Register a property owner")
def signup(payload: SignupRequest, backend=Depends(get_backend)):
    return register_owner(backend, get_supabase_client(), payload)


# ============================================================
# LOGIN (SUPABASE AUTH)
# ============================================================
@router.post("/login", response_model=TokenResponse, summary="Authenticate user")
def login(payload: LoginRequest):
    email = payload.email.strip().lower()

    client = get_supabase_client()
    if not client:
        raise TransientServiceFailure("Supabase client not configured")

    try:
        response = client.auth.sign_in_with_password(
            {"email": email, "password": payload.password}
        )
    except Exception as e:
        # don't expose provider details to the caller
        logger.warning(f"Login attempt failed for {email}: {type(e).__name__}")
        raise AuthenticationRequired("Invalid email or password") from e

    session = getattr(response, "session", None)
    if not session or not session.access_token:
        raise AuthenticationRequired("Invalid email or password")

    user = getattr(response, "user", None)
    return TokenResponse(
        access_token=session.access_token,
        user_id=getattr(user, "id", None),
    )


# ============================================================
# LOGOUT
# ============================================================
@router.post("/logout", summary="Sign out the current session")
def logout(current_user: CurrentUser = Depends(get_current_user)):
    client = get_supabase_client()
    if client and current_user.access_token:
        try:
            client.auth.admin.sign_out(current_user.access_token)
        except Exception as e:
            logger.warning(f"Sign-out for {current_user.id} failed upstream: {e}")
    return {"status": "signed_out"}


# ============================================================
# CURRENT USER
# ============================================================
@router.get("/me", summary="Current identity, roles and profile")
def read_me(gateway: DataGateway = Depends(get_gateway)):
    user = gateway.user
    return {
        "id": user.id,
        "email": user.email,
        "roles": user.roles,
        "profile": gateway.get("profiles", user.id),
    }


@router.patch("/me", response_model=ProfileRead, summary="Update current user profile")
def update_me(payload: ProfileUpdate, gateway: DataGateway = Depends(get_gateway)):
    """
    Self-service profile editing. approval_status is not part of the
    payload; the policy layer rejects it from non-admins regardless.
    """
    updates = payload.model_dump(exclude_unset=True)
    updates = {k: (v.strip() if isinstance(v, str) else v) for k, v in updates.items()}
    if not updates:
        return gateway.get_or_404("profiles", gateway.user.id)

    return gateway.update("profiles", gateway.user.id, updates)


# ============================================================
# IDENTITY DOCUMENT
# ============================================================
@router.post("/me/id-document", summary="Upload identity document")
def upload_my_id_document(
    file: UploadFile = File(...),
    gateway: DataGateway = Depends(get_gateway),
):
    key = upload_id_document(gateway.user, file.file, file.filename, file.content_type)
    gateway.update("profiles", gateway.user.id, {"id_document_url": key})
    return {"id_document_url": key}


@router.get("/me/id-document", summary="Temporary link to own identity document")
def read_my_id_document(gateway: DataGateway = Depends(get_gateway)):
    profile = gateway.get_or_404("profiles", gateway.user.id)
    return {"url": presign_id_document(gateway.user, profile.get("id_document_url"))}
