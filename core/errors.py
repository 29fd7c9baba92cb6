# core/errors.py

from typing import Any, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from core.logging_config import logger


# ============================================================
# Error taxonomy
# ============================================================
class AppError(Exception):
    """
    Base class for errors that map onto an HTTP response.
    Subclasses set status_code / code; detail is the user-facing message.
    """

    status_code: int = 500
    code: str = "internal_error"
    default_detail: str = "Internal server error"

    def __init__(self, detail: Optional[str] = None, extra: Optional[dict] = None):
        self.detail = detail or self.default_detail
        self.extra = extra or {}
        super().__init__(self.detail)

    def to_content(self) -> dict:
        content: dict[str, Any] = {"detail": self.detail, "code": self.code}
        content.update(self.extra)
        return content


class AuthenticationRequired(AppError):
    status_code = 401
    code = "authentication_required"
    default_detail = "Invalid or expired authentication token"


class PermissionDenied(AppError):
    status_code = 403
    code = "permission_denied"
    default_detail = "You do not have permission to perform this action"


class ApprovalBlocked(AppError):
    status_code = 403
    code = "approval_blocked"
    default_detail = "Your account is not approved"


class RecordNotFound(AppError):
    status_code = 404
    code = "not_found"
    default_detail = "Resource not found"


class InvalidApprovalStatus(AppError):
    status_code = 400
    code = "invalid_approval_status"
    default_detail = "Approval status must be 'approved' or 'rejected'"


class DuplicateRecord(AppError):
    status_code = 409
    code = "duplicate"
    default_detail = "Record already exists"


class InvalidReference(AppError):
    status_code = 400
    code = "invalid_reference"
    default_detail = "Referenced record does not exist"


class InvalidRecord(AppError):
    status_code = 400
    code = "invalid_record"
    default_detail = "Record violates a column constraint"


class TransientServiceFailure(AppError):
    status_code = 503
    code = "service_unavailable"
    default_detail = "Upstream service failure, please retry"


# ============================================================
# Supabase error helpers
# ============================================================
def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST errors (APIError.message)
      • GoTrue (Auth) errors
      • Generic Python exceptions
    """
    message = getattr(error, "message", None)
    if message:
        return str(message)

    if error.args:
        return str(error.args[0])

    return str(error) or type(error).__name__


def service_failure(error: Exception, operation: str) -> AppError:
    """
    Convert a backend / identity / storage exception into an AppError.
    Returns (doesn't raise) so callers write `raise service_failure(e, "...") from e`.
    """
    detail = extract_supabase_error(error)
    logger.error(f"{operation} failed: {detail}")

    lowered = detail.lower()
    if "duplicate" in lowered or "unique" in lowered:
        return DuplicateRecord(f"{operation}: record already exists")
    elif "foreign key" in lowered:
        return InvalidReference(f"{operation}: invalid reference")
    elif "not-null" in lowered or "check constraint" in lowered or "invalid input" in lowered:
        return InvalidRecord(f"{operation}: invalid value")
    elif "not found" in lowered or "does not exist" in lowered:
        return RecordNotFound(f"{operation}: resource not found")
    return TransientServiceFailure(f"{operation} failed")


# ============================================================
# FastAPI handler
# ============================================================
async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code in (401, 403):
        logger.warning(f"HTTP {exc.status_code} at {request.url.path} — {exc.code}: {exc.detail}")

    headers = None
    if isinstance(exc, AuthenticationRequired):
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_content(),
        headers=headers,
    )
