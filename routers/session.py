# routers/session.py

from typing import Optional

from fastapi import APIRouter, Depends, Query

from core.backends import get_backend
from dependencies.auth import build_current_user, get_optional_identity, guard_decision_for
from models.auth import Identity


router = APIRouter(
    prefix="/session",
    tags=["Session"],
)


# -----------------------------------------------------
# GET /session/guard?path=/dashboard
# What the client should render for the requested view.
# Evaluated from fresh profile/role data on every call.
# -----------------------------------------------------
@router.get("/guard", summary="Evaluate the approval guard for a view")
def read_guard(
    path: str = Query("/dashboard"),
    identity: Optional[Identity] = Depends(get_optional_identity),
    backend=Depends(get_backend),
):
    user = build_current_user(backend, identity) if identity else None
    return guard_decision_for(backend, user, path).to_dict()
