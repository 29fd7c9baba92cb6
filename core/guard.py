# core/guard.py

"""
Approval guard.

A pure decision over {session resolving?, identity, roles, approval_status}.
It keeps no state of its own and is re-evaluated on every request from
freshly loaded profile data, so a status change takes effect on the very
next navigation.

Checks run in order and the first match wins:

    1. resolving               → RESOLVING        (loading placeholder)
       no identity             → UNAUTHENTICATED  (redirect to sign-in)
    2. holds super_admin       → ADMIN_BYPASS
    3. status pending/unknown  → PENDING          (awaiting approval, sign-out only)
       status rejected         → REJECTED         (access denied, sign-out only)
    4. otherwise               → APPROVED

This mirrors the policy layer coarsely so clients do not render views that
would fail at the data layer; core.policies stays the source of truth.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

from core.config import settings
from models.enums import AppRole, ApprovalStatus, BaseStrEnum


class GuardState(BaseStrEnum):
    resolving = "resolving"
    unauthenticated = "unauthenticated"
    admin_bypass = "admin_bypass"
    pending = "pending"
    rejected = "rejected"
    approved = "approved"


SIGN_OUT = "sign_out"

VIEWS = {
    GuardState.resolving: "loading",
    GuardState.unauthenticated: "redirect",
    GuardState.admin_bypass: "render",
    GuardState.pending: "awaiting_approval",
    GuardState.rejected: "access_denied",
    GuardState.approved: "render",
}


@dataclass(frozen=True)
class GuardDecision:
    state: GuardState
    requested_path: str = "/"
    redirect_to: Optional[str] = None
    actions: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def view(self) -> str:
        return VIEWS[self.state]

    @property
    def allowed(self) -> bool:
        return self.state in (GuardState.admin_bypass, GuardState.approved)

    def to_dict(self) -> dict:
        data = {
            "state": self.state.value,
            "view": self.view,
            "allowed": self.allowed,
            "requested_path": self.requested_path,
            "actions": list(self.actions),
        }
        if self.redirect_to:
            data["redirect_to"] = self.redirect_to
            data["from"] = self.requested_path
        return data


def evaluate_guard(
    user_id: Optional[str],
    roles: Iterable[str] = (),
    approval_status: Optional[str] = None,
    requested_path: str = "/",
    resolving: bool = False,
) -> GuardDecision:
    if resolving:
        return GuardDecision(GuardState.resolving, requested_path)

    if not user_id:
        return GuardDecision(
            GuardState.unauthenticated,
            requested_path,
            redirect_to=settings.SIGN_IN_PATH,
        )

    if AppRole.super_admin.value in {str(r) for r in roles}:
        return GuardDecision(GuardState.admin_bypass, requested_path)

    status = str(approval_status) if approval_status is not None else ApprovalStatus.pending.value

    if status == ApprovalStatus.approved.value:
        return GuardDecision(GuardState.approved, requested_path)

    if status == ApprovalStatus.rejected.value:
        return GuardDecision(GuardState.rejected, requested_path, actions=(SIGN_OUT,))

    return GuardDecision(GuardState.pending, requested_path, actions=(SIGN_OUT,))
