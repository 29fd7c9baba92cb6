# models/auth.py

from typing import List, Optional
from pydantic import BaseModel

from models.enums import AppRole


class Identity(BaseModel):
    """Verified identity returned by the identity provider for a bearer token."""
    id: str
    email: str
    access_token: Optional[str] = None


class CurrentUser(BaseModel):
    """
    Authenticated context threaded into every data-access call.
    Roles are always loaded from user_roles, never from token metadata.
    """
    id: str
    email: str
    roles: List[str] = []
    access_token: Optional[str] = None

    def has_role(self, role: str) -> bool:
        return str(role) in self.roles

    @property
    def is_super_admin(self) -> bool:
        return self.has_role(AppRole.super_admin)


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: Optional[str] = None
