# models/profile.py

from typing import Optional
from datetime import date, datetime
from pydantic import BaseModel

from models.enums import ApprovalStatus


# Columns an owner may change on their own profile.
SELF_SERVICE_FIELDS = {
    "full_name",
    "phone",
    "avatar_url",
    "date_of_birth",
    "residential_address",
    "city",
    "country",
    "postal_code",
    "id_type",
    "id_number",
    "id_document_url",
    "payment_method",
    "payment_provider",
    "billing_address",
    "security_deposit_agreed",
    "terms_accepted",
    "terms_accepted_at",
}


class ProfileRead(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    approval_status: ApprovalStatus = ApprovalStatus.pending

    date_of_birth: Optional[date] = None
    residential_address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None
    id_type: Optional[str] = "national_id"
    id_number: Optional[str] = None
    id_document_url: Optional[str] = None
    payment_method: Optional[str] = None
    payment_provider: Optional[str] = None
    billing_address: Optional[str] = None
    security_deposit_agreed: bool = False
    terms_accepted: bool = False
    terms_accepted_at: Optional[datetime] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProfileUpdate(BaseModel):
    """Self-service profile edit. approval_status is deliberately absent."""
    full_name: Optional[str] = None
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    residential_address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None
    billing_address: Optional[str] = None


class ApprovalUpdate(BaseModel):
    approval_status: ApprovalStatus
