# models/signup.py

from typing import Optional
from datetime import date
from pydantic import BaseModel, EmailStr, model_validator

from core.config import settings
from models.enums import IdType, PaymentMethod


def age_on(born: date, today: date) -> int:
    years = today.year - born.year
    if (today.month, today.day) < (born.month, born.day):
        years -= 1
    return years


# --------------------------------------------------------------------
# Four-step owner registration wizard, submitted in one request.
# --------------------------------------------------------------------
class SignupRequest(BaseModel):
    # Step 1: account
    full_name: str
    email: EmailStr
    password: str
    confirm_password: str
    phone: str
    date_of_birth: date

    # Step 2: address
    residential_address: str
    city: str
    country: str
    postal_code: str

    # Step 3: identity verification
    id_type: IdType = IdType.national_id
    id_number: str

    # Step 4: payment & security
    payment_method: PaymentMethod
    payment_provider: Optional[str] = None
    billing_address: str
    security_deposit_agreed: bool = False
    terms_accepted: bool = False

    @model_validator(mode="after")
    def validate_steps(self):
        required = {
            "full_name": self.full_name,
            "phone": self.phone,
            "residential_address": self.residential_address,
            "city": self.city,
            "country": self.country,
            "postal_code": self.postal_code,
            "id_number": self.id_number,
            "billing_address": self.billing_address,
        }
        missing = [name for name, value in required.items() if not value or not value.strip()]
        if missing:
            raise ValueError(f"Please fill all required fields: {', '.join(missing)}")

        if len(self.password) < settings.MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters")
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")

        if age_on(self.date_of_birth, date.today()) < settings.MIN_SIGNUP_AGE:
            raise ValueError(f"You must be at least {settings.MIN_SIGNUP_AGE} years old")

        if self.payment_method == PaymentMethod.mobile_money and not self.payment_provider:
            raise ValueError("Please select mobile money provider")
        if not self.security_deposit_agreed or not self.terms_accepted:
            raise ValueError("Please accept the terms and security deposit agreement")

        return self

    def kyc_fields(self) -> dict:
        """Profile columns written after the identity has been created."""
        return {
            "phone": self.phone.strip(),
            "date_of_birth": self.date_of_birth.isoformat(),
            "residential_address": self.residential_address.strip(),
            "city": self.city.strip(),
            "country": self.country.strip(),
            "postal_code": self.postal_code.strip(),
            "id_type": self.id_type.value,
            "id_number": self.id_number.strip(),
            "payment_method": self.payment_method.value,
            "payment_provider": (
                self.payment_provider if self.payment_method == PaymentMethod.mobile_money else None
            ),
            "billing_address": self.billing_address.strip(),
            "security_deposit_agreed": self.security_deposit_agreed,
            "terms_accepted": self.terms_accepted,
        }


class SignupResponse(BaseModel):
    user_id: str
    email: str
    approval_status: str
    access_token: Optional[str] = None
