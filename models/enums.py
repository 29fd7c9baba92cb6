from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# ROLES (user_roles.role)
# -----------------------------------------------------
class AppRole(BaseStrEnum):
    super_admin = "super_admin"
    property_owner = "property_owner"


# -----------------------------------------------------
# OWNER APPROVAL STATUS (profiles.approval_status)
# -----------------------------------------------------
class ApprovalStatus(BaseStrEnum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


# -----------------------------------------------------
# PROPERTY TYPE
# -----------------------------------------------------
class PropertyType(BaseStrEnum):
    hostel = "hostel"
    apartment = "apartment"
    hotel = "hotel"
    rental = "rental"


# -----------------------------------------------------
# UNIT STATUS
# -----------------------------------------------------
class UnitStatus(BaseStrEnum):
    available = "available"
    occupied = "occupied"
    maintenance = "maintenance"


# -----------------------------------------------------
# LEASE STATUS / PAYMENT SCHEDULE
# -----------------------------------------------------
class LeaseStatus(BaseStrEnum):
    active = "active"
    expiring_soon = "expiring_soon"
    expired = "expired"
    terminated = "terminated"


class PaymentSchedule(BaseStrEnum):
    monthly = "monthly"
    semester = "semester"
    annual = "annual"


# -----------------------------------------------------
# PAYMENT STATUS
# -----------------------------------------------------
class PaymentStatus(BaseStrEnum):
    paid = "paid"
    pending = "pending"
    overdue = "overdue"


# -----------------------------------------------------
# MAINTENANCE
# -----------------------------------------------------
class MaintenancePriority(BaseStrEnum):
    low = "low"
    medium = "medium"
    high = "high"
    urgent = "urgent"


class MaintenanceStatus(BaseStrEnum):
    pending = "pending"
    in_progress = "in_progress"
    resolved = "resolved"


# -----------------------------------------------------
# SIGNUP: identity document / payment method
# -----------------------------------------------------
class IdType(BaseStrEnum):
    national_id = "national_id"
    passport = "passport"
    drivers_license = "drivers_license"


class PaymentMethod(BaseStrEnum):
    bank_transfer = "bank_transfer"
    card = "card"
    mobile_money = "mobile_money"
