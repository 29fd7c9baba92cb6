# -------------------------
# Enums
# -------------------------
from .enums import (
    AppRole,
    ApprovalStatus,
    PropertyType,
    UnitStatus,
    LeaseStatus,
    PaymentSchedule,
    PaymentStatus,
    MaintenancePriority,
    MaintenanceStatus,
)

# -------------------------
# Auth / Session
# -------------------------
from .auth import Identity, CurrentUser, LoginRequest, TokenResponse

# -------------------------
# Profiles & signup
# -------------------------
from .profile import ProfileRead, ProfileUpdate, ApprovalUpdate
from .signup import SignupRequest, SignupResponse

# -------------------------
# Owned resources
# -------------------------
from .property import PropertyCreate, PropertyUpdate
from .unit import UnitCreate, UnitUpdate
from .tenant import TenantCreate, TenantUpdate
from .lease import LeaseCreate, LeaseUpdate
from .payment import PaymentCreate, PaymentUpdate
from .maintenance import MaintenanceCreate, MaintenanceUpdate

# -------------------------
# Audit
# -------------------------
from .audit_log import AuditLogRead
