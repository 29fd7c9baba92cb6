# core/policies.py

"""
Row-level policy predicates.

Deny by default: a table without a rule here admits nothing. The only
trusted inputs are the CurrentUser (identity from the validated session,
roles from user_roles) and rows read from the backend.

    owned tables          owner of the resolved chain, or super_admin; written
                          rows must always resolve to one owner
    profiles              own row; super_admin reads all and sets approval_status
    user_roles            read own; only super_admin writes
    admin_activity_logs   super_admin reads and inserts; never updated or deleted
"""

from typing import Optional

from core.ownership import OwnerResolver, is_owned_table
from models.auth import CurrentUser
from models.enums import ApprovalStatus
from models.profile import SELF_SERVICE_FIELDS


READ = "read"
INSERT = "insert"
UPDATE = "update"
DELETE = "delete"

WRITE_OPERATIONS = (INSERT, UPDATE, DELETE)

PROFILE_STATUS_FIELDS = {"approval_status"}

KNOWN_TABLES = {
    "properties",
    "units",
    "tenants",
    "leases",
    "payments",
    "maintenance_requests",
    "profiles",
    "user_roles",
    "admin_activity_logs",
}


# -----------------------------------------------------
# Reads
# -----------------------------------------------------
def can_read(user: CurrentUser, table: str, row: dict, resolver: OwnerResolver) -> bool:
    if table not in KNOWN_TABLES:
        return False

    if user.is_super_admin:
        return True

    if is_owned_table(table):
        return resolver.owner_of(table, row) == user.id

    if table == "profiles":
        return row.get("id") == user.id

    if table == "user_roles":
        return row.get("user_id") == user.id

    return False


# -----------------------------------------------------
# Writes
# -----------------------------------------------------
def can_write(
    user: CurrentUser,
    table: str,
    operation: str,
    row: dict,
    resolver: OwnerResolver,
    changes: Optional[dict] = None,
) -> bool:
    """
    row is the row being inserted (INSERT) or the current row (UPDATE,
    DELETE); changes holds the new column values of an UPDATE.
    """
    if operation not in WRITE_OPERATIONS or table not in KNOWN_TABLES:
        return False

    if is_owned_table(table):
        return _can_write_owned(user, table, operation, row, resolver, changes or {})

    if table == "profiles":
        return _can_write_profile(user, operation, row, changes or {})

    if table == "user_roles":
        return user.is_super_admin

    if table == "admin_activity_logs":
        return (
            operation == INSERT
            and user.is_super_admin
            and row.get("admin_id") == user.id
        )

    return False


def _can_write_owned(user, table, operation, row, resolver, changes) -> bool:
    if operation == DELETE:
        return user.is_super_admin or resolver.owner_of(table, row) == user.id

    if operation == UPDATE:
        merged = {**row, **changes}
        # a super admin may repair a row; an owner's row must stay in their chain
        candidates = [merged] if user.is_super_admin else [row, merged]
    else:
        candidates = [row]

    for candidate in candidates:
        owner = resolver.owner_of(table, candidate)
        if owner is None:
            return False
        linked = resolver.linked_owners(table, candidate)
        if any(linked_owner != owner for linked_owner in linked.values()):
            return False
        if not user.is_super_admin and owner != user.id:
            return False

    return True


def _can_write_profile(user, operation, row, changes) -> bool:
    own = row.get("id") == user.id

    if operation == DELETE:
        return False

    if operation == INSERT:
        status = row.get("approval_status", ApprovalStatus.pending.value)
        return own and str(status) == ApprovalStatus.pending.value

    fields = set(changes)
    if user.is_super_admin:
        return own or fields <= PROFILE_STATUS_FIELDS

    return own and fields <= SELF_SERVICE_FIELDS
