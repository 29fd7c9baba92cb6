# core/ownership.py

"""
Owned-resource chain.

    properties.owner_id ─┐
    tenants.owner_id ────┤→ identity
    units.property_id → properties
    leases.unit_id → units          (leases.tenant_id → tenants)
    payments.lease_id → leases
    maintenance_requests.unit_id → units

Every owned row resolves to exactly one root owner_id by walking these
foreign keys through the backend. The resolution never looks at anything
the caller sent except the foreign-key values being checked.
"""

from typing import Dict, Optional, Tuple


# table → (fk column, parent table or None when the column IS the owner)
OWNERSHIP_CHAIN: Dict[str, Tuple[str, Optional[str]]] = {
    "properties": ("owner_id", None),
    "tenants": ("owner_id", None),
    "units": ("property_id", "properties"),
    "leases": ("unit_id", "units"),
    "payments": ("lease_id", "leases"),
    "maintenance_requests": ("unit_id", "units"),
}

# Secondary references that must stay inside the same owner's chain.
LINKED_REFERENCES: Dict[str, Tuple[Tuple[str, str], ...]] = {
    "leases": (("tenant_id", "tenants"),),
}

OWNED_TABLES = frozenset(OWNERSHIP_CHAIN)


def is_owned_table(table: str) -> bool:
    return table in OWNED_TABLES


class OwnerResolver:
    """
    Resolves rows to their root owner_id.
    Parent lookups are memoized for the lifetime of the resolver, which is
    one gateway statement, so listing N units of one property costs one
    property lookup.
    """

    def __init__(self, backend):
        self.backend = backend
        self._cache: Dict[Tuple[str, str], Optional[str]] = {}

    def owner_of(self, table: str, row: dict) -> Optional[str]:
        column, parent = OWNERSHIP_CHAIN[table]
        ref = row.get(column)
        if ref is None:
            return None
        if parent is None:
            return str(ref)
        return self.owner_of_id(parent, str(ref))

    def owner_of_id(self, table: str, row_id: str) -> Optional[str]:
        key = (table, row_id)
        if key not in self._cache:
            row = self.backend.get(table, row_id)
            self._cache[key] = self.owner_of(table, row) if row is not None else None
        return self._cache[key]

    def linked_owners(self, table: str, row: dict) -> Dict[str, Optional[str]]:
        """owner_id of every secondary reference present on the row."""
        owners = {}
        for column, parent in LINKED_REFERENCES.get(table, ()):
            ref = row.get(column)
            if ref is not None:
                owners[column] = self.owner_of_id(parent, str(ref))
        return owners
