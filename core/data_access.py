# core/data_access.py

from typing import Any, Dict, List, Optional

from core.errors import PermissionDenied, RecordNotFound
from core.logging_config import logger
from core.ownership import OWNERSHIP_CHAIN, OwnerResolver, is_owned_table
from core.policies import DELETE, INSERT, UPDATE, can_read, can_write
from models.auth import CurrentUser


def _as_list(value) -> list:
    return list(value) if isinstance(value, (list, tuple, set)) else [value]


def narrow_filters(
    filters: Optional[Dict[str, Any]],
    scope: Dict[str, Any],
) -> Optional[Dict[str, Any]]:
    """
    Combine caller filters with a read scope. A column present in both
    keeps only the requested values the scope allows; None when no value
    survives.
    """
    merged = dict(filters or {})
    for column, allowed in scope.items():
        if column not in merged:
            merged[column] = allowed
            continue
        allowed_values = set(_as_list(allowed))
        kept = [v for v in _as_list(merged[column]) if v in allowed_values]
        if not kept:
            return None
        merged[column] = kept[0] if len(kept) == 1 else kept
    return merged


class DataGateway:
    """
    The data-access boundary. Every table read or write made on behalf of a
    user goes through here, with that user's CurrentUser bound explicitly.

      • reads are scoped to the caller's chain in the query, then filtered
        row by row; invisible rows simply do not exist
      • writes are authorized before the backend is touched; a denied
        statement raises PermissionDenied and applies nothing
    """

    def __init__(self, backend, user: CurrentUser):
        self.backend = backend
        self.user = user

    def _resolver(self) -> OwnerResolver:
        return OwnerResolver(self.backend)

    # -------------------------------------------------
    # Reads
    # -------------------------------------------------
    def read_scope(self, table: str) -> Optional[Dict[str, Any]]:
        """
        Backend filters that pre-select the rows this user may see, so the
        query itself is bounded to the caller's chain. None means nothing
        in the table can be visible. can_read still filters the result.
        """
        if self.user.is_super_admin:
            return {}

        if is_owned_table(table):
            column, parent = OWNERSHIP_CHAIN[table]
            if parent is None:
                return {column: self.user.id}
            parent_scope = self.read_scope(parent)
            if parent_scope is None:
                return None
            parent_ids = [r["id"] for r in self.backend.select(parent, parent_scope)]
            return {column: parent_ids} if parent_ids else None

        if table == "profiles":
            return {"id": self.user.id}
        if table == "user_roles":
            return {"user_id": self.user.id}
        return None

    def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        desc: bool = False,
        limit: Optional[int] = None,
    ) -> List[dict]:
        scope = self.read_scope(table)
        query_filters = narrow_filters(filters, scope) if scope is not None else None
        if query_filters is None:
            return []

        resolver = self._resolver()
        rows = self.backend.select(table, query_filters, order_by=order_by, desc=desc, limit=limit)
        return [r for r in rows if can_read(self.user, table, r, resolver)]

    def get(self, table: str, row_id: str) -> Optional[dict]:
        row = self.backend.get(table, row_id)
        if row is None or not can_read(self.user, table, row, self._resolver()):
            return None
        return row

    def get_or_404(self, table: str, row_id: str) -> dict:
        row = self.get(table, row_id)
        if row is None:
            raise RecordNotFound(f"{table} row {row_id} not found")
        return row

    def count(self, table: str, filters: Optional[Dict[str, Any]] = None) -> int:
        return len(self.select(table, filters))

    # -------------------------------------------------
    # Writes
    # -------------------------------------------------
    def insert(self, table: str, values: dict) -> dict:
        if not can_write(self.user, table, INSERT, values, self._resolver()):
            self._deny(INSERT, table, values.get("id"))
        return self.backend.insert(table, values)

    def update(self, table: str, row_id: str, values: dict) -> dict:
        current = self._existing(table, row_id)
        if not can_write(self.user, table, UPDATE, current, self._resolver(), changes=values):
            self._deny(UPDATE, table, row_id)
        return self.backend.update(table, row_id, values)

    def delete(self, table: str, row_id: str) -> None:
        current = self._existing(table, row_id)
        if not can_write(self.user, table, DELETE, current, self._resolver()):
            self._deny(DELETE, table, row_id)
        self.backend.delete(table, row_id)

    def _existing(self, table: str, row_id: str) -> dict:
        row = self.backend.get(table, row_id)
        if row is None:
            # only a super admin learns that a row does not exist
            if self.user.is_super_admin:
                raise RecordNotFound(f"{table} row {row_id} not found")
            self._deny("write", table, row_id)
        return row

    def _deny(self, operation: str, table: str, row_id) -> None:
        logger.warning(f"Denied {operation} on {table} ({row_id}) for user {self.user.id}")
        raise PermissionDenied(f"Not allowed to {operation} this {table} record")
