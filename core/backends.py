# core/backends.py

"""
Table backends.

Both backends expose the same small, table-shaped API (select / get /
insert / update / delete on rows keyed by "id"). They perform NO
authorization of their own: callers go through core.data_access.DataGateway,
which evaluates the policy predicates before any backend call.

    SupabaseBackend   PostgREST tables via the service-role client
    MemoryBackend     in-process tables for local development and tests
"""

import uuid
from collections import defaultdict
from copy import deepcopy
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Dict, List, Optional

from core.config import settings
from core.errors import DuplicateRecord, RecordNotFound, TransientServiceFailure, service_failure
from core.logging_config import logger
from core.supabase_client import get_supabase_client


# Rows per PostgREST request; keep at or below the API max-rows setting.
PAGE_SIZE = 1000

# Unique constraints enforced by the database schema.
UNIQUE_CONSTRAINTS = {
    "user_roles": [("user_id", "role")],
}

# ON DELETE CASCADE edges: parent table → [(child table, fk column)]
CASCADE_DELETES = {
    "properties": [("units", "property_id")],
    "units": [("leases", "unit_id"), ("maintenance_requests", "unit_id")],
    "tenants": [("leases", "tenant_id")],
    "leases": [("payments", "lease_id")],
}


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _matches(row: dict, filters: Optional[Dict[str, Any]]) -> bool:
    for column, expected in (filters or {}).items():
        value = row.get(column)
        if isinstance(expected, (list, tuple, set)):
            if value not in expected:
                return False
        elif value != expected:
            return False
    return True


# ============================================================
# Supabase (production)
# ============================================================
class SupabaseBackend:
    """Thin wrapper over the service-role PostgREST client."""

    def __init__(self, client=None):
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = get_supabase_client()
        if self._client is None:
            raise TransientServiceFailure("Supabase client not configured")
        return self._client

    def _query(self, client, table, filters, order_by, desc):
        query = client.table(table).select("*")
        for column, value in (filters or {}).items():
            if isinstance(value, (list, tuple, set)):
                query = query.in_(column, list(value))
            else:
                query = query.eq(column, value)
        if order_by:
            query = query.order(order_by, desc=desc)
        if order_by != "id":
            # stable pages need a unique tie-breaker
            query = query.order("id")
        return query

    def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        desc: bool = False,
        limit: Optional[int] = None,
    ) -> List[dict]:
        """
        Rows matching equality / membership filters. Without a limit the
        result is read page by page, since PostgREST caps a single response
        at its max-rows setting.
        """
        if any(isinstance(v, (list, tuple, set)) and not v for v in (filters or {}).values()):
            return []

        client = self.client
        rows: List[dict] = []
        start = 0
        try:
            while True:
                query = self._query(client, table, filters, order_by, desc)
                if limit:
                    return query.limit(limit).execute().data or []

                page = query.range(start, start + PAGE_SIZE - 1).execute().data or []
                rows.extend(page)
                if len(page) < PAGE_SIZE:
                    return rows
                start += PAGE_SIZE
        except Exception as e:
            raise service_failure(e, f"Select from {table}") from e

    def get(self, table: str, row_id: str) -> Optional[dict]:
        rows = self.select(table, {"id": row_id}, limit=1)
        return rows[0] if rows else None

    def insert(self, table: str, values: dict) -> dict:
        client = self.client
        try:
            result = (
                client.table(table)
                .insert(values, returning="representation")
                .execute()
            )
        except Exception as e:
            raise service_failure(e, f"Insert into {table}") from e

        if not result.data:
            raise TransientServiceFailure(f"Insert into {table} returned no data")
        return result.data[0]

    def update(self, table: str, row_id: str, values: dict) -> dict:
        client = self.client
        try:
            result = (
                client.table(table)
                .update(values, returning="representation")
                .eq("id", row_id)
                .execute()
            )
        except Exception as e:
            raise service_failure(e, f"Update {table}") from e

        if not result.data:
            raise RecordNotFound(f"{table} row {row_id} not found")
        return result.data[0]

    def delete(self, table: str, row_id: str) -> None:
        client = self.client
        try:
            client.table(table).delete().eq("id", row_id).execute()
        except Exception as e:
            raise service_failure(e, f"Delete from {table}") from e


# ============================================================
# In-process tables (local development, tests)
# ============================================================
class MemoryBackend:
    """
    Dict-of-dicts table store with the same column defaults the database
    applies: generated ids, created_at / updated_at stamps, unique
    constraints and cascading deletes. Thread-safe for concurrent access.
    """

    def __init__(self):
        self._tables: Dict[str, Dict[str, dict]] = defaultdict(dict)
        self._lock = Lock()

    def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        desc: bool = False,
        limit: Optional[int] = None,
    ) -> List[dict]:
        with self._lock:
            rows = [deepcopy(r) for r in self._tables[table].values() if _matches(r, filters)]

        if order_by:
            present = [r for r in rows if r.get(order_by) is not None]
            missing = [r for r in rows if r.get(order_by) is None]
            present.sort(key=lambda r: r[order_by], reverse=desc)
            rows = present + missing
        if limit:
            rows = rows[:limit]
        return rows

    def get(self, table: str, row_id: str) -> Optional[dict]:
        with self._lock:
            row = self._tables[table].get(row_id)
            return deepcopy(row) if row is not None else None

    def insert(self, table: str, values: dict) -> dict:
        now = utcnow_iso()
        row = deepcopy(values)
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", now)
        row.setdefault("updated_at", now)

        with self._lock:
            rows = self._tables[table]
            if row["id"] in rows:
                raise DuplicateRecord(f"Insert into {table}: record already exists")
            for columns in UNIQUE_CONSTRAINTS.get(table, []):
                key = tuple(row.get(c) for c in columns)
                if any(tuple(r.get(c) for c in columns) == key for r in rows.values()):
                    raise DuplicateRecord(f"Insert into {table}: record already exists")
            rows[row["id"]] = row
            return deepcopy(row)

    def update(self, table: str, row_id: str, values: dict) -> dict:
        with self._lock:
            row = self._tables[table].get(row_id)
            if row is None:
                raise RecordNotFound(f"{table} row {row_id} not found")
            row.update(deepcopy(values))
            row["updated_at"] = utcnow_iso()
            return deepcopy(row)

    def delete(self, table: str, row_id: str) -> None:
        with self._lock:
            self._delete_cascading(table, row_id)

    def _delete_cascading(self, table: str, row_id: str) -> None:
        if self._tables[table].pop(row_id, None) is None:
            return
        for child_table, column in CASCADE_DELETES.get(table, []):
            child_ids = [cid for cid, r in self._tables[child_table].items() if r.get(column) == row_id]
            for child_id in child_ids:
                self._delete_cascading(child_table, child_id)


# ============================================================
# Backend selection (FastAPI dependency)
# ============================================================
_backend = None


def get_backend():
    """Process-wide backend chosen by settings.DATA_BACKEND."""
    global _backend
    if _backend is None:
        if settings.DATA_BACKEND == "memory":
            logger.warning("Using in-memory tables — data is lost on restart")
            _backend = MemoryBackend()
        else:
            _backend = SupabaseBackend()
    return _backend
