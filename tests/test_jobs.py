# tests/test_jobs.py

import pytest

from core.errors import RecordNotFound
from jobs.promote_super_admin import promote_super_admin, run


def test_promote_existing_account(backend, owner):
    result = promote_super_admin(backend, " Owner-1@Example.com ")
    assert result["created"] is True
    roles = {r["role"] for r in backend.select("user_roles", {"user_id": owner.id})}
    assert roles == {"property_owner", "super_admin"}

    assert promote_super_admin(backend, owner.email)["created"] is False


def test_promote_requires_signup(backend):
    with pytest.raises(RecordNotFound):
        promote_super_admin(backend, "nobody@example.com")


def test_run_reports_failure(monkeypatch, backend):
    monkeypatch.setattr("jobs.promote_super_admin.get_backend", lambda: backend)
    assert run(["nobody@example.com"]) == 1
