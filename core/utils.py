# core/utils.py

from fastapi import HTTPException
from pydantic import BaseModel


def sanitize(data: dict) -> dict:
    """
    Sanitize a row payload:
    - Strip string whitespace
    - Empty strings → None
    - Everything else kept as-is
    """
    clean = {}
    for k, v in data.items():
        if isinstance(v, str):
            v = v.strip() or None
        clean[k] = v
    return clean


def reject_cleared(payload: BaseModel, values: dict) -> dict:
    """400 when a NOT NULL column (the model's NOT_NULL set) is null or blank."""
    required = getattr(type(payload), "NOT_NULL", frozenset())
    cleared = sorted(k for k in required if k in values and values[k] is None)
    if cleared:
        raise HTTPException(400, f"Fields cannot be empty: {', '.join(cleared)}")
    return values


def row_values(payload: BaseModel) -> dict:
    """Full insert payload as JSON-compatible column values."""
    return reject_cleared(payload, sanitize(payload.model_dump(mode="json")))


def changed_values(payload: BaseModel) -> dict:
    """Only the fields the client actually sent; 400 when there are none."""
    updates = sanitize(payload.model_dump(mode="json", exclude_unset=True))
    if not updates:
        raise HTTPException(400, "No fields provided to update.")
    return reject_cleared(payload, updates)
