"""Helpers for moving MongoDB documents across the API boundary."""

from typing import Any

from bson import ObjectId
from bson.errors import InvalidId


def oid(value: str | None) -> ObjectId | None:
    """Parse *value* as an ``ObjectId``; return ``None`` if it is not one."""
    if value is None:
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def _stringify(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, list):
        return [_stringify(item) for item in value]
    if isinstance(value, dict):
        return {key: _stringify(item) for key, item in value.items()}
    return value


def to_str_id(doc: dict[str, Any] | None) -> dict[str, Any] | None:
    """Return a copy of *doc* with ``_id`` renamed to ``id`` and every ObjectId as a string."""
    if not doc:
        return doc
    out = {key: _stringify(value) for key, value in doc.items() if key != "_id"}
    if "_id" in doc:
        out["id"] = str(doc["_id"])
    return out
