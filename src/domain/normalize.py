"""
Content payload normalization.

Records come back from storage in one of three shapes:

1. nested:         {id, type_id, ..., data: {title, slug, ...}}
2. double-nested:  {id, type_id, ..., data: {data: {title, slug, ...}}}
3. flat:           {id, type_id, ..., title, slug, ...}

All three converge on shape 1 (the canonical shape). Shapes 2 and 3 are
read-time corrections for rows written by older clients; writes always use
shape 1.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

RECORD_FIELDS: frozenset[str] = frozenset(
    {
        "id",
        "type_id",
        "owner_id",
        "status",
        "scheduled_at",
        "published_at",
        "created_at",
        "updated_at",
    }
)

# Joined relations and legacy column names kept at the top level
RELATION_FIELDS: frozenset[str] = frozenset({"content_type", "user_id"})


def normalize_record(raw: Mapping[str, Any]) -> dict[str, Any]:
    """
    Return the canonical nested shape of a raw content record.

    Idempotent: normalize_record(normalize_record(x)) == normalize_record(x).
    The input is never mutated.
    """
    record = dict(raw)
    data = record.get("data")

    if isinstance(data, Mapping):
        # Unwrap to a fixed point so repeated buggy writes also converge
        while isinstance(data.get("data"), Mapping):
            data = data["data"]
        record["data"] = dict(data)
        return record

    top_level = RECORD_FIELDS | RELATION_FIELDS
    canonical: dict[str, Any] = {}
    payload: dict[str, Any] = {}
    for key, value in record.items():
        if key in top_level:
            canonical[key] = value
        elif key == "data":
            # Non-mapping "data" (null, string, list) carries no fields
            if data is not None:
                payload["data"] = value
        else:
            payload[key] = value

    canonical["data"] = payload
    return canonical


def split_payload(body: Mapping[str, Any]) -> dict[str, Any]:
    """
    Extract the content data mapping from a request body.

    Accepts {"data": {...}} or a flat body; record fields in a flat body are
    dropped since they cannot be set through the data payload.
    """
    data = body.get("data")
    if isinstance(data, Mapping):
        return dict(data)
    return {k: v for k, v in body.items() if k not in RECORD_FIELDS | RELATION_FIELDS}
