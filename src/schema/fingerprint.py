"""Schema fingerprint utilities for snapshot versioning."""

import hashlib
import json
from typing import Any

from .database_schema import DatabaseSchema
from .lookup import normalize_name


def canonicalize_schema(schema: DatabaseSchema) -> list[dict[str, Any]]:
    """Return a deterministic table/column listing for a schema."""
    canonical = []
    for table in sorted(schema.tables, key=lambda t: normalize_name(t.name)):
        columns = [
            {
                "name": column.name,
                "type": column.data_type,
                "nullable": column.is_nullable,
                "pk": column.is_primary_key,
                "fk": column.is_foreign_key,
            }
            for column in table.columns
        ]
        canonical.append({"table": table.name, "columns": columns})
    return canonical


def fingerprint_schema(schema: DatabaseSchema) -> str:
    """Compute a deterministic 16-character fingerprint for a schema."""
    payload = json.dumps(canonicalize_schema(schema), separators=(",", ":"), sort_keys=True)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:16]


def resolve_snapshot_id(schema: DatabaseSchema) -> str:
    """Return the snapshot id used to label a schema version."""
    return f"fp-{fingerprint_schema(schema)}"
