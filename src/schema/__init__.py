"""Canonical schema model shared by the DDL sandbox."""

from .column_def import ColumnDef
from .database_schema import DatabaseSchema
from .diagram import generate_er_diagram
from .fingerprint import fingerprint_schema, resolve_snapshot_id
from .lookup import find_column, find_table, names_match
from .relationship_def import RelationshipDef, RelationshipType
from .table_def import TableDef

__all__ = [
    "ColumnDef",
    "DatabaseSchema",
    "RelationshipDef",
    "RelationshipType",
    "TableDef",
    "find_column",
    "find_table",
    "fingerprint_schema",
    "generate_er_diagram",
    "names_match",
    "resolve_snapshot_id",
]
