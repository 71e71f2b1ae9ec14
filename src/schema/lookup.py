"""Case-insensitive lookups over the schema model.

All identifier comparisons in the project go through ``names_match`` so that
table and column matching cannot drift between callers.
"""

from typing import Optional

from .column_def import ColumnDef
from .database_schema import DatabaseSchema
from .table_def import TableDef


def normalize_name(name: str) -> str:
    """Return the comparison key for an identifier."""
    return name.strip().casefold()


def names_match(left: str, right: str) -> bool:
    """Return True when two identifiers refer to the same object."""
    return normalize_name(left) == normalize_name(right)


def find_table(schema: DatabaseSchema, name: str) -> Optional[TableDef]:
    """Find a table by name, ignoring case."""
    for table in schema.tables:
        if names_match(table.name, name):
            return table
    return None


def find_column(table: TableDef, name: str) -> Optional[ColumnDef]:
    """Find a column on a table by name, ignoring case."""
    for column in table.columns:
        if names_match(column.name, name):
            return column
    return None


def column_index(table: TableDef, name: str) -> int:
    """Return the ordinal position of a column, or -1 when absent."""
    for index, column in enumerate(table.columns):
        if names_match(column.name, name):
            return index
    return -1


def name_contains(name: str, fragment: str) -> bool:
    """Return True when ``fragment`` occurs in ``name``, ignoring case."""
    return normalize_name(fragment) in normalize_name(name)
