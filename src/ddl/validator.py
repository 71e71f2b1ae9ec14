"""Semantic validation of classified DDL operations against a schema.

Every applicable violation is collected so callers can show the full picture
in one round-trip. Validation is pure: the same operation and schema always
produce the same messages.
"""

from typing import Callable, Optional

from ddl.operations import (
    AddColumn,
    CreateIndex,
    CreateTable,
    DropColumn,
    Operation,
    RenameColumn,
)
from schema import DatabaseSchema, TableDef, find_column, find_table, names_match


def _table_missing(name: str) -> str:
    return f"Table '{name}' does not exist"


def _column_missing(column: str, table: TableDef) -> str:
    return f"Column '{column}' does not exist on table '{table.name}'"


def _column_exists(column: str, table: TableDef) -> str:
    return f"Column '{column}' already exists on table '{table.name}'"


def _require_table(
    schema: DatabaseSchema, name: str, violations: list[str]
) -> Optional[TableDef]:
    table = find_table(schema, name)
    if table is None:
        violations.append(_table_missing(name))
    return table


def _validate_add_column(operation: AddColumn, schema: DatabaseSchema) -> list[str]:
    violations: list[str] = []
    table = _require_table(schema, operation.table, violations)
    if table is not None and find_column(table, operation.column) is not None:
        violations.append(_column_exists(operation.column, table))
    return violations


def _validate_drop_column(operation: DropColumn, schema: DatabaseSchema) -> list[str]:
    violations: list[str] = []
    table = _require_table(schema, operation.table, violations)
    if table is not None and find_column(table, operation.column) is None:
        violations.append(_column_missing(operation.column, table))
    return violations


def _validate_rename_column(operation: RenameColumn, schema: DatabaseSchema) -> list[str]:
    violations: list[str] = []
    table = _require_table(schema, operation.table, violations)
    if table is None:
        return violations

    existing = find_column(table, operation.old_name)
    if existing is None:
        violations.append(_column_missing(operation.old_name, table))

    clash = find_column(table, operation.new_name)
    # Changing only the case of a column's own name is not a clash.
    if clash is not None and clash is not existing:
        violations.append(_column_exists(operation.new_name, table))
    return violations


def _validate_create_table(operation: CreateTable, schema: DatabaseSchema) -> list[str]:
    violations: list[str] = []
    if find_table(schema, operation.table) is not None:
        violations.append(f"Table '{operation.table}' already exists")

    seen: list[str] = []
    for column in operation.columns:
        if any(names_match(column.name, name) for name in seen):
            violations.append(
                f"Column '{column.name}' is defined more than once in table '{operation.table}'"
            )
        seen.append(column.name)

    if operation.primary_key_declarations > 1:
        violations.append(f"Table '{operation.table}' declares more than one primary key")

    for name in operation.constraint_columns:
        if not any(names_match(column.name, name) for column in operation.columns):
            violations.append(
                f"Constraint column '{name}' is not defined in table '{operation.table}'"
            )
    return violations


def _validate_create_index(operation: CreateIndex, schema: DatabaseSchema) -> list[str]:
    violations: list[str] = []
    table = _require_table(schema, operation.table, violations)
    if table is not None and find_column(table, operation.column) is None:
        violations.append(_column_missing(operation.column, table))
    return violations


_RULES: dict[type, Callable[..., list[str]]] = {
    AddColumn: _validate_add_column,
    DropColumn: _validate_drop_column,
    RenameColumn: _validate_rename_column,
    CreateTable: _validate_create_table,
    CreateIndex: _validate_create_index,
}


def validate(operation: Operation, schema: DatabaseSchema) -> list[str]:
    """Check an operation for semantic legality against a schema.

    Args:
        operation: A classified operation descriptor (never ``Unrecognized``).
        schema: The current schema.

    Returns:
        Ordered violation messages. An empty list means the operation is valid.
    """
    rule = _RULES.get(type(operation))
    if rule is None:
        raise TypeError(f"Cannot validate {type(operation).__name__}")
    return rule(operation, schema)
