"""Apply validated DDL operations to a copy of a schema.

Relationships are read-only inputs and pass through every operation unchanged.
"""

import logging
from typing import Callable

from ddl.operations import (
    AddColumn,
    CreateIndex,
    CreateTable,
    DropColumn,
    Operation,
    RenameColumn,
)
from schema import ColumnDef, DatabaseSchema, TableDef, find_table
from schema.lookup import column_index

logger = logging.getLogger(__name__)


class MutationError(ValueError):
    """Raised when an operation does not apply to the schema it was given."""


def _table(schema: DatabaseSchema, name: str) -> TableDef:
    table = find_table(schema, name)
    if table is None:
        raise MutationError(f"Table '{name}' does not exist")
    return table


def _position(table: TableDef, column: str) -> int:
    index = column_index(table, column)
    if index < 0:
        raise MutationError(f"Column '{column}' does not exist on table '{table.name}'")
    return index


def _add_column(operation: AddColumn, schema: DatabaseSchema) -> str:
    table = _table(schema, operation.table)
    table.columns.append(
        ColumnDef(
            name=operation.column,
            data_type=operation.data_type,
            is_nullable=True,
            is_primary_key=False,
            is_foreign_key=False,
        )
    )
    return f"Added column '{operation.column}' ({operation.data_type}) to {table.name}"


def _drop_column(operation: DropColumn, schema: DatabaseSchema) -> str:
    table = _table(schema, operation.table)
    dropped = table.columns.pop(_position(table, operation.column))
    return f"Dropped column '{dropped.name}' from {table.name}"


def _rename_column(operation: RenameColumn, schema: DatabaseSchema) -> str:
    table = _table(schema, operation.table)
    column = table.columns[_position(table, operation.old_name)]
    old_name = column.name
    column.name = operation.new_name
    return f"Renamed column '{old_name}' to '{operation.new_name}' on {table.name}"


def _create_table(operation: CreateTable, schema: DatabaseSchema) -> str:
    if find_table(schema, operation.table) is not None:
        raise MutationError(f"Table '{operation.table}' already exists")
    columns = [column.model_copy() for column in operation.columns]
    schema.tables.append(TableDef(name=operation.table, columns=columns))
    return f"Created table '{operation.table}' with {len(columns)} column(s)"


def _create_index(operation: CreateIndex, schema: DatabaseSchema) -> str:
    # Indexes are not modeled; the schema structure is unchanged.
    table = _table(schema, operation.table)
    column = table.columns[_position(table, operation.column)]
    return f"Created index '{operation.index}' on {table.name}.{column.name}"


_MUTATIONS: dict[type, Callable[..., str]] = {
    AddColumn: _add_column,
    DropColumn: _drop_column,
    RenameColumn: _rename_column,
    CreateTable: _create_table,
    CreateIndex: _create_index,
}


def apply_operation(
    operation: Operation, schema: DatabaseSchema
) -> tuple[DatabaseSchema, str]:
    """Apply a validated operation and return the new schema with a description.

    The input schema is never modified; mutation happens on a deep copy.

    Raises:
        MutationError: If the operation does not apply to ``schema``. Callers
            are expected to validate first.
    """
    mutate = _MUTATIONS.get(type(operation))
    if mutate is None:
        raise TypeError(f"Cannot apply {type(operation).__name__}")

    logger.debug("Applying %s to table %s", operation.kind, operation.table)
    new_schema = schema.model_copy(deep=True)
    description = mutate(operation, new_schema)
    return new_schema, description
