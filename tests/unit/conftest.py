"""Unit test environment helpers."""

import pytest

from schema import ColumnDef, DatabaseSchema, RelationshipDef, TableDef


@pytest.fixture(autouse=True)
def _minimal_env(monkeypatch):
    """Clear sandbox env overrides so unit tests see defaults."""
    for name in (
        "SANDBOX_SQL_DIALECT",
        "SANDBOX_HISTORY_BUFFER_SIZE",
        "SANDBOX_CORS_ORIGINS",
        "SANDBOX_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def shop_schema() -> DatabaseSchema:
    """Three-table store schema with one relationship."""
    return DatabaseSchema(
        tables=[
            TableDef(
                name="users",
                columns=[
                    ColumnDef(
                        name="id", data_type="integer", is_nullable=False, is_primary_key=True
                    ),
                    ColumnDef(name="email", data_type="varchar", is_nullable=False),
                    ColumnDef(name="full_name", data_type="varchar"),
                    ColumnDef(name="created_at", data_type="timestamp", is_nullable=False),
                ],
            ),
            TableDef(
                name="orders",
                columns=[
                    ColumnDef(
                        name="id", data_type="integer", is_nullable=False, is_primary_key=True
                    ),
                    ColumnDef(
                        name="user_id", data_type="integer", is_nullable=False, is_foreign_key=True
                    ),
                    ColumnDef(name="total_amount", data_type="decimal", is_nullable=False),
                    ColumnDef(name="status", data_type="varchar", is_nullable=False),
                ],
            ),
            TableDef(
                name="products",
                columns=[
                    ColumnDef(
                        name="id", data_type="integer", is_nullable=False, is_primary_key=True
                    ),
                    ColumnDef(name="price", data_type="decimal", is_nullable=False),
                ],
            ),
        ],
        relationships=[
            RelationshipDef(
                from_table="orders",
                to_table="users",
                from_column="user_id",
                to_column="id",
                constraint_name="fk_orders_user_id",
                relationship_type="many-to-one",
            )
        ],
    )
