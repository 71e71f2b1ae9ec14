"""Plain-English transformation suggestions derived from a schema.

Suggestions are example requests a user can send to the SQL generator. They
are grouped by category and tailored to what the current schema lacks.
"""

from typing import List

from pydantic import BaseModel, Field

from schema import DatabaseSchema, TableDef
from schema.lookup import name_contains, names_match

ADD_COLUMNS = "Add Columns"
REMOVE_COLUMNS = "Remove Columns"
MODIFY_COLUMNS = "Modify Columns"
CREATE_TABLES = "Create Tables"
INDEXES = "Indexes & Performance"

_CATEGORY_DESCRIPTIONS = {
    ADD_COLUMNS: "Add new columns to existing tables",
    REMOVE_COLUMNS: "Remove existing columns from tables",
    MODIFY_COLUMNS: "Rename or change column properties",
    CREATE_TABLES: "Create new tables with columns",
    INDEXES: "Add indexes to improve query performance",
}

# (table name, example request) offered while the table is absent.
_SUGGESTED_TABLES = [
    ("categories", "Create a categories table with id, name, and description columns"),
    ("order_items", "Create an order_items table to link orders and products with quantity"),
    ("user_profiles", "Create a user_profiles table with user_id, bio, and avatar_url columns"),
    ("audit_log", "Create an audit_log table for tracking database changes"),
    ("reviews", "Create a reviews table with user_id, product_id, rating, and comment columns"),
]

# Table-specific columns: table -> [(name fragment, example request)].
_SUGGESTED_COLUMNS = {
    "users": [
        ("phone", "Add a phone_number column to the users table"),
        ("avatar", "Add an avatar_url column to the users table"),
    ],
    "products": [
        ("description", "Add a description text column to the products table"),
        ("sku", "Add a sku varchar column to the products table"),
    ],
    "orders": [
        ("notes", "Add a notes text column to the orders table"),
    ],
}

_REMOVE_LIMIT = 4
_MODIFY_LIMIT = 3
_INDEX_LIMIT = 3


class ShortcutCategory(BaseModel):
    """A group of example transformation requests."""

    category: str
    description: str
    examples: List[str] = Field(default_factory=list)


def _category(name: str, examples: List[str]) -> ShortcutCategory:
    return ShortcutCategory(
        category=name, description=_CATEGORY_DESCRIPTIONS[name], examples=examples
    )


def _has_column_like(table: TableDef, *fragments: str) -> bool:
    return any(
        name_contains(column.name, fragment) for column in table.columns for fragment in fragments
    )


def _add_column_examples(table: TableDef) -> List[str]:
    name = table.name
    examples = []
    if not _has_column_like(table, "created", "timestamp"):
        examples.append(f"Add a created_at timestamp column to the {name} table")
    if not _has_column_like(table, "updated"):
        examples.append(f"Add an updated_at timestamp column to the {name} table")
    if not _has_column_like(table, "deleted") and not names_match(name, "audit_log"):
        examples.append(f"Add a deleted_at timestamp column to the {name} table for soft deletes")
    if not _has_column_like(table, "status") and not names_match(name, "categories"):
        examples.append(f"Add a status column to the {name} table")

    for table_name, suggestions in _SUGGESTED_COLUMNS.items():
        if not names_match(name, table_name):
            continue
        for fragment, example in suggestions:
            if not _has_column_like(table, fragment):
                examples.append(example)
    return examples


def _is_plain_column(column) -> bool:
    return not column.is_primary_key and not column.is_foreign_key


def _remove_column_examples(tables: List[TableDef]) -> List[str]:
    return [
        f"Remove the {column.name} column from the {table.name} table"
        for table in tables
        for column in table.columns
        if _is_plain_column(column)
    ]


def _modify_column_examples(tables: List[TableDef]) -> List[str]:
    examples = []
    for table in tables:
        for column in table.columns:
            if not _is_plain_column(column):
                continue
            if names_match(column.data_type, "varchar"):
                examples.append(
                    f"Change the {column.name} column in {table.name} table to text type"
                )
            if "_" in column.name:
                new_name = column.name.replace("_", "", 1)
                examples.append(
                    f"Rename the {column.name} column to {new_name} in the {table.name} table"
                )
    return examples


def _create_table_examples(tables: List[TableDef]) -> List[str]:
    return [
        example
        for table_name, example in _SUGGESTED_TABLES
        if not any(names_match(table.name, table_name) for table in tables)
    ]


def _index_examples(tables: List[TableDef]) -> List[str]:
    examples = []
    for table in tables:
        for column in table.columns:
            if name_contains(column.name, "email"):
                examples.append(
                    f"Create an index on the {column.name} column in the {table.name} table"
                )
            if column.is_foreign_key:
                examples.append(
                    f"Create an index on the {column.name} foreign key in the {table.name} table"
                )
            if name_contains(column.name, "created_at"):
                examples.append(
                    f"Create an index on the {column.name} column in the {table.name} table "
                    "for date queries"
                )
    return examples


def generic_shortcuts() -> List[ShortcutCategory]:
    """Suggestions used when there is no schema to tailor them to."""
    return [
        _category(
            ADD_COLUMNS,
            [
                "Add a phone_number column to the users table",
                "Add a description column to the products table",
                "Add a created_at timestamp column to the orders table",
                "Add an is_active boolean column to the users table",
            ],
        ),
        _category(
            CREATE_TABLES,
            [
                "Create a categories table with id, name, and description columns",
                "Create an order_items table to link orders and products",
                "Create a user_profiles table with user_id, bio, and avatar_url",
                "Create an audit_log table for tracking changes",
            ],
        ),
        _category(
            INDEXES,
            [
                "Create an index on the email column in the users table",
                "Add an index on the category_id column in the products table",
                "Create a composite index on user_id and created_at in the orders table",
            ],
        ),
    ]


def suggest_shortcuts(schema: DatabaseSchema) -> List[ShortcutCategory]:
    """Build contextual transformation suggestions for a schema.

    Categories with no examples are omitted. If nothing applies, the generic
    suggestions are returned instead.
    """
    tables = schema.tables
    if not tables:
        return generic_shortcuts()

    add_examples = [example for table in tables for example in _add_column_examples(table)]
    candidates = [
        (ADD_COLUMNS, add_examples),
        (REMOVE_COLUMNS, _remove_column_examples(tables)[:_REMOVE_LIMIT]),
        (MODIFY_COLUMNS, _modify_column_examples(tables)[:_MODIFY_LIMIT]),
        (CREATE_TABLES, _create_table_examples(tables)),
        (INDEXES, _index_examples(tables)[:_INDEX_LIMIT]),
    ]
    shortcuts = [_category(name, examples) for name, examples in candidates if examples]
    return shortcuts or generic_shortcuts()
