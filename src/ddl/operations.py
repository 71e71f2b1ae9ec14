"""Operation descriptors produced by the statement classifier.

Each supported DDL form maps to exactly one frozen model. ``Operation`` is a
discriminated union over ``kind`` so validation and mutation can dispatch on
the descriptor type instead of re-reading SQL text.
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from schema import ColumnDef


class AddColumn(BaseModel):
    """ALTER TABLE <table> ADD COLUMN <column> <type>."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["add_column"] = "add_column"
    table: str
    column: str
    data_type: str


class DropColumn(BaseModel):
    """ALTER TABLE <table> DROP COLUMN <column>."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["drop_column"] = "drop_column"
    table: str
    column: str


class RenameColumn(BaseModel):
    """ALTER TABLE <table> RENAME COLUMN <old_name> TO <new_name>."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["rename_column"] = "rename_column"
    table: str
    old_name: str
    new_name: str


class CreateTable(BaseModel):
    """CREATE TABLE <table> (<column-defs>).

    Attributes:
        columns: Parsed columns in declaration order, with key flags applied.
        primary_key_declarations: Number of PRIMARY KEY clauses, inline or
            table-level. A composite table-level key counts once.
        constraint_columns: Column names referenced by table-level PRIMARY KEY
            or FOREIGN KEY constraints.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["create_table"] = "create_table"
    table: str
    columns: List[ColumnDef] = Field(default_factory=list)
    primary_key_declarations: int = 0
    constraint_columns: List[str] = Field(default_factory=list)


class CreateIndex(BaseModel):
    """CREATE [UNIQUE] INDEX <index> ON <table> (<column>)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["create_index"] = "create_index"
    index: str
    table: str
    column: str
    unique: bool = False


Operation = Annotated[
    Union[AddColumn, DropColumn, RenameColumn, CreateTable, CreateIndex],
    Field(discriminator="kind"),
]


class Unrecognized(BaseModel):
    """Terminal classification for statements that cannot be simulated."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["unrecognized"] = "unrecognized"
    reason: str
    statement_type: Optional[str] = None


ClassificationResult = Union[
    AddColumn, DropColumn, RenameColumn, CreateTable, CreateIndex, Unrecognized
]
