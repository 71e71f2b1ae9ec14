from typing import List

from pydantic import BaseModel, Field

from .column_def import ColumnDef


class TableDef(BaseModel):
    """Canonical representation of a database table.

    Column order is display and DDL order; new columns are appended.
    """

    name: str
    columns: List[ColumnDef] = Field(default_factory=list)

    model_config = {"frozen": False}
