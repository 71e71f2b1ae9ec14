from typing import List

from pydantic import BaseModel, Field

from .relationship_def import RelationshipDef
from .table_def import TableDef


class DatabaseSchema(BaseModel):
    """Tables and relationships under consideration for one connection."""

    tables: List[TableDef] = Field(default_factory=list)
    relationships: List[RelationshipDef] = Field(default_factory=list)

    model_config = {"frozen": False}
