from enum import Enum

from pydantic import BaseModel


class RelationshipType(str, Enum):
    """Cardinality of a relationship between two tables."""

    ONE_TO_ONE = "one-to-one"
    ONE_TO_MANY = "one-to-many"
    MANY_TO_ONE = "many-to-one"
    MANY_TO_MANY = "many-to-many"


class RelationshipDef(BaseModel):
    """Canonical representation of a relationship between two tables.

    Relationships are read-only inputs: DDL operations never create them.
    """

    from_table: str
    to_table: str
    from_column: str = ""
    to_column: str = ""
    constraint_name: str = ""
    relationship_type: RelationshipType = RelationshipType.MANY_TO_ONE

    model_config = {"frozen": False}
