"""Mermaid ER diagram text generation for a schema."""

import re
from typing import Iterable

from .database_schema import DatabaseSchema
from .relationship_def import RelationshipDef, RelationshipType
from .table_def import TableDef

_CARDINALITY = {
    RelationshipType.MANY_TO_ONE: "||--o{",
    RelationshipType.ONE_TO_MANY: "}o--||",
    RelationshipType.ONE_TO_ONE: "||--||",
    RelationshipType.MANY_TO_MANY: "}o--o{",
}

_WHITESPACE = re.compile(r"\s+")


def _attribute_type(data_type: str) -> str:
    # Mermaid attribute types are single tokens.
    cleaned = _WHITESPACE.sub("_", data_type.strip())
    return cleaned or "unknown"


def _render_table(table: TableDef) -> list[str]:
    lines = [f"    {table.name} {{"]
    for column in table.columns:
        line = f"        {_attribute_type(column.data_type)} {column.name}"
        if column.is_primary_key:
            line += " PK"
        if column.is_foreign_key:
            line += " FK"
        if not column.is_nullable:
            line += ' "NOT NULL"'
        lines.append(line)
    lines.append("    }")
    lines.append("")
    return lines


def _render_relationships(relationships: Iterable[RelationshipDef]) -> list[str]:
    lines = []
    for rel in relationships:
        cardinality = _CARDINALITY[rel.relationship_type]
        lines.append(f'    {rel.to_table} {cardinality} {rel.from_table} : "{rel.constraint_name}"')
    return lines


def generate_er_diagram(schema: DatabaseSchema) -> str:
    """Render a schema as Mermaid ``erDiagram`` text.

    Args:
        schema: Schema to render.

    Returns:
        Diagram source terminated by a newline.
    """
    lines = ["erDiagram"]
    for table in schema.tables:
        lines.extend(_render_table(table))
    lines.extend(_render_relationships(schema.relationships))
    return "\n".join(lines) + "\n"
