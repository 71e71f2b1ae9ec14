"""Statement classification for the DDL sandbox.

Turns one SQL statement into an operation descriptor using sqlglot. Only five
single-statement forms are recognized:

- ALTER TABLE ... ADD COLUMN
- ALTER TABLE ... DROP COLUMN
- ALTER TABLE ... RENAME COLUMN ... TO
- CREATE TABLE ... (column definitions)
- CREATE [UNIQUE] INDEX ... ON table (column)

Everything else, including malformed operands, yields ``Unrecognized``.
Classification never raises on user input.
"""

import logging
from typing import Optional

import sqlglot
from sqlglot import exp
from sqlglot.errors import SqlglotError

from common.sql.dialect import normalize_sqlglot_dialect
from ddl.operations import (
    AddColumn,
    ClassificationResult,
    CreateIndex,
    CreateTable,
    DropColumn,
    RenameColumn,
    Unrecognized,
)
from schema import ColumnDef, names_match

logger = logging.getLogger(__name__)


class MalformedOperandError(ValueError):
    """A recognized statement form with an empty or degenerate operand."""


def parse_statement(
    sql: str, dialect: Optional[str] = None
) -> tuple[Optional[exp.Expression], Optional[str]]:
    """
    Parse exactly one SQL statement into an AST.

    Args:
        sql: SQL statement text
        dialect: SQL dialect (default: postgres)

    Returns:
        Tuple of (parsed AST, reason string if the text is not a single statement)
    """
    dialect = normalize_sqlglot_dialect(dialect)
    try:
        expressions = [e for e in sqlglot.parse(sql, dialect=dialect) if e is not None]
    except SqlglotError as e:
        return None, f"could not parse SQL ({type(e).__name__})"
    except ValueError as e:
        # sqlglot raises ValueError for unknown dialect names.
        return None, f"could not parse SQL ({e})"

    if not expressions:
        return None, "empty statement"
    if len(expressions) > 1:
        return None, "multiple statements are not supported"
    return expressions[0], None


def _unsupported(detail: str, statement_type: Optional[str] = None) -> Unrecognized:
    return Unrecognized(reason=f"Unsupported statement: {detail}", statement_type=statement_type)


def _statement_label(ast: exp.Expression) -> str:
    if isinstance(ast, exp.Command):
        return str(ast.this or "COMMAND").upper()
    kind = ast.args.get("kind")
    label = ast.key.upper()
    if isinstance(kind, str) and kind:
        label = f"{label} {kind.upper()}"
    return label


def _require_name(node: Optional[exp.Expression], what: str) -> str:
    name = node.name if node is not None else ""
    if not name or not name.strip():
        raise MalformedOperandError(f"missing {what}")
    return name


def _render_type(kind: Optional[exp.Expression], dialect: str, column: str) -> str:
    if kind is None:
        raise MalformedOperandError(f"column '{column}' has no data type")
    rendered = kind.sql(dialect=dialect).strip()
    if not rendered:
        raise MalformedOperandError(f"column '{column}' has no data type")
    return rendered.lower()


def _identifier_names(node: exp.Expression) -> list[str]:
    if isinstance(node, exp.Identifier):
        return [node.this]
    return [ident.this for ident in node.find_all(exp.Identifier)]


def _classify_alter(ast: exp.Alter, dialect: str) -> ClassificationResult:
    kind = str(ast.args.get("kind") or "TABLE").upper()
    if kind != "TABLE":
        return _unsupported(f"ALTER {kind} statements cannot be simulated", f"ALTER {kind}")

    table = _require_name(ast.this, "table name")
    actions = ast.args.get("actions") or []
    if not actions:
        raise MalformedOperandError("ALTER TABLE without an action")
    if len(actions) > 1:
        return _unsupported(
            "compound ALTER TABLE statements with multiple actions are not supported",
            "ALTER TABLE",
        )

    action = actions[0]
    if isinstance(action, (exp.Identifier, exp.Column)):
        raise MalformedOperandError(f"column '{action.name}' has no data type")

    if isinstance(action, exp.ColumnDef):
        column = _require_name(action, "column name")
        return AddColumn(
            table=table,
            column=column,
            data_type=_render_type(action.args.get("kind"), dialect, column),
        )

    if isinstance(action, exp.Drop):
        drop_kind = str(action.args.get("kind") or "").upper()
        if drop_kind != "COLUMN":
            target = f"DROP {drop_kind}" if drop_kind else "DROP"
            return _unsupported(f"ALTER TABLE ... {target} cannot be simulated", "ALTER TABLE")
        # Newer sqlglot releases keep the dropped column under "tables".
        target = action.this or (action.args.get("tables") or [None])[0]
        return DropColumn(table=table, column=_require_name(target, "column name"))

    if isinstance(action, exp.RenameColumn):
        return RenameColumn(
            table=table,
            old_name=_require_name(action.this, "column name"),
            new_name=_require_name(action.args.get("to"), "new column name"),
        )

    return _unsupported(
        f"ALTER TABLE ... {action.key.upper()} cannot be simulated", "ALTER TABLE"
    )


def _column_from_def(column_def: exp.ColumnDef, dialect: str) -> ColumnDef:
    name = _require_name(column_def, "column name")
    is_primary_key = column_def.find(exp.PrimaryKeyColumnConstraint) is not None
    not_null = any(
        not constraint.args.get("allow_null")
        for constraint in column_def.find_all(exp.NotNullColumnConstraint)
    )
    return ColumnDef(
        name=name,
        data_type=_render_type(column_def.args.get("kind"), dialect, name),
        is_nullable=not (not_null or is_primary_key),
        is_primary_key=is_primary_key,
        is_foreign_key=column_def.find(exp.Reference) is not None,
    )


def _classify_create_table(ast: exp.Create, dialect: str) -> ClassificationResult:
    definition = ast.this
    if not isinstance(definition, exp.Schema) or ast.args.get("expression") is not None:
        return _unsupported(
            "CREATE TABLE without an explicit column list cannot be simulated", "CREATE TABLE"
        )

    table = _require_name(definition.this, "table name")
    columns: list[ColumnDef] = []
    primary_key_declarations = 0
    pk_columns: list[str] = []
    fk_columns: list[str] = []

    for item in definition.expressions:
        if isinstance(item, exp.ColumnDef):
            column = _column_from_def(item, dialect)
            if column.is_primary_key:
                primary_key_declarations += 1
            columns.append(column)
            continue

        if isinstance(item, (exp.Identifier, exp.Column)):
            raise MalformedOperandError(f"column '{item.name}' has no data type")

        primary_key = item if isinstance(item, exp.PrimaryKey) else item.find(exp.PrimaryKey)
        if primary_key is not None:
            primary_key_declarations += 1
            for entry in primary_key.expressions:
                pk_columns.extend(_identifier_names(entry))

        foreign_key = item if isinstance(item, exp.ForeignKey) else item.find(exp.ForeignKey)
        if foreign_key is not None:
            for entry in foreign_key.expressions:
                fk_columns.extend(_identifier_names(entry))

    if not columns:
        raise MalformedOperandError(f"CREATE TABLE {table} has no column definitions")

    # Table-level constraints set the key flags on the columns they name.
    flagged = []
    for column in columns:
        in_pk = any(names_match(column.name, name) for name in pk_columns)
        in_fk = any(names_match(column.name, name) for name in fk_columns)
        if in_pk or in_fk:
            column = column.model_copy(
                update={
                    "is_primary_key": column.is_primary_key or in_pk,
                    "is_nullable": column.is_nullable and not in_pk,
                    "is_foreign_key": column.is_foreign_key or in_fk,
                }
            )
        flagged.append(column)

    return CreateTable(
        table=table,
        columns=flagged,
        primary_key_declarations=primary_key_declarations,
        constraint_columns=list(dict.fromkeys(pk_columns + fk_columns)),
    )


def _classify_create_index(ast: exp.Create) -> ClassificationResult:
    index = ast.this
    if not isinstance(index, exp.Index):
        raise MalformedOperandError("CREATE INDEX without an index definition")

    index_name = _require_name(index, "index name")
    table = _require_name(index.args.get("table"), "table name")

    params = index.args.get("params")
    entries = (params.args.get("columns") or []) if params is not None else []
    if not entries:
        raise MalformedOperandError(f"CREATE INDEX {index_name} has no column list")
    if len(entries) > 1:
        return _unsupported("multi-column indexes cannot be simulated", "CREATE INDEX")

    target = entries[0].this if isinstance(entries[0], exp.Ordered) else entries[0]
    if not isinstance(target, exp.Column):
        return _unsupported("expression indexes cannot be simulated", "CREATE INDEX")

    return CreateIndex(
        index=index_name,
        table=table,
        column=_require_name(target, "column name"),
        unique=bool(ast.args.get("unique")),
    )


def _classify_create(ast: exp.Create, dialect: str) -> ClassificationResult:
    kind = str(ast.args.get("kind") or "").upper()
    if kind == "TABLE":
        return _classify_create_table(ast, dialect)
    if kind == "INDEX":
        return _classify_create_index(ast)
    return _unsupported(f"CREATE {kind} statements cannot be simulated", f"CREATE {kind}")


def classify(sql: str, dialect: Optional[str] = None) -> ClassificationResult:
    """Classify a SQL statement into a supported DDL operation.

    Args:
        sql: Untrusted SQL text, typically generated by an LLM.
        dialect: sqlglot dialect name or alias. Defaults to postgres.

    Returns:
        An operation descriptor, or ``Unrecognized`` naming why the statement
        cannot be simulated.
    """
    if not isinstance(sql, str) or not sql.strip():
        return _unsupported("empty SQL")

    dialect = normalize_sqlglot_dialect(dialect)
    ast, error = parse_statement(sql, dialect)
    if error:
        return _unsupported(error)

    try:
        if isinstance(ast, exp.Alter):
            return _classify_alter(ast, dialect)
        if isinstance(ast, exp.Create):
            return _classify_create(ast, dialect)
    except MalformedOperandError as e:
        label = _statement_label(ast)
        logger.debug("Malformed operand in %s statement: %s", label, e)
        return _unsupported(f"malformed {label} statement ({e})", label)

    label = _statement_label(ast)
    return _unsupported(f"{label} statements cannot be simulated", label)
