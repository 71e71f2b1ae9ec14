"""Shared utilities for SQL dialect handling."""

from typing import Optional

DEFAULT_DIALECT = "postgres"

# Aliases users type for the databases the sandbox can describe.
_DIALECT_ALIASES = {
    "postgresql": "postgres",
    "pg": "postgres",
    "mariadb": "mysql",
    "sqlite3": "sqlite",
    "mssql": "tsql",
    "sqlserver": "tsql",
    "sql server": "tsql",
    "duck": "duckdb",
}


def normalize_sqlglot_dialect(dialect: Optional[str]) -> str:
    """Normalize a dialect name for use with sqlglot.

    Args:
        dialect: The dialect name to normalize (e.g., 'PostgreSQL', 'MSSQL').

    Returns:
        A lowercase dialect name understood by sqlglot.
    """
    if not dialect or not dialect.strip():
        return DEFAULT_DIALECT

    d = dialect.lower().strip()
    return _DIALECT_ALIASES.get(d, d)
