"""Runtime settings for the DDL sandbox, resolved from the environment."""

from typing import List

from common.config.env import get_env_int, get_env_list, get_env_str
from common.sql.dialect import normalize_sqlglot_dialect

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


def get_sql_dialect() -> str:
    """Return the sqlglot dialect used to read generated SQL."""
    return normalize_sqlglot_dialect(get_env_str("SANDBOX_SQL_DIALECT", "postgres"))


def get_history_buffer_size() -> int:
    """Return how many transformation records the service retains."""
    size = get_env_int("SANDBOX_HISTORY_BUFFER_SIZE", 200)
    return max(1, int(size))


def get_cors_origins() -> List[str]:
    """Return allowed CORS origins for the HTTP service."""
    return get_env_list("SANDBOX_CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
