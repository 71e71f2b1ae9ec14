"""Tests for sandbox runtime settings."""

import pytest

from common.config.settings import (
    DEFAULT_CORS_ORIGINS,
    get_cors_origins,
    get_history_buffer_size,
    get_sql_dialect,
)


def test_defaults():
    """Unset variables resolve to defaults."""
    assert get_sql_dialect() == "postgres"
    assert get_history_buffer_size() == 200
    assert get_cors_origins() == DEFAULT_CORS_ORIGINS


def test_dialect_alias_is_normalized(monkeypatch):
    """Dialect aliases map to sqlglot names."""
    monkeypatch.setenv("SANDBOX_SQL_DIALECT", "PostgreSQL")
    assert get_sql_dialect() == "postgres"
    monkeypatch.setenv("SANDBOX_SQL_DIALECT", "mssql")
    assert get_sql_dialect() == "tsql"


def test_history_buffer_size_has_floor(monkeypatch):
    """Buffer size never drops below one."""
    monkeypatch.setenv("SANDBOX_HISTORY_BUFFER_SIZE", "0")
    assert get_history_buffer_size() == 1


def test_history_buffer_size_invalid(monkeypatch):
    """Non-integer buffer sizes are configuration errors."""
    monkeypatch.setenv("SANDBOX_HISTORY_BUFFER_SIZE", "lots")
    with pytest.raises(ValueError):
        get_history_buffer_size()


def test_cors_origins_from_env(monkeypatch):
    """CORS origins are read as a comma-separated list."""
    monkeypatch.setenv("SANDBOX_CORS_ORIGINS", "https://a.example, https://b.example")
    assert get_cors_origins() == ["https://a.example", "https://b.example"]
