"""Tests for typed environment variable helpers."""

import pytest

from common.config.env import get_env_int, get_env_list, get_env_str


class TestGetEnv:
    """Tests for the get_env_* helpers."""

    def test_str_default_and_value(self, monkeypatch):
        """Strings fall back to the default when unset."""
        monkeypatch.delenv("SANDBOX_TEST_VALUE", raising=False)
        assert get_env_str("SANDBOX_TEST_VALUE", "fallback") == "fallback"
        monkeypatch.setenv("SANDBOX_TEST_VALUE", "set")
        assert get_env_str("SANDBOX_TEST_VALUE", "fallback") == "set"

    def test_required_missing_raises(self, monkeypatch):
        """Required variables raise KeyError when unset."""
        monkeypatch.delenv("SANDBOX_TEST_VALUE", raising=False)
        with pytest.raises(KeyError):
            get_env_str("SANDBOX_TEST_VALUE", required=True)

    def test_int_parsing(self, monkeypatch):
        """Integers are parsed and invalid values raise ValueError."""
        monkeypatch.setenv("SANDBOX_TEST_VALUE", " 42 ")
        assert get_env_int("SANDBOX_TEST_VALUE") == 42
        monkeypatch.setenv("SANDBOX_TEST_VALUE", "forty-two")
        with pytest.raises(ValueError):
            get_env_int("SANDBOX_TEST_VALUE")

    def test_list_parsing(self, monkeypatch):
        """Lists drop empty entries and surrounding whitespace."""
        monkeypatch.setenv("SANDBOX_TEST_VALUE", "a, b,,c ")
        assert get_env_list("SANDBOX_TEST_VALUE") == ["a", "b", "c"]
