"""Typed environment variable parsing helpers."""

import os
from typing import List, Optional


def _read(name: str, required: bool) -> Optional[str]:
    value = os.getenv(name)
    if value is None and required:
        raise KeyError(f"Environment variable '{name}' is required but not set.")
    return value


def get_env_str(name: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
    """Get an environment variable as a string."""
    value = _read(name, required)
    return default if value is None else value


def get_env_int(name: str, default: Optional[int] = None, required: bool = False) -> Optional[int]:
    """Get an environment variable as an integer."""
    value = _read(name, required)
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        raise ValueError(f"Environment variable '{name}' must be an integer, got '{value}'.")


def get_env_list(
    name: str, default: Optional[List[str]] = None, required: bool = False, separator: str = ","
) -> Optional[List[str]]:
    """Get an environment variable as a list of non-empty strings."""
    value = _read(name, required)
    if value is None:
        return default
    return [item.strip() for item in value.split(separator) if item.strip()]
