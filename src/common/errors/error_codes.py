"""Canonical error codes for simulation outcomes on external contracts."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Bounded error codes reported alongside rejected simulations."""

    UNSUPPORTED_STATEMENT = "UNSUPPORTED_STATEMENT"
    VALIDATION_VIOLATION = "VALIDATION_VIOLATION"
    INTERNAL_ERROR = "INTERNAL_ERROR"


_REASON_TO_CODE: dict[str, ErrorCode] = {
    "unsupported": ErrorCode.UNSUPPORTED_STATEMENT,
    "invalid": ErrorCode.VALIDATION_VIOLATION,
}


def error_code_for_rejection(
    reason: Any, *, fallback: ErrorCode = ErrorCode.INTERNAL_ERROR
) -> ErrorCode:
    """Resolve the error code for a rejection reason (enum or string)."""
    value = getattr(reason, "value", reason)
    if value is None:
        return fallback
    return _REASON_TO_CODE.get(str(value).strip().lower(), fallback)

