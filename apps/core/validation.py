"""Pre-write validation helpers for the service layer."""
from typing import Any

from .errors import InvalidArgument


def require_text(field: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgument(f"Field '{field}' is required")
    return value


def require_bool(field: str, value: Any) -> bool:
    # bool is checked explicitly; 0/1 and "true" are not accepted
    if not isinstance(value, bool):
        raise InvalidArgument(f"Field '{field}' must be a boolean")
    return value
