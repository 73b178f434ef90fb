"""Helpers for reading loosely shaped API payloads."""

from collections.abc import Mapping
from typing import Any


def pick(data: Mapping[str, Any] | None, *keys: str, default: Any = None) -> Any:
    """Return the first non-None value found under any of the given keys.

    The API spells the same field several ways (TOKEN/token, razonSocial/
    razon_social, estado/status), so lookups try each spelling in order.

    Args:
        data: Payload to read from
        keys: Candidate keys, highest precedence first
        default: Returned when no key holds a value

    Returns:
        The first value that is not None, otherwise default
    """
    if not isinstance(data, Mapping):
        return default
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return default


def is_blank(value: Any) -> bool:
    """True for None and whitespace-only strings. Zero is not blank."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def truncate(value: str | None, limit: int) -> str | None:
    """Cut a string to at most limit characters, passing None through."""
    if value is None:
        return None
    return value[:limit]


def compact(data: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None, keeping insertion order."""
    return {key: value for key, value in data.items() if value is not None}
