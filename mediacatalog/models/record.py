"""Helpers shared by the persisted record types."""

import math
from typing import Any, Dict, Iterable, Mapping, Optional


def require_str(data: Mapping[str, Any], key: str) -> str:
    """
    Read a mandatory string field from a decoded record.

    Args:
        data: Decoded JSON object.
        key: Field name.

    Returns:
        The field value.

    Raises:
        ValueError: If the field is missing or not a string.
    """
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"Field '{key}' missing or not a string")
    return value


def require_number(value: Any) -> int:
    """
    Coerce a decoded JSON number to int.

    Raises:
        ValueError: If the value is not a finite number (JSON accepts
            Infinity and NaN).
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Expected a number, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"Expected a finite number, got {value!r}")
    return int(value)


def optional_int(value: Any) -> Optional[int]:
    """Coerce a numeric timestamp to int, leaving None untouched."""
    if value is None:
        return None
    return require_number(value)


def extra_fields(data: Mapping[str, Any], known: Iterable[str]) -> Dict[str, Any]:
    """Return the fields of a record that the model does not declare."""
    known_keys = set(known)
    return {key: value for key, value in data.items() if key not in known_keys}
