"""Identifier and timestamp helpers."""

import time
import uuid


def now_ms() -> int:
    """Return the current time as integer milliseconds since the epoch."""
    return int(time.time() * 1000)


def generate_id(prefix: str = "") -> str:
    """
    Generate a fresh opaque identifier.

    The millisecond timestamp keeps ids roughly sortable by creation time,
    the random suffix makes two ids generated in the same millisecond differ.

    Args:
        prefix: Optional prefix such as "playlist-".

    Returns:
        New identifier string.
    """
    return f"{prefix}{now_ms()}-{uuid.uuid4().hex[:8]}"
