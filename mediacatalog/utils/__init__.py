"""Utility functions."""

from mediacatalog.utils.ids import generate_id, now_ms
from mediacatalog.utils.text import slugify, normalize_name

__all__ = [
    "generate_id",
    "now_ms",
    "slugify",
    "normalize_name",
]
