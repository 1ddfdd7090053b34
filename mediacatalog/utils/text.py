"""Text helpers for category names."""

import re


def normalize_name(name: str) -> str:
    """
    Normalize a display name for comparison.

    Args:
        name: Raw category name.

    Returns:
        Stripped, case-folded name.
    """
    return name.strip().casefold()


def slugify(name: str) -> str:
    """
    Build the stable category id for a name.

    Lower-cases the name and replaces each run of whitespace with "-".
    The name is not stripped first: callers that want a clean slug pass
    an already validated name.

    Args:
        name: Category display name.

    Returns:
        Slug usable as a category id.

    Example:
        >>> slugify("Quantitative  Aptitude")
        'quantitative-aptitude'
    """
    return re.sub(r"\s+", "-", name.lower())
