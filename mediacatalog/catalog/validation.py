"""Caller-side validation of category names.

The repositories accept whatever they are given; these checks run before a
name reaches them.
"""

from typing import Iterable, Optional

from mediacatalog.models.category import CategorySettings
from mediacatalog.storage.exceptions import CategoryValidationError
from mediacatalog.utils.text import normalize_name, slugify


def validate_category_name(
    name: str,
    categories: Iterable[CategorySettings],
    exclude_id: Optional[str] = None,
) -> str:
    """
    Check that a name is usable for a category.

    Args:
        name: Proposed display name.
        categories: Existing categories.
        exclude_id: Category being renamed, ignored in the duplicate check.

    Returns:
        The stripped name.

    Raises:
        CategoryValidationError: If the name is empty or already used
            (case-insensitive).
    """
    cleaned = name.strip()
    if not cleaned:
        raise CategoryValidationError("Category name cannot be empty")

    wanted = normalize_name(cleaned)
    for category in categories:
        if category.id != exclude_id and normalize_name(category.name) == wanted:
            raise CategoryValidationError(f"A category named '{category.name}' already exists")
    return cleaned


def validate_new_category(name: str, categories: Iterable[CategorySettings]) -> str:
    """
    Check a name for a category about to be created.

    Besides the name rules, the slug derived from the name must not collide
    with an existing id.

    Returns:
        The stripped name.

    Raises:
        CategoryValidationError: If the name or its slug is already used.
    """
    existing = list(categories)
    cleaned = validate_category_name(name, existing)
    slug = slugify(cleaned)
    if any(category.id == slug for category in existing):
        raise CategoryValidationError(f"Category id '{slug}' is already used")
    return cleaned
