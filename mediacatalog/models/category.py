"""Category data model."""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from mediacatalog.models.record import extra_fields, require_number, require_str

_CATEGORY_FIELDS = ("id", "name", "order")


@dataclass
class CategorySettings:
    """
    A user-defined category.

    Attributes:
        id: Stable slug derived from the name at creation time.
        name: Display name, may be renamed freely.
        order: Zero-based display rank among all categories.
    """

    id: str = ''
    name: str = ''
    order: int = 0
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CategorySettings":
        """Build a category from its persisted form."""
        if not isinstance(data, Mapping):
            raise ValueError("Category record is not an object")
        return cls(
            id=require_str(data, "id"),
            name=str(data.get("name", "")),
            order=require_number(data.get("order", 0)),
            extra=extra_fields(data, _CATEGORY_FIELDS),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the persisted form of this category."""
        result: Dict[str, Any] = {"id": self.id, "name": self.name, "order": self.order}
        result.update(copy.deepcopy(self.extra))
        return result
