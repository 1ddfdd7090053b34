"""Category collection operations."""

from typing import TYPE_CHECKING, Any, List, Optional, Sequence, Set, Union

from loguru import logger

from mediacatalog.config.settings import CATEGORIES_KEY
from mediacatalog.models.category import CategorySettings
from mediacatalog.utils.text import slugify

if TYPE_CHECKING:
    from mediacatalog.catalog.store import CatalogStore


def _renumber(categories: List[CategorySettings]) -> List[CategorySettings]:
    """Set each category's order to its position in the list."""
    for index, category in enumerate(categories):
        category.order = index
    return categories


class CategoryRepository:
    """
    Reads and mutates the Categories collection.

    Mutators return the whole post-mutation collection so callers never
    need a separate re-fetch. No method here validates names: that is the
    job of ``mediacatalog.catalog.validation`` or of the atomic operations
    on ``CatalogStore``.
    """

    def __init__(self, store: "CatalogStore") -> None:
        self._store = store

    def _load(self) -> List[CategorySettings]:
        return self._store.codec.load(CATEGORIES_KEY, CategorySettings)

    def _save(self, categories: List[CategorySettings]) -> None:
        self._store.codec.save(CATEGORIES_KEY, categories)

    def get_all(self) -> List[CategorySettings]:
        """
        Return the categories in stored order.

        Stored order is not guaranteed to follow ``order``; use
        ``get_sorted`` for display.
        """
        return self._load()

    def get_sorted(self) -> List[CategorySettings]:
        """Return the categories sorted by display order."""
        return sorted(self._load(), key=lambda c: c.order)

    def get_by_id(self, category_id: str) -> Optional[CategorySettings]:
        """Return the category with this id, or None."""
        return next((c for c in self._load() if c.id == category_id), None)

    def ids(self) -> Set[str]:
        """Return the set of existing category ids."""
        return {c.id for c in self._load()}

    def add(self, name: str) -> List[CategorySettings]:
        """
        Append a category named ``name``.

        Its id is the slug of the name and its order the current count.
        """
        with self._store.lock:
            categories = self._load()
            category = CategorySettings(id=slugify(name), name=name, order=len(categories))
            categories.append(category)
            self._save(categories)
            logger.debug(f"Added category {category.id}")
            return categories

    def update(self, category_id: str, **updates: Any) -> List[CategorySettings]:
        """
        Merge fields into a category, typically ``name``.

        The id never changes; an ``id`` key in ``updates`` is ignored.
        Nothing is written if the id is absent.
        """
        updates.pop("id", None)
        with self._store.lock:
            categories = self._load()
            target = next((c for c in categories if c.id == category_id), None)
            if target is None:
                return categories

            for field_name, value in updates.items():
                if field_name in ("name", "order"):
                    setattr(target, field_name, value)
                else:
                    target.extra[field_name] = value
            self._save(categories)
            logger.debug(f"Updated category {category_id}: {sorted(updates)}")
            return categories

    def delete(self, category_id: str) -> List[CategorySettings]:
        """
        Remove a category and close the gap in display order.

        Videos are not touched: the caller must follow up with
        ``VideoRepository.reassign_category`` (or use
        ``CatalogStore.remove_category``, which does both).
        """
        with self._store.lock:
            categories = self._load()
            remaining = [c for c in categories if c.id != category_id]
            if len(remaining) == len(categories):
                return categories

            remaining = _renumber(sorted(remaining, key=lambda c: c.order))
            self._save(remaining)
            logger.debug(f"Deleted category {category_id}")
            return remaining

    def reorder(self, sequence: Sequence[Union[CategorySettings, str]]) -> List[CategorySettings]:
        """
        Reassign display order from a sequence.

        Each category gets ``order`` equal to its position in ``sequence``.
        Stored categories missing from the sequence keep their relative
        order after it; ids that do not exist are ignored. Ids and names are
        never changed.

        Args:
            sequence: Categories or category ids in the desired order.

        Returns:
            The collection with orders exactly 0..n-1.
        """
        wanted = [item.id if isinstance(item, CategorySettings) else item for item in sequence]
        with self._store.lock:
            by_id = {c.id: c for c in self._load()}
            ordered: List[CategorySettings] = []
            for category_id in wanted:
                category = by_id.pop(category_id, None)
                if category is not None:
                    ordered.append(category)
            ordered.extend(sorted(by_id.values(), key=lambda c: c.order))

            _renumber(ordered)
            self._save(ordered)
            return ordered

    def ensure_defaults(self, names: Sequence[str]) -> List[CategorySettings]:
        """Create the given categories if the collection is empty."""
        with self._store.lock:
            categories = self._load()
            if categories:
                return categories
            categories = [
                CategorySettings(id=slugify(name), name=name, order=index)
                for index, name in enumerate(names)
            ]
            self._save(categories)
            logger.info(f"Initialized {len(categories)} default categories")
            return categories
