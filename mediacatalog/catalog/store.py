"""Catalog store: the handle owning videos, categories and playlists."""

import os
import threading
from pathlib import Path
from typing import List, Optional

from loguru import logger

from mediacatalog.catalog.categories import CategoryRepository
from mediacatalog.catalog.playlists import PlaylistRepository
from mediacatalog.catalog.validation import validate_category_name, validate_new_category
from mediacatalog.catalog.videos import VideoRepository
from mediacatalog.config.settings import DB_PATH_ENV_VAR, DEFAULT_DB_PATH, FALLBACK_CATEGORY_ID
from mediacatalog.models.category import CategorySettings
from mediacatalog.models.video import Video
from mediacatalog.storage.codec import RecordCodec, decode_strict, encode
from mediacatalog.storage.exceptions import CategoryValidationError
from mediacatalog.storage.substrate import KeyValueStore, SQLiteStore


def resolve_db_path(db_path: Optional[Path] = None) -> Path:
    """
    Pick the database file.

    Order: explicit argument, then the MEDIACATALOG_DB environment
    variable, then mediacatalog.db in the working directory.
    """
    if db_path:
        return Path(db_path)
    env_path = os.getenv(DB_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_DB_PATH


class CatalogStore:
    """
    Explicit handle over one catalog.

    Owns the three collections through ``videos``, ``categories`` and
    ``playlists``, and adds the operations that span collections. Every
    read-modify-write runs under ``lock`` so the store can be shared
    between threads of one process; several processes writing the same
    database are not supported.

    Attributes:
        substrate: Key-value store holding the persisted collections.
        codec: Record codec bound to the substrate.
        fallback_category: Category id absorbing orphaned videos.
        lock: Re-entrant lock serializing mutations.
    """

    def __init__(
        self,
        substrate: KeyValueStore,
        fallback_category: str = FALLBACK_CATEGORY_ID,
    ) -> None:
        self.substrate = substrate
        self.codec = RecordCodec(substrate)
        self.fallback_category = fallback_category
        self.lock = threading.RLock()

        self.videos = VideoRepository(self)
        self.categories = CategoryRepository(self)
        self.playlists = PlaylistRepository(self)

    @classmethod
    def open(cls, db_path: Optional[Path] = None, seed: bool = True) -> "CatalogStore":
        """
        Open a SQLite-backed catalog, seeding it on first use.

        Args:
            db_path: Database file (see ``resolve_db_path``).
            seed: If True, import the starter catalog when empty.

        Returns:
            Ready-to-use store.
        """
        from mediacatalog.catalog.seed import ensure_default_categories, seed_if_empty

        path = resolve_db_path(db_path)
        store = cls(SQLiteStore(path))
        logger.debug(f"Opened catalog at {path}")
        if seed:
            seed_if_empty(store)
        else:
            ensure_default_categories(store)
        return store

    def create_category(self, name: str) -> List[CategorySettings]:
        """
        Validate and add a category in one call.

        Raises:
            CategoryValidationError: If the name is empty or already used.
        """
        with self.lock:
            cleaned = validate_new_category(name, self.categories.get_all())
            return self.categories.add(cleaned)

    def rename_category(self, category_id: str, name: str) -> List[CategorySettings]:
        """
        Validate and apply a new display name.

        The id is kept, so no video needs to change. Unknown ids are a no-op.

        Raises:
            CategoryValidationError: If the name is empty or used by another category.
        """
        with self.lock:
            categories = self.categories.get_all()
            if not any(c.id == category_id for c in categories):
                return categories
            cleaned = validate_category_name(name, categories, exclude_id=category_id)
            return self.categories.update(category_id, name=cleaned)

    def remove_category(
        self,
        category_id: str,
        reassign_to: Optional[str] = None,
    ) -> List[CategorySettings]:
        """
        Delete a category and move its videos, as one unit.

        Both collections are written in a single substrate batch.

        Args:
            category_id: Category to delete.
            reassign_to: Target category for its videos, the fallback if None.

        Returns:
            The remaining categories. Unknown ids are a no-op.

        Raises:
            CategoryValidationError: If the category is the reassignment
                target itself or the target does not exist.
        """
        with self.lock:
            categories = self.categories.get_all()
            known = {c.id for c in categories}
            if category_id not in known:
                return categories

            target = reassign_to or self.fallback_category
            if target == category_id:
                raise CategoryValidationError(
                    f"Category '{category_id}' receives orphaned videos and cannot be deleted"
                )
            if target not in known:
                raise CategoryValidationError(f"Target category '{target}' does not exist")

            with self.substrate.batch():
                remaining = self.categories.delete(category_id)
                moved = self.videos.reassign_category(category_id, target)
            logger.info(f"Removed category {category_id}, {moved} video(s) moved to {target}")
            return remaining

    def export_videos(self) -> str:
        """Return the video library in its persisted envelope format."""
        with self.lock:
            return encode(self.videos.get_all())

    def import_videos(self, text: str) -> List[Video]:
        """
        Replace the video library with an exported one.

        The whole file is validated before anything is written. Videos and
        the playlist entries that no longer resolve are written in one
        substrate batch.

        Args:
            text: Export produced by ``export_videos``, or a bare JSON
                array of video records.

        Returns:
            The imported videos, as stored.

        Raises:
            InvalidFormatError: If the text is not a readable video library.
        """
        incoming = decode_strict(text, Video.from_dict)
        with self.lock, self.substrate.batch():
            stored = self.videos.replace_all(incoming)
            pruned = self.playlists.retain_videos({v.id for v in stored})
        logger.info(f"Imported {len(stored)} video(s), {pruned} playlist entries dropped")
        return stored

    def clear_videos(self) -> int:
        """
        Remove every video, emptying playlists in the same batch.

        Categories and playlists themselves are kept.

        Returns:
            Number of videos removed.
        """
        with self.lock, self.substrate.batch():
            count = len(self.videos.get_all())
            self.videos.replace_all([])
            self.playlists.retain_videos(set())
        logger.info(f"Cleared {count} video(s) from the library")
        return count

    def is_empty(self) -> bool:
        """True when the catalog holds no video."""
        return not self.videos.get_all()

    def close(self) -> None:
        """Close the underlying substrate."""
        self.substrate.close()

    def __enter__(self) -> "CatalogStore":
        """Context manager entry - return the instance."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - close the substrate."""
        self.close()
