"""Catalog store and the operations over its collections."""

from mediacatalog.catalog.store import CatalogStore, resolve_db_path
from mediacatalog.catalog.videos import VideoRepository
from mediacatalog.catalog.categories import CategoryRepository
from mediacatalog.catalog.playlists import PlaylistRepository, MembershipChange
from mediacatalog.catalog.validation import validate_category_name, validate_new_category
from mediacatalog.catalog.query import SortOption, search_videos, sort_videos
from mediacatalog.catalog.seed import seed_if_empty, ensure_default_categories

__all__ = [
    "CatalogStore",
    "resolve_db_path",
    "VideoRepository",
    "CategoryRepository",
    "PlaylistRepository",
    "MembershipChange",
    "validate_category_name",
    "validate_new_category",
    "SortOption",
    "search_videos",
    "sort_videos",
    "seed_if_empty",
    "ensure_default_categories",
]
