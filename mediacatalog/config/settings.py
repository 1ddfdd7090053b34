"""Configuration settings and constants for the mediacatalog package."""

from pathlib import Path
from typing import List, Tuple

# Substrate keys, one per collection
VIDEOS_KEY: str = "catalog.videos"
CATEGORIES_KEY: str = "catalog.categories"
PLAYLISTS_KEY: str = "catalog.playlists"

COLLECTION_KEYS: Tuple[str, ...] = (VIDEOS_KEY, CATEGORIES_KEY, PLAYLISTS_KEY)

# Version written in the persisted envelope {"version": ..., "data": [...]}
ENVELOPE_VERSION: int = 1

# Category absorbing videos whose category was deleted
FALLBACK_CATEGORY_ID: str = "aptitude"

# Categories created on first run, in display order
DEFAULT_CATEGORY_NAMES: List[str] = ["Aptitude", "Reasoning", "English"]

# Video types
VIDEO_TYPE_YOUTUBE: str = "youtube"
VIDEO_TYPE_PHOTOS: str = "photos"

# Older records stored photo collections under this name
LEGACY_VIDEO_TYPE_ALIASES = {"googlephotos": VIDEO_TYPE_PHOTOS}

# Id prefixes for generated identifiers
PLAYLIST_ID_PREFIX: str = "playlist-"
COMMENT_ID_PREFIX: str = "comment-"

DEFAULT_USERNAME: str = "Anonymous"

# Database
DEFAULT_DB_PATH = Path("mediacatalog.db")
DB_PATH_ENV_VAR: str = "MEDIACATALOG_DB"
KV_TABLE: str = "kv_store"
SQLITE_TIMEOUT_SECONDS: float = 10.0

# Log file
LOG_FILENAME: str = "mediacatalog.log"
