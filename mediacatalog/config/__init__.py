"""Configuration and CLI handling."""

from mediacatalog.config.settings import (
    VIDEOS_KEY,
    CATEGORIES_KEY,
    PLAYLISTS_KEY,
    COLLECTION_KEYS,
    ENVELOPE_VERSION,
    FALLBACK_CATEGORY_ID,
    DEFAULT_CATEGORY_NAMES,
    VIDEO_TYPE_YOUTUBE,
    VIDEO_TYPE_PHOTOS,
    DEFAULT_DB_PATH,
    DB_PATH_ENV_VAR,
    KV_TABLE,
)

__all__ = [
    "VIDEOS_KEY",
    "CATEGORIES_KEY",
    "PLAYLISTS_KEY",
    "COLLECTION_KEYS",
    "ENVELOPE_VERSION",
    "FALLBACK_CATEGORY_ID",
    "DEFAULT_CATEGORY_NAMES",
    "VIDEO_TYPE_YOUTUBE",
    "VIDEO_TYPE_PHOTOS",
    "DEFAULT_DB_PATH",
    "DB_PATH_ENV_VAR",
    "KV_TABLE",
]
