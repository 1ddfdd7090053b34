"""Data models for the media catalog."""

from mediacatalog.models.video import Video, Comment, VIDEO_TYPES
from mediacatalog.models.category import CategorySettings
from mediacatalog.models.playlist import Playlist

__all__ = ["Video", "Comment", "VIDEO_TYPES", "CategorySettings", "Playlist"]
