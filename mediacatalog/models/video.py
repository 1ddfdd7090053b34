"""Video data model for the mediacatalog package."""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from mediacatalog.config.settings import (
    DEFAULT_USERNAME,
    FALLBACK_CATEGORY_ID,
    LEGACY_VIDEO_TYPE_ALIASES,
    VIDEO_TYPE_PHOTOS,
    VIDEO_TYPE_YOUTUBE,
)
from mediacatalog.models.record import extra_fields, optional_int, require_str

VIDEO_TYPES = {VIDEO_TYPE_YOUTUBE, VIDEO_TYPE_PHOTOS}

_COMMENT_FIELDS = ("id", "text", "username", "createdAt")
_VIDEO_FIELDS = (
    "id", "title", "url", "category", "thumbnail", "description",
    "favorite", "createdAt", "videoType", "lastWatched", "comments",
)


@dataclass
class Comment:
    """
    A comment left on a video.

    Comments belong to exactly one video and are only ever appended.
    """

    id: str = ''
    text: str = ''
    username: str = DEFAULT_USERNAME
    created_at: int = 0
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Comment":
        """Build a Comment from its persisted form."""
        return cls(
            id=require_str(data, "id"),
            text=str(data.get("text", "")),
            username=data.get("username") or DEFAULT_USERNAME,
            created_at=optional_int(data.get("createdAt")) or 0,
            extra=extra_fields(data, _COMMENT_FIELDS),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the persisted form of this comment."""
        result: Dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "username": self.username,
            "createdAt": self.created_at,
        }
        result.update(copy.deepcopy(self.extra))
        return result


@dataclass
class Video:
    """
    Data class representing a bookmarked video or photo collection.

    This class holds:
    - The link itself (url, optional thumbnail and description)
    - Its category id, which must always name an existing category
    - Per-item state (favorite flag, last watched time, comments)

    Fields the model does not know about are kept in ``extra`` so a
    record written by another version round-trips unchanged.
    """

    id: str = ''
    title: str = ''
    url: str = ''
    category: str = FALLBACK_CATEGORY_ID
    thumbnail: Optional[str] = None
    description: Optional[str] = None
    favorite: bool = False
    created_at: int = 0
    video_type: str = VIDEO_TYPE_YOUTUBE
    last_watched: Optional[int] = None
    comments: List[Comment] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Video":
        """
        Build a Video from its persisted form.

        Args:
            data: Decoded JSON object.

        Returns:
            Video instance.

        Raises:
            ValueError: If a mandatory field is missing or malformed.
        """
        if not isinstance(data, Mapping):
            raise ValueError("Video record is not an object")

        video_type = data.get("videoType") or VIDEO_TYPE_YOUTUBE
        video_type = LEGACY_VIDEO_TYPE_ALIASES.get(video_type, video_type)

        raw_comments = data.get("comments") or []
        if not isinstance(raw_comments, list):
            raise ValueError("Field 'comments' is not a list")

        return cls(
            id=require_str(data, "id"),
            title=str(data.get("title", "")),
            url=str(data.get("url", "")),
            category=str(data.get("category") or ""),
            thumbnail=data.get("thumbnail"),
            description=data.get("description"),
            favorite=bool(data.get("favorite", False)),
            created_at=optional_int(data.get("createdAt")) or 0,
            video_type=video_type,
            last_watched=optional_int(data.get("lastWatched")),
            comments=[Comment.from_dict(c) for c in raw_comments],
            extra=extra_fields(data, _VIDEO_FIELDS),
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Return the persisted form of this video.

        Optional fields that are unset are omitted. Key order is fixed so
        that encoding the same video twice yields the same text.
        """
        result: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "category": self.category,
        }
        if self.thumbnail is not None:
            result["thumbnail"] = self.thumbnail
        if self.description is not None:
            result["description"] = self.description
        result["favorite"] = self.favorite
        result["createdAt"] = self.created_at
        result["videoType"] = self.video_type
        if self.last_watched is not None:
            result["lastWatched"] = self.last_watched
        result["comments"] = [comment.to_dict() for comment in self.comments]
        result.update(copy.deepcopy(self.extra))
        return result

    def is_youtube(self) -> bool:
        """Check if this entry is a YouTube video."""
        return self.video_type == VIDEO_TYPE_YOUTUBE

    def is_photos(self) -> bool:
        """Check if this entry is a photo collection."""
        return self.video_type == VIDEO_TYPE_PHOTOS

    def copy(self) -> "Video":
        """Return an independent deep copy."""
        return copy.deepcopy(self)
