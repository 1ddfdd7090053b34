"""Playlist data model."""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from mediacatalog.models.record import extra_fields, optional_int, require_str

_PLAYLIST_FIELDS = ("id", "name", "description", "videoIds", "createdAt")


@dataclass
class Playlist:
    """
    An ordered list of video ids.

    Insertion order is display order; a video id appears at most once.
    """

    id: str = ''
    name: str = ''
    description: Optional[str] = None
    video_ids: List[str] = field(default_factory=list)
    created_at: int = 0
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Playlist":
        """Build a Playlist from its persisted form."""
        if not isinstance(data, Mapping):
            raise ValueError("Playlist record is not an object")
        video_ids = data.get("videoIds") or []
        if not isinstance(video_ids, list):
            raise ValueError("Field 'videoIds' is not a list")
        return cls(
            id=require_str(data, "id"),
            name=str(data.get("name", "")),
            description=data.get("description"),
            video_ids=[str(video_id) for video_id in video_ids],
            created_at=optional_int(data.get("createdAt")) or 0,
            extra=extra_fields(data, _PLAYLIST_FIELDS),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the persisted form of this playlist."""
        result: Dict[str, Any] = {"id": self.id, "name": self.name}
        if self.description is not None:
            result["description"] = self.description
        result["videoIds"] = list(self.video_ids)
        result["createdAt"] = self.created_at
        result.update(copy.deepcopy(self.extra))
        return result

    def contains(self, video_id: str) -> bool:
        """Check if the playlist lists a video."""
        return video_id in self.video_ids
