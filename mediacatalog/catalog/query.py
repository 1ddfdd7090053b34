"""Search, filter and sort helpers over a list of videos."""

from enum import Enum
from typing import Iterable, List, Optional

from mediacatalog.models.video import Video

ALL_CATEGORIES = "all"
PHOTOS_FILTER = "photos"


class SortOption(Enum):
    """Orderings offered when listing videos."""

    NEWEST = "newest"
    OLDEST = "oldest"
    ALPHABETICAL = "alphabetical"
    LAST_WATCHED = "lastWatched"


def matches_category(video: Video, category: Optional[str]) -> bool:
    """
    Check a video against a category filter.

    ``None`` and "all" match everything, "photos" matches photo
    collections, anything else is a category id.
    """
    if category is None or category == ALL_CATEGORIES:
        return True
    if category == PHOTOS_FILTER:
        return video.is_photos()
    return video.category == category


def sort_videos(videos: Iterable[Video], sort: SortOption = SortOption.NEWEST) -> List[Video]:
    """Return the videos in the requested order."""
    items = list(videos)
    if sort is SortOption.NEWEST:
        return sorted(items, key=lambda v: v.created_at, reverse=True)
    if sort is SortOption.OLDEST:
        return sorted(items, key=lambda v: v.created_at)
    if sort is SortOption.ALPHABETICAL:
        return sorted(items, key=lambda v: v.title.casefold())
    # Never-watched videos go last
    return sorted(items, key=lambda v: v.last_watched or 0, reverse=True)


def search_videos(
    videos: Iterable[Video],
    term: str = "",
    category: Optional[str] = None,
    sort: SortOption = SortOption.NEWEST,
) -> List[Video]:
    """
    Filter videos by title and category, then sort them.

    Args:
        videos: Videos to search.
        term: Case-insensitive substring of the title; empty matches all.
        category: Category filter (see ``matches_category``).
        sort: Result ordering.

    Returns:
        Matching videos.
    """
    needle = term.strip().casefold()
    selected = [
        video for video in videos
        if needle in video.title.casefold() and matches_category(video, category)
    ]
    return sort_videos(selected, sort)
