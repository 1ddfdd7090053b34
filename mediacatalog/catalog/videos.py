"""Video collection operations."""

from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Set

from loguru import logger

from mediacatalog.config.settings import COMMENT_ID_PREFIX, VIDEOS_KEY
from mediacatalog.models.video import Comment, Video
from mediacatalog.utils.ids import generate_id, now_ms

if TYPE_CHECKING:
    from mediacatalog.catalog.store import CatalogStore


class VideoRepository:
    """
    Reads and mutates the Videos collection.

    Every method loads the collection fresh from the substrate, so callers
    always get independent copies; mutations go back through ``_save``.
    """

    def __init__(self, store: "CatalogStore") -> None:
        self._store = store

    def _load(self) -> List[Video]:
        videos = self._store.codec.load(VIDEOS_KEY, Video)
        for video in videos:
            if not video.category:
                video.category = self._store.fallback_category
        return videos

    def _save(self, videos: List[Video]) -> None:
        self._store.codec.save(VIDEOS_KEY, videos)

    def _checked_category(self, video: Video) -> None:
        """Point a video at the fallback category if its category is unknown."""
        known = self._store.categories.ids()
        if known and video.category not in known:
            logger.warning(
                f"Video {video.id}: unknown category '{video.category}', "
                f"using '{self._store.fallback_category}'"
            )
            video.category = self._store.fallback_category

    def _prepare(self, video: Video, taken: Set[str]) -> Video:
        """Copy a video about to be stored, fixing its id, creation time and category."""
        new_video = video.copy()
        if not new_video.id or new_video.id in taken:
            if new_video.id:
                logger.warning(f"Video id {new_video.id} already exists, assigning a new id")
            new_video.id = generate_id()
        if not new_video.created_at:
            new_video.created_at = now_ms()
        if not new_video.category:
            new_video.category = self._store.fallback_category
        self._checked_category(new_video)
        return new_video

    def get_all(self) -> List[Video]:
        """Return every video in stored order."""
        return self._load()

    def get_by_id(self, video_id: str) -> Optional[Video]:
        """Return the video with this id, or None."""
        return next((v for v in self._load() if v.id == video_id), None)

    def exists(self, video_id: str) -> bool:
        """Check if a video id resolves."""
        return self.get_by_id(video_id) is not None

    def add(self, video: Video) -> Video:
        """
        Append a video to the catalog.

        The store owns identity: a blank id, or one that is already taken,
        is replaced by a generated id. The returned copy carries the id and
        creation time actually stored.

        Args:
            video: Video to store. Not modified.

        Returns:
            The stored video.
        """
        with self._store.lock:
            videos = self._load()
            new_video = self._prepare(video, {v.id for v in videos})
            videos.append(new_video)
            self._save(videos)
            logger.debug(f"Added video {new_video.id} ({new_video.title})")
            return new_video.copy()

    def update(self, video: Video) -> Optional[Video]:
        """
        Replace a stored video with the given record.

        Does nothing, and writes nothing, if no video has this id.

        Returns:
            The stored video, or None if the id was not found.
        """
        with self._store.lock:
            videos = self._load()
            for index, existing in enumerate(videos):
                if existing.id == video.id:
                    replacement = video.copy()
                    self._checked_category(replacement)
                    videos[index] = replacement
                    self._save(videos)
                    logger.debug(f"Updated video {video.id}")
                    return replacement.copy()
            return None

    def _modify(self, video_id: str, change: Callable[[Video], None]) -> Optional[Video]:
        """Read-modify-write one video under the store lock."""
        with self._store.lock:
            videos = self._load()
            for video in videos:
                if video.id == video_id:
                    change(video)
                    self._save(videos)
                    return video.copy()
            return None

    def delete(self, video_id: str) -> bool:
        """
        Remove a video and every playlist reference to it.

        Both collections are written in one substrate batch, so no reader
        can observe the video gone but still listed in a playlist.

        Returns:
            True if the video existed.
        """
        with self._store.lock, self._store.substrate.batch():
            videos = self._load()
            remaining = [v for v in videos if v.id != video_id]
            found = len(remaining) != len(videos)
            if found:
                self._save(remaining)
            purged = self._store.playlists.purge_video(video_id)
            if found or purged:
                logger.debug(f"Deleted video {video_id} (removed from {purged} playlist(s))")
            return found

    def toggle_favorite(self, video_id: str) -> Optional[Video]:
        """Flip the favorite flag; returns the updated video or None."""
        def flip(video: Video) -> None:
            video.favorite = not video.favorite
        return self._modify(video_id, flip)

    def mark_watched(self, video_id: str, when: Optional[int] = None) -> Optional[Video]:
        """Record that a video was just watched (or at ``when``, in ms)."""
        timestamp = when if when is not None else now_ms()

        def stamp(video: Video) -> None:
            video.last_watched = timestamp
        return self._modify(video_id, stamp)

    def add_comment(self, video_id: str, comment: Comment) -> Optional[Video]:
        """
        Append a comment to a video.

        A comment without id or creation time gets them generated.

        Returns:
            The updated video, or None if the video does not exist.
        """
        new_comment = Comment(
            id=comment.id or generate_id(COMMENT_ID_PREFIX),
            text=comment.text,
            username=comment.username,
            created_at=comment.created_at or now_ms(),
            extra=dict(comment.extra),
        )

        def append(video: Video) -> None:
            video.comments.append(new_comment)
        return self._modify(video_id, append)

    def favorites(self) -> List[Video]:
        """Return the videos flagged as favorite."""
        return [v for v in self._load() if v.favorite]

    def reassign_category(self, old_category_id: str, new_category_id: Optional[str] = None) -> int:
        """
        Move every video of a category to another one.

        This is the second half of the category delete protocol.

        Args:
            old_category_id: Category being removed or renamed.
            new_category_id: Target category, the fallback category if None.

        Returns:
            Number of videos moved.
        """
        target = new_category_id or self._store.fallback_category
        with self._store.lock:
            videos = self._load()
            moved = 0
            for video in videos:
                if video.category == old_category_id:
                    video.category = target
                    moved += 1
            if moved:
                self._save(videos)
                logger.debug(f"Moved {moved} video(s) from '{old_category_id}' to '{target}'")
            return moved

    def replace_all(self, videos: Sequence[Video]) -> List[Video]:
        """
        Overwrite the whole collection.

        Each video goes through the same checks as ``add``: repeated or
        blank ids are regenerated, unknown categories fall back. Playlists
        are not touched; ``CatalogStore.import_videos`` and
        ``CatalogStore.clear_videos`` prune them in the same batch.

        Returns:
            The stored videos.
        """
        with self._store.lock:
            stored: List[Video] = []
            taken: Set[str] = set()
            for video in videos:
                new_video = self._prepare(video, taken)
                taken.add(new_video.id)
                stored.append(new_video)
            self._save(stored)
            logger.debug(f"Replaced video collection ({len(stored)} video(s))")
            return [v.copy() for v in stored]
