"""Playlist collection operations."""

from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Set

from loguru import logger

from mediacatalog.config.settings import PLAYLIST_ID_PREFIX, PLAYLISTS_KEY
from mediacatalog.models.playlist import Playlist
from mediacatalog.models.video import Video
from mediacatalog.utils.ids import generate_id, now_ms

if TYPE_CHECKING:
    from mediacatalog.catalog.store import CatalogStore


class MembershipChange(Enum):
    """Outcome of adding a video to, or removing it from, a playlist."""

    ADDED = "added"
    ALREADY_PRESENT = "already_present"
    REMOVED = "removed"
    NOT_PRESENT = "not_present"
    NOT_FOUND = "not_found"


def _dedupe(video_ids: List[str]) -> List[str]:
    """Drop repeated ids, keeping the first occurrence."""
    return list(dict.fromkeys(video_ids))


class PlaylistRepository:
    """
    Reads and mutates the Playlists collection.

    Playlists only point at videos; nothing here ever modifies a video.
    """

    def __init__(self, store: "CatalogStore") -> None:
        self._store = store

    def _load(self) -> List[Playlist]:
        return self._store.codec.load(PLAYLISTS_KEY, Playlist)

    def _save(self, playlists: List[Playlist]) -> None:
        self._store.codec.save(PLAYLISTS_KEY, playlists)

    def get_all(self) -> List[Playlist]:
        """Return every playlist in stored order."""
        return self._load()

    def get_by_id(self, playlist_id: str) -> Optional[Playlist]:
        """Return the playlist with this id, or None."""
        return next((p for p in self._load() if p.id == playlist_id), None)

    def add(self, playlist: Playlist) -> Playlist:
        """
        Append a playlist.

        Blank or already-used ids are replaced with a generated one and
        repeated video ids are collapsed.

        Returns:
            The stored playlist.
        """
        with self._store.lock:
            playlists = self._load()
            new_playlist = Playlist(
                id=playlist.id,
                name=playlist.name,
                description=playlist.description,
                video_ids=_dedupe(playlist.video_ids),
                created_at=playlist.created_at or now_ms(),
                extra=dict(playlist.extra),
            )
            if not new_playlist.id or any(p.id == new_playlist.id for p in playlists):
                if new_playlist.id:
                    logger.warning(f"Playlist id {new_playlist.id} already exists, assigning a new id")
                new_playlist.id = generate_id(PLAYLIST_ID_PREFIX)

            playlists.append(new_playlist)
            self._save(playlists)
            logger.debug(f"Added playlist {new_playlist.id} ({new_playlist.name})")
            return new_playlist

    def create(self, name: str, description: Optional[str] = None) -> Playlist:
        """Create an empty playlist with a generated id."""
        return self.add(Playlist(name=name.strip(), description=description or None))

    def update(self, playlist: Playlist) -> Optional[Playlist]:
        """
        Replace a stored playlist with the given record.

        Does nothing if no playlist has this id.

        Returns:
            The stored playlist, or None if not found.
        """
        with self._store.lock:
            playlists = self._load()
            for index, existing in enumerate(playlists):
                if existing.id == playlist.id:
                    replacement = Playlist(
                        id=playlist.id,
                        name=playlist.name,
                        description=playlist.description,
                        video_ids=_dedupe(playlist.video_ids),
                        created_at=playlist.created_at,
                        extra=dict(playlist.extra),
                    )
                    playlists[index] = replacement
                    self._save(playlists)
                    return replacement
            return None

    def delete(self, playlist_id: str) -> bool:
        """Remove a playlist. Returns True if it existed."""
        with self._store.lock:
            playlists = self._load()
            remaining = [p for p in playlists if p.id != playlist_id]
            if len(remaining) == len(playlists):
                return False
            self._save(remaining)
            logger.debug(f"Deleted playlist {playlist_id}")
            return True

    def add_video(self, playlist_id: str, video_id: str) -> MembershipChange:
        """
        Append a video to a playlist.

        Returns:
            ADDED, ALREADY_PRESENT (nothing written) or NOT_FOUND when
            either the playlist or the video does not exist.
        """
        with self._store.lock:
            playlists = self._load()
            playlist = next((p for p in playlists if p.id == playlist_id), None)
            if playlist is None or not self._store.videos.exists(video_id):
                return MembershipChange.NOT_FOUND
            if playlist.contains(video_id):
                return MembershipChange.ALREADY_PRESENT

            playlist.video_ids.append(video_id)
            self._save(playlists)
            return MembershipChange.ADDED

    def remove_video(self, playlist_id: str, video_id: str) -> MembershipChange:
        """
        Remove a video from one playlist.

        Returns:
            REMOVED, NOT_PRESENT or NOT_FOUND if the playlist does not exist.
        """
        with self._store.lock:
            playlists = self._load()
            playlist = next((p for p in playlists if p.id == playlist_id), None)
            if playlist is None:
                return MembershipChange.NOT_FOUND
            if not playlist.contains(video_id):
                return MembershipChange.NOT_PRESENT

            playlist.video_ids = [v for v in playlist.video_ids if v != video_id]
            self._save(playlists)
            return MembershipChange.REMOVED

    def purge_video(self, video_id: str) -> int:
        """
        Remove a video id from every playlist.

        Returns:
            Number of playlists that listed it.
        """
        with self._store.lock:
            playlists = self._load()
            touched = 0
            for playlist in playlists:
                if playlist.contains(video_id):
                    playlist.video_ids = [v for v in playlist.video_ids if v != video_id]
                    touched += 1
            if touched:
                self._save(playlists)
            return touched

    def retain_videos(self, video_ids: Set[str]) -> int:
        """
        Drop every playlist entry whose video is not in ``video_ids``.

        Returns:
            Number of entries removed across all playlists.
        """
        with self._store.lock:
            playlists = self._load()
            removed = 0
            for playlist in playlists:
                kept = [v for v in playlist.video_ids if v in video_ids]
                removed += len(playlist.video_ids) - len(kept)
                playlist.video_ids = kept
            if removed:
                self._save(playlists)
                logger.debug(f"Removed {removed} dangling playlist entries")
            return removed

    def get_videos_in_playlist(self, playlist_id: str) -> List[Video]:
        """
        Resolve a playlist's ids to videos, in playlist order.

        Ids that no longer resolve are skipped.
        """
        playlist = self.get_by_id(playlist_id)
        if playlist is None:
            return []

        by_id = {v.id: v for v in self._store.videos.get_all()}
        dangling = [v for v in playlist.video_ids if v not in by_id]
        if dangling:
            logger.warning(f"Playlist {playlist_id} lists missing video(s): {', '.join(dangling)}")
        return [by_id[v] for v in playlist.video_ids if v in by_id]
