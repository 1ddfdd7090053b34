"""Pytest configuration and fixtures."""

import pytest

from mediacatalog.catalog import CatalogStore
from mediacatalog.config import DEFAULT_CATEGORY_NAMES
from mediacatalog.models import Video, Playlist
from mediacatalog.storage import MemoryStore


@pytest.fixture
def substrate():
    """Empty in-memory key-value store."""
    return MemoryStore()


@pytest.fixture
def store(substrate):
    """Catalog over an empty in-memory substrate."""
    return CatalogStore(substrate)


@pytest.fixture
def categorized_store(store):
    """Catalog holding the default categories (aptitude, reasoning, english)."""
    store.categories.ensure_defaults(DEFAULT_CATEGORY_NAMES)
    return store


@pytest.fixture
def make_video():
    """Factory for videos with fixed ids and timestamps."""
    def _make(video_id="v1", category="aptitude", **kwargs):
        kwargs.setdefault("title", f"Video {video_id}")
        kwargs.setdefault("url", f"https://www.youtube.com/watch?v={video_id}")
        kwargs.setdefault("created_at", 1_700_000_000_000)
        return Video(id=video_id, category=category, **kwargs)
    return _make


@pytest.fixture
def populated_store(categorized_store, make_video):
    """Catalog with three videos and one playlist listing two of them."""
    categorized_store.videos.add(make_video("v1", "aptitude", title="Percentages"))
    categorized_store.videos.add(make_video("v2", "reasoning", title="Syllogism",
                                            created_at=1_700_000_100_000))
    categorized_store.videos.add(make_video("v3", "english", title="Reading comprehension",
                                            created_at=1_700_000_200_000))
    categorized_store.playlists.add(Playlist(id="p1", name="Revision", video_ids=["v1", "v2"],
                                             created_at=1_700_000_300_000))
    return categorized_store
