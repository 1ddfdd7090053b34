"""Tests for video collection operations."""

import json

from mediacatalog.catalog import CatalogStore
from mediacatalog.config import VIDEOS_KEY
from mediacatalog.models import Comment, Playlist
from mediacatalog.storage import MemoryStore


class TestAddAndGet:
    """Tests for add, get_all and get_by_id."""

    def test_add_to_empty_store(self, store, make_video):
        """A video added to an empty store is the only one listed."""
        video = make_video("v1", "aptitude")
        store.videos.add(video)
        assert store.videos.get_all() == [video]

    def test_get_by_id(self, populated_store):
        """get_by_id() finds a stored video."""
        assert populated_store.videos.get_by_id("v2").title == "Syllogism"

    def test_get_by_id_missing(self, populated_store):
        """get_by_id() returns None for an unknown id."""
        assert populated_store.videos.get_by_id("nope") is None

    def test_blank_id_generated(self, store, make_video):
        """The store assigns an id when none is given."""
        stored = store.videos.add(make_video(""))
        assert stored.id
        assert store.videos.get_by_id(stored.id) is not None

    def test_duplicate_id_replaced(self, store, make_video):
        """A second video with a taken id gets a fresh one."""
        store.videos.add(make_video("v1"))
        second = store.videos.add(make_video("v1", title="Other"))
        assert second.id != "v1"
        assert len({v.id for v in store.videos.get_all()}) == 2

    def test_created_at_stamped(self, store, make_video):
        """A video without creation time gets the current time."""
        stored = store.videos.add(make_video("v1", created_at=0))
        assert stored.created_at > 0

    def test_unknown_category_uses_fallback(self, categorized_store, make_video):
        """A video pointing at a missing category lands in the fallback."""
        stored = categorized_store.videos.add(make_video("v1", "nonexistent"))
        assert stored.category == "aptitude"

    def test_returned_records_are_copies(self, populated_store):
        """Mutating a returned video does not touch the store."""
        video = populated_store.videos.get_by_id("v1")
        video.title = "changed locally"
        assert populated_store.videos.get_by_id("v1").title == "Percentages"

    def test_missing_category_reads_as_store_fallback(self):
        """A stored video without category belongs to this store's fallback."""
        record = {"id": "v1", "title": "T", "url": "u", "createdAt": 1}
        store = CatalogStore(
            MemoryStore({VIDEOS_KEY: json.dumps({"version": 1, "data": [record]})}),
            fallback_category="english",
        )
        assert store.videos.get_by_id("v1").category == "english"


class TestUpdate:
    """Tests for update."""

    def test_update_replaces_record(self, populated_store):
        """update() replaces the stored record by id."""
        video = populated_store.videos.get_by_id("v1")
        video.title = "Percentages, part 2"
        assert populated_store.videos.update(video) is not None
        assert populated_store.videos.get_by_id("v1").title == "Percentages, part 2"

    def test_update_missing_is_noop(self, populated_store, make_video):
        """Updating an unknown id writes nothing."""
        before = populated_store.substrate.get(VIDEOS_KEY)
        assert populated_store.videos.update(make_video("ghost")) is None
        assert populated_store.substrate.get(VIDEOS_KEY) == before

    def test_update_unknown_category_uses_fallback(self, populated_store):
        """update() moves a video pointing at a missing category to the fallback."""
        video = populated_store.videos.get_by_id("v1")
        video.category = "no-such-category"
        stored = populated_store.videos.update(video)
        assert stored.category == populated_store.fallback_category
        assert populated_store.videos.get_by_id("v1").category == populated_store.fallback_category

    def test_update_missing_on_empty_store(self, store, make_video):
        """Updating on an empty store does not create the collection."""
        store.videos.update(make_video("ghost"))
        assert store.substrate.get(VIDEOS_KEY) is None


class TestDelete:
    """Tests for delete and its playlist cascade."""

    def test_delete_removes_video(self, populated_store):
        """delete() removes the video."""
        assert populated_store.videos.delete("v3") is True
        assert populated_store.videos.get_by_id("v3") is None

    def test_delete_purges_playlists(self, populated_store):
        """Deleting a video removes it from playlists, keeping order."""
        populated_store.videos.delete("v2")
        assert populated_store.playlists.get_by_id("p1").video_ids == ["v1"]

    def test_delete_purges_every_playlist(self, populated_store):
        """The id is removed from all playlists listing it."""
        populated_store.playlists.add(Playlist(id="p2", name="Other", video_ids=["v1", "v3"]))
        populated_store.videos.delete("v1")
        assert all(not p.contains("v1") for p in populated_store.playlists.get_all())

    def test_delete_missing(self, populated_store):
        """delete() returns False for an unknown id."""
        assert populated_store.videos.delete("ghost") is False

    def test_delete_cleans_dangling_reference(self, populated_store):
        """Deleting an absent id still purges a leftover playlist reference."""
        playlist = populated_store.playlists.get_by_id("p1")
        playlist.video_ids.append("ghost")
        populated_store.playlists.update(playlist)

        populated_store.videos.delete("ghost")
        assert populated_store.playlists.get_by_id("p1").video_ids == ["v1", "v2"]


class TestItemState:
    """Tests for favorite, watched and comments."""

    def test_toggle_favorite(self, populated_store):
        """toggle_favorite() flips the flag each call."""
        assert populated_store.videos.toggle_favorite("v1").favorite is True
        assert populated_store.videos.toggle_favorite("v1").favorite is False

    def test_toggle_favorite_missing(self, populated_store):
        """toggle_favorite() returns None for an unknown id."""
        assert populated_store.videos.toggle_favorite("ghost") is None

    def test_favorites(self, populated_store):
        """favorites() lists flagged videos only."""
        populated_store.videos.toggle_favorite("v3")
        assert [v.id for v in populated_store.videos.favorites()] == ["v3"]

    def test_mark_watched(self, populated_store):
        """mark_watched() stores the given time."""
        video = populated_store.videos.mark_watched("v1", when=1_800_000_000_000)
        assert video.last_watched == 1_800_000_000_000
        assert populated_store.videos.get_by_id("v1").last_watched == 1_800_000_000_000

    def test_mark_watched_defaults_to_now(self, populated_store):
        """mark_watched() without a time uses the current time."""
        assert populated_store.videos.mark_watched("v1").last_watched > 1_700_000_000_000

    def test_add_comment_appends(self, populated_store):
        """Comments are appended in order."""
        populated_store.videos.add_comment("v1", Comment(text="first", username="ana"))
        video = populated_store.videos.add_comment("v1", Comment(text="second"))
        assert [c.text for c in video.comments] == ["first", "second"]
        assert video.comments[0].username == "ana"
        assert video.comments[1].username == "Anonymous"

    def test_add_comment_generates_id(self, populated_store):
        """A comment without id gets a generated comment id."""
        video = populated_store.videos.add_comment("v1", Comment(text="hi"))
        assert video.comments[0].id.startswith("comment-")
        assert video.comments[0].created_at > 0

    def test_add_comment_missing_video(self, populated_store):
        """add_comment() returns None for an unknown video."""
        assert populated_store.videos.add_comment("ghost", Comment(text="hi")) is None


class TestReassignCategory:
    """Tests for reassign_category."""

    def test_moves_to_fallback(self, populated_store):
        """Without a target, videos move to the fallback category."""
        assert populated_store.videos.reassign_category("reasoning") == 1
        assert populated_store.videos.get_by_id("v2").category == "aptitude"

    def test_moves_to_target(self, populated_store):
        """With a target, videos move there."""
        populated_store.videos.reassign_category("reasoning", "english")
        assert populated_store.videos.get_by_id("v2").category == "english"

    def test_no_match_writes_nothing(self, populated_store):
        """Nothing is written when no video matches."""
        before = populated_store.substrate.get(VIDEOS_KEY)
        assert populated_store.videos.reassign_category("unused") == 0
        assert populated_store.substrate.get(VIDEOS_KEY) == before


class TestReplaceAll:
    """Tests for replace_all."""

    def test_replaces_collection(self, populated_store, make_video):
        """The stored collection becomes exactly the given videos."""
        stored = populated_store.videos.replace_all([make_video("n1", "english")])
        assert [v.id for v in stored] == ["n1"]
        assert [v.id for v in populated_store.videos.get_all()] == ["n1"]

    def test_repeated_ids_regenerated(self, categorized_store, make_video):
        """Two videos sharing an id are both kept under distinct ids."""
        stored = categorized_store.videos.replace_all([make_video("x"), make_video("x")])
        assert stored[0].id == "x"
        assert stored[1].id != "x"

    def test_unknown_category_uses_fallback(self, categorized_store, make_video):
        """Videos pointing at missing categories land in the fallback."""
        stored = categorized_store.videos.replace_all([make_video("x", "ghost")])
        assert stored[0].category == "aptitude"
