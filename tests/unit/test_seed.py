"""Tests for the sample-data importer."""

from mediacatalog.catalog import seed_if_empty, ensure_default_categories
from mediacatalog.catalog.seed import SAMPLE_VIDEOS


class TestSeedIfEmpty:
    """Tests for seed_if_empty."""

    def test_seeds_empty_store(self, store):
        """An empty store gets default categories and sample videos."""
        assert seed_if_empty(store) is True
        assert [c.id for c in store.categories.get_sorted()] == ["aptitude", "reasoning", "english"]
        assert len(store.videos.get_all()) == len(SAMPLE_VIDEOS)

    def test_samples_reference_existing_categories(self, store):
        """Every sample video lands in an existing category."""
        seed_if_empty(store)
        ids = store.categories.ids()
        assert all(v.category in ids for v in store.videos.get_all())

    def test_samples_get_unique_ids(self, store):
        """Generated ids are unique."""
        seed_if_empty(store)
        videos = store.videos.get_all()
        assert len({v.id for v in videos}) == len(videos)

    def test_does_not_reseed(self, populated_store):
        """A store with videos is left alone."""
        assert seed_if_empty(populated_store) is False
        assert len(populated_store.videos.get_all()) == 3

    def test_keeps_existing_categories(self, store, make_video):
        """Existing categories are not replaced by the defaults."""
        store.categories.add("Mine")
        store.videos.add(make_video("v1", "mine"))
        seed_if_empty(store)
        assert [c.id for c in store.categories.get_all()] == ["mine"]


class TestEnsureDefaultCategories:
    """Tests for ensure_default_categories."""

    def test_creates_defaults(self, store):
        """Defaults have dense orders."""
        categories = ensure_default_categories(store)
        assert [c.order for c in categories] == [0, 1, 2]
