"""Tests for id and text helpers."""

import time

from mediacatalog.utils import generate_id, now_ms, slugify, normalize_name


class TestIds:
    """Tests for generate_id and now_ms."""

    def test_now_ms(self):
        """now_ms() is in milliseconds."""
        assert abs(now_ms() - time.time() * 1000) < 5000

    def test_prefix(self):
        """generate_id() honours the prefix."""
        assert generate_id("playlist-").startswith("playlist-")

    def test_unique(self):
        """Ids generated back to back differ."""
        assert len({generate_id() for _ in range(100)}) == 100


class TestText:
    """Tests for slugify and normalize_name."""

    def test_slugify(self):
        """Whitespace runs become a single dash, case is lowered."""
        assert slugify("Data  Interpretation\tSets") == "data-interpretation-sets"

    def test_slugify_keeps_edge_whitespace(self):
        """Leading and trailing whitespace become dashes too."""
        assert slugify(" Foo") == "-foo"
        assert slugify("Foo ") == "foo-"

    def test_normalize_name(self):
        """normalize_name() strips and case-folds."""
        assert normalize_name(" Reasoning ") == normalize_name("REASONING")
