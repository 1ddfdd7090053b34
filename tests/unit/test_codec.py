"""Tests for the record codec."""

import json

import pytest
from unittest.mock import patch

from mediacatalog.models import Video, CategorySettings, Comment
from mediacatalog.storage import (
    InvalidFormatError,
    MemoryStore,
    PersistenceWriteError,
    RecordCodec,
    decode,
    decode_strict,
    encode,
)


@pytest.fixture
def codec():
    return RecordCodec(MemoryStore())


class TestLoad:
    """Tests for RecordCodec.load fail-soft behaviour."""

    def test_absent_key_returns_empty(self, codec):
        """A missing collection loads as empty."""
        assert codec.load("catalog.videos", Video) == []

    def test_corrupted_json_returns_empty(self, codec):
        """Unparseable text loads as empty instead of raising."""
        codec.substrate.set("catalog.videos", "{not json")
        assert codec.load("catalog.videos", Video) == []

    def test_unexpected_structure_returns_empty(self, codec):
        """A JSON value that is neither envelope nor array loads as empty."""
        codec.substrate.set("catalog.videos", '"just a string"')
        assert codec.load("catalog.videos", Video) == []

    def test_legacy_bare_array(self, codec):
        """A bare JSON array (pre-envelope format) is still readable."""
        codec.substrate.set("catalog.categories", json.dumps([{"id": "a", "name": "A", "order": 0}]))
        categories = codec.load("catalog.categories", CategorySettings)
        assert [c.id for c in categories] == ["a"]

    def test_envelope_without_version_returns_empty(self, codec):
        """An envelope lacking its version is treated as corrupted."""
        codec.substrate.set("catalog.categories", json.dumps({"data": []}))
        assert codec.load("catalog.categories", CategorySettings) == []

    def test_newer_version_read_as_is(self, codec):
        """An envelope from a newer format version is still read."""
        codec.substrate.set("catalog.categories", json.dumps(
            {"version": 99, "data": [{"id": "a", "name": "A", "order": 0}]}
        ))
        assert len(codec.load("catalog.categories", CategorySettings)) == 1

    def test_bad_record_skipped(self, codec):
        """Undecodable records are skipped, the others kept."""
        codec.substrate.set("catalog.videos", json.dumps(
            {"version": 1, "data": [{"title": "no id"}, {"id": "v2"}, 42]}
        ))
        assert [v.id for v in codec.load("catalog.videos", Video)] == ["v2"]

    def test_oversized_number_returns_empty(self, codec):
        """An integer too long for the JSON parser loads as empty."""
        codec.substrate.set("catalog.videos", "[" + "1" * 5000 + "]")
        assert codec.load("catalog.videos", Video) == []

    def test_deep_nesting_returns_empty(self, codec):
        """Nesting deeper than the parser can follow loads as empty."""
        codec.substrate.set("catalog.videos", "[" * 200000)
        assert codec.load("catalog.videos", Video) == []

    def test_non_finite_timestamp_record_skipped(self, codec):
        """A record with an infinite timestamp is skipped, not fatal."""
        codec.substrate.set(
            "catalog.videos",
            '{"version":1,"data":[{"id":"v1","createdAt":Infinity},{"id":"v2","createdAt":1}]}',
        )
        assert [v.id for v in codec.load("catalog.videos", Video)] == ["v2"]

    def test_non_finite_order_record_skipped(self, codec):
        """A category with an infinite or NaN order is skipped."""
        codec.substrate.set(
            "catalog.categories",
            '{"version":1,"data":[{"id":"a","name":"A","order":Infinity},'
            '{"id":"b","name":"B","order":NaN},{"id":"c","name":"C","order":0}]}',
        )
        assert [c.id for c in codec.load("catalog.categories", CategorySettings)] == ["c"]


class TestSave:
    """Tests for RecordCodec.save."""

    def test_save_writes_envelope(self, codec):
        """save() writes a versioned envelope under the key."""
        codec.save("catalog.categories", [CategorySettings(id="a", name="A", order=0)])
        raw = json.loads(codec.load_raw("catalog.categories"))
        assert raw == {"version": 1, "data": [{"id": "a", "name": "A", "order": 0}]}

    def test_save_propagates_write_failure(self, codec):
        """A substrate write failure reaches the caller."""
        with patch.object(codec.substrate, "_write_many", side_effect=PersistenceWriteError("full")):
            with pytest.raises(PersistenceWriteError):
                codec.save("catalog.videos", [])

    def test_round_trip_is_stable(self):
        """Encoding, decoding and re-encoding yields the same text."""
        videos = [
            Video(id="v1", title="Ünïcode", url="u", created_at=1, favorite=True,
                  comments=[Comment(id="c", text="hi", username="me", created_at=2)]),
            Video(id="v2", title="b", url="u2", created_at=3, description="d", last_watched=4),
        ]
        first = encode(videos)
        second = encode(decode(first, Video.from_dict))
        assert first == second


class TestDecodeStrict:
    """Tests for decode_strict, used when importing."""

    def test_reads_envelope_and_bare_array(self):
        """Both accepted layouts decode."""
        record = {"id": "a", "name": "A", "order": 0}
        envelope = json.dumps({"version": 1, "data": [record]})
        assert [c.id for c in decode_strict(envelope, CategorySettings.from_dict)] == ["a"]
        assert [c.id for c in decode_strict(json.dumps([record]), CategorySettings.from_dict)] == ["a"]

    def test_one_bad_record_rejects_everything(self):
        """Unlike decode(), a bad record is an error, not a skip."""
        text = json.dumps([{"id": "a"}, {"title": "no id"}])
        with pytest.raises(InvalidFormatError, match="#1"):
            decode_strict(text, Video.from_dict)

    def test_newer_version_rejected(self):
        """An export from a newer format cannot be validated."""
        with pytest.raises(InvalidFormatError):
            decode_strict(json.dumps({"version": 2, "data": []}), Video.from_dict)

    def test_unparseable_text_rejected(self):
        """Text that is not JSON is an InvalidFormatError."""
        with pytest.raises(InvalidFormatError):
            decode_strict("[" * 200000, Video.from_dict)
