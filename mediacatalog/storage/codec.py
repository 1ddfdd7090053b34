"""Record codec: one collection <-> one persisted string."""

import json
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Sequence, Type, TypeVar

from loguru import logger

from mediacatalog.config.settings import ENVELOPE_VERSION
from mediacatalog.storage.exceptions import InvalidFormatError, PersistenceError
from mediacatalog.storage.substrate import KeyValueStore


class Record(Protocol):
    """A persisted entity: convertible to and from a JSON object."""

    def to_dict(self) -> Dict[str, Any]: ...


T = TypeVar("T")


def encode(records: Sequence[Record]) -> str:
    """
    Serialize a collection into its persisted envelope.

    The output is deterministic: field order comes from each record's
    ``to_dict`` and separators are fixed.

    Args:
        records: Entities to serialize.

    Returns:
        JSON text of ``{"version": ..., "data": [...]}``.
    """
    envelope = {
        "version": ENVELOPE_VERSION,
        "data": [record.to_dict() for record in records],
    }
    return json.dumps(envelope, ensure_ascii=False, separators=(",", ":"))


def _unwrap(raw: Any, key: str) -> Optional[List[Any]]:
    """Extract the record list from an envelope or a bare legacy array."""
    if isinstance(raw, list):
        return raw
    if isinstance(raw, dict) and isinstance(raw.get("data"), list):
        version = raw.get("version")
        if not isinstance(version, int) or isinstance(version, bool):
            logger.warning(f"Collection {key}: missing or invalid envelope version")
            return None
        if version > ENVELOPE_VERSION:
            logger.warning(
                f"Collection {key} was written with format version {version}, "
                f"this build knows {ENVELOPE_VERSION}; reading as-is"
            )
        return raw["data"]
    logger.warning(f"Collection {key}: unexpected top-level structure, treating as empty")
    return None


def decode(text: str, factory: Callable[[Mapping[str, Any]], T], key: str = "") -> List[T]:
    """
    Parse persisted text back into entities.

    Never raises: unparseable text yields an empty list and records that
    cannot be decoded are skipped, each case logged as a warning.

    Args:
        text: Persisted JSON text.
        factory: Callable building one entity from a JSON object.
        key: Collection key, used in log messages.

    Returns:
        Decoded entities in stored order.
    """
    try:
        raw = json.loads(text)
    except (ValueError, TypeError, RecursionError) as e:
        logger.warning(f"Collection {key} is corrupted, treating as empty: {e}")
        return []

    items = _unwrap(raw, key)
    if items is None:
        return []

    records: List[T] = []
    for index, item in enumerate(items):
        try:
            records.append(factory(item))
        except (ValueError, TypeError, KeyError, AttributeError, OverflowError) as e:
            logger.warning(f"Collection {key}: skipping unreadable record #{index}: {e}")
    return records


def decode_strict(text: str, factory: Callable[[Mapping[str, Any]], T]) -> List[T]:
    """
    Parse externally supplied text, rejecting anything ``decode`` would skip.

    Used for imports, where a partially readable file must not silently
    replace the stored collection.

    Args:
        text: JSON text, a versioned envelope or a bare array of records.
        factory: Callable building one entity from a JSON object.

    Returns:
        Decoded entities in file order.

    Raises:
        InvalidFormatError: If the text, its structure or any record is
            unreadable, or the envelope comes from a newer format version.
    """
    try:
        raw = json.loads(text)
    except (ValueError, TypeError, RecursionError) as e:
        raise InvalidFormatError(f"Not valid JSON: {e}") from e

    if isinstance(raw, list):
        items = raw
    elif isinstance(raw, dict) and isinstance(raw.get("data"), list):
        version = raw.get("version")
        if not isinstance(version, int) or isinstance(version, bool):
            raise InvalidFormatError("Missing or invalid format version")
        if version > ENVELOPE_VERSION:
            raise InvalidFormatError(
                f"Format version {version} is newer than this build ({ENVELOPE_VERSION})"
            )
        items = raw["data"]
    else:
        raise InvalidFormatError("Expected a list of records or a versioned envelope")

    records: List[T] = []
    for index, item in enumerate(items):
        try:
            records.append(factory(item))
        except (ValueError, TypeError, KeyError, AttributeError, OverflowError) as e:
            raise InvalidFormatError(f"Record #{index} is invalid: {e}") from e
    return records


class RecordCodec:
    """
    Maps each entity collection to exactly one substrate value.

    Attributes:
        substrate: Key-value store holding the collections.
    """

    def __init__(self, substrate: KeyValueStore) -> None:
        self.substrate = substrate

    def load(self, key: str, model: Type[T]) -> List[T]:
        """
        Load a whole collection.

        Fails soft: an absent key, unreadable value or substrate read error
        all return an empty list.

        Args:
            key: Collection key.
            model: Entity class exposing ``from_dict``.

        Returns:
            Entities in stored order.
        """
        try:
            text = self.substrate.get(key)
        except PersistenceError as e:
            logger.warning(f"Could not read collection {key}: {e}")
            return []
        if text is None:
            return []
        return decode(text, model.from_dict, key)  # type: ignore[attr-defined]

    def save(self, key: str, records: Sequence[Record]) -> None:
        """
        Overwrite a whole collection in one substrate write.

        Raises:
            PersistenceWriteError: If the substrate rejects the write.
        """
        self.substrate.set(key, encode(records))
        logger.debug(f"Saved {len(records)} record(s) to {key}")

    def load_raw(self, key: str) -> Optional[str]:
        """Return the persisted text of a collection, or None if absent."""
        return self.substrate.get(key)
