"""Persistence layer: key-value substrates and the record codec."""

from mediacatalog.storage.exceptions import (
    CatalogError,
    PersistenceError,
    PersistenceWriteError,
    CatalogValidationError,
    CategoryValidationError,
    InvalidFormatError,
)
from mediacatalog.storage.substrate import KeyValueStore, MemoryStore, SQLiteStore
from mediacatalog.storage.codec import RecordCodec, encode, decode, decode_strict

__all__ = [
    "CatalogError",
    "PersistenceError",
    "PersistenceWriteError",
    "CatalogValidationError",
    "CategoryValidationError",
    "InvalidFormatError",
    "KeyValueStore",
    "MemoryStore",
    "SQLiteStore",
    "RecordCodec",
    "encode",
    "decode",
    "decode_strict",
]
