"""Persisted pantry inventory."""

from pantrykit.pantry.aggregator import DEFAULT_PANTRY_KEY, PantryAggregator
from pantrykit.pantry.models import PantryItem, decode_pantry, encode_pantry
from pantrykit.pantry.store import (
    InMemoryKeyValueStore,
    KeyValueStore,
    PantryStorageError,
    RedisKeyValueStore,
    StorageWriteError,
    create_store,
)

__all__ = [
    "DEFAULT_PANTRY_KEY",
    "InMemoryKeyValueStore",
    "KeyValueStore",
    "PantryAggregator",
    "PantryItem",
    "PantryStorageError",
    "RedisKeyValueStore",
    "StorageWriteError",
    "create_store",
    "decode_pantry",
    "encode_pantry",
]
