"""Services package."""

from bill_tracker.services.storage import (
    InMemoryStore,
    JsonFileStore,
    KeyValueStore,
    StorageError,
    StorageReadError,
    StorageWriteError,
)

__all__ = [
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
]
