"""
Storage Services Package

Provides the abstract slot-storage interface and its implementations.
Bills are kept in a local JSON file by default; the in-memory store
is used by tests.
"""

from bill_tracker.services.storage.interface import (
    KeyValueStore,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from bill_tracker.services.storage.json_file import JsonFileStore
from bill_tracker.services.storage.memory import InMemoryStore

__all__ = [
    # Interfaces
    "KeyValueStore",
    # Exceptions
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Implementations
    "InMemoryStore",
    "JsonFileStore",
]
