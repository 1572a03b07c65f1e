"""
Abstract Storage Interface

DESIGN DECISION: The ledger persists through a key-value store with named
slots, the same shape as a browser's local storage. This allows us to:
1. Keep the whole ledger in one slot, rewritten on every change
2. Use in-memory storage for testing
3. Swap the JSON file for another backend without touching the ledger

The interface is intentionally tiny: read a slot, overwrite a slot,
delete a slot. Values are opaque strings; the ledger owns serialization.
"""

from abc import ABC, abstractmethod
from typing import Optional

from bill_tracker.errors import LedgerError


class KeyValueStore(ABC):
    """
    Abstract interface for slot storage.

    Any storage implementation must implement these methods.
    All methods are synchronous.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read a slot.

        Args:
            key: Slot name

        Returns:
            The stored string, or None if the slot does not exist

        Raises:
            StorageReadError: If the backend exists but cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Overwrite a slot.

        Args:
            key: Slot name
            value: Serialized content

        Raises:
            StorageWriteError: If the write fails
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove a slot.

        Returns:
            True if the slot existed
        """
        pass


class StorageError(LedgerError):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """Stored data is missing its structure or cannot be read."""
    pass


class StorageWriteError(StorageError):
    """Stored data could not be written."""
    pass
