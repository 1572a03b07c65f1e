"""In-memory slot storage, for tests and throwaway sessions."""

from typing import Optional

from bill_tracker.services.storage.interface import KeyValueStore


class InMemoryStore(KeyValueStore):
    """Dict-backed store. Contents are lost when the process exits."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._slots: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._slots.get(key)

    def set(self, key: str, value: str) -> None:
        self._slots[key] = value

    def delete(self, key: str) -> bool:
        return self._slots.pop(key, None) is not None

    def __len__(self) -> int:
        return len(self._slots)
