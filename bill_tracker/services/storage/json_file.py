"""
JSON File Storage Implementation

DESIGN DECISION: A single JSON file is used as the local store because:
1. Users can open and back up their data with any text editor
2. No database setup required
3. Matches the slot model of browser local storage

TRADEOFFS:
- Whole file is rewritten on every change (fine for a personal ledger)
- No locking between processes (last writer wins)

The file holds one JSON object mapping slot names to strings. Writes go
to a temporary file in the same directory and are moved into place with
os.replace, so a crash mid-write leaves the previous file intact.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from bill_tracker.services.storage.interface import (
    KeyValueStore,
    StorageReadError,
    StorageWriteError,
)


class JsonFileStore(KeyValueStore):
    """
    File-backed slot storage.

    The file is created on the first write; a missing file reads as
    an empty store.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_slots(self) -> dict[str, str]:
        """Read the whole file. Missing file is an empty store."""
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"Failed to read {self._path}: {e}")

        if not raw.strip():
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageReadError(f"Corrupt storage file {self._path}: {e}")

        if not isinstance(data, dict):
            raise StorageReadError(
                f"Storage file {self._path} must hold a JSON object, "
                f"found {type(data).__name__}"
            )
        return data

    def _write_slots(self, slots: dict[str, str]) -> None:
        """Atomically replace the file contents."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(slots, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageWriteError(f"Failed to write {self._path}: {e}")

    def get(self, key: str) -> Optional[str]:
        value = self._read_slots().get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise StorageReadError(
                f"Slot {key!r} must hold a string, found {type(value).__name__}"
            )
        return value

    def set(self, key: str, value: str) -> None:
        try:
            slots = self._read_slots()
        except StorageReadError:
            # Overwrite semantics: a corrupt file is replaced, not repaired
            slots = {}
        slots[key] = value
        self._write_slots(slots)

    def delete(self, key: str) -> bool:
        slots = self._read_slots()
        if key not in slots:
            return False
        del slots[key]
        self._write_slots(slots)
        return True
