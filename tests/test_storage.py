"""
Tests for the slot storage backends.
"""

import json

import pytest

from bill_tracker.services.storage import (
    InMemoryStore,
    JsonFileStore,
    StorageReadError,
    StorageWriteError,
)


class TestInMemoryStore:
    def test_get_set_delete(self):
        store = InMemoryStore()
        assert store.get("slot") is None

        store.set("slot", "[]")
        assert store.get("slot") == "[]"
        assert len(store) == 1

        assert store.delete("slot") is True
        assert store.delete("slot") is False
        assert store.get("slot") is None

    def test_initial_contents_are_copied(self):
        initial = {"slot": "[]"}
        store = InMemoryStore(initial)
        store.set("slot", "[1]")
        assert initial == {"slot": "[]"}


class TestJsonFileStore:
    """Tests for JsonFileStore."""

    def test_missing_file_reads_empty(self, tmp_path):
        store = JsonFileStore(tmp_path / "data.json")
        assert store.get("slot") is None

    def test_set_creates_file_and_parents(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "data.json"
        store = JsonFileStore(path)
        store.set("slot", '[{"id": "b_1"}]')

        assert json.loads(path.read_text(encoding="utf-8")) == {"slot": '[{"id": "b_1"}]'}
        assert store.get("slot") == '[{"id": "b_1"}]'

    def test_slots_are_independent(self, tmp_path):
        store = JsonFileStore(tmp_path / "data.json")
        store.set("a", "1")
        store.set("b", "2")
        store.set("a", "3")
        assert store.get("a") == "3"
        assert store.get("b") == "2"

    def test_set_leaves_no_temp_files(self, tmp_path):
        store = JsonFileStore(tmp_path / "data.json")
        store.set("slot", "x")
        store.set("slot", "y")
        assert [p.name for p in tmp_path.iterdir()] == ["data.json"]

    def test_unicode_is_kept(self, tmp_path):
        path = tmp_path / "data.json"
        JsonFileStore(path).set("slot", "Água")
        assert "Água" in path.read_text(encoding="utf-8")
        assert JsonFileStore(path).get("slot") == "Água"

    def test_empty_file_reads_empty(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("", encoding="utf-8")
        assert JsonFileStore(path).get("slot") is None

    @pytest.mark.parametrize("content", ["{broken", "[1, 2]", '"text"'])
    def test_corrupt_file_raises_read_error(self, tmp_path, content):
        path = tmp_path / "data.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(StorageReadError):
            JsonFileStore(path).get("slot")

    def test_non_string_slot_raises_read_error(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text('{"slot": [1, 2]}', encoding="utf-8")
        with pytest.raises(StorageReadError):
            JsonFileStore(path).get("slot")

    def test_set_overwrites_corrupt_file(self, tmp_path):
        """Writing to a corrupt file replaces it."""
        path = tmp_path / "data.json"
        path.write_text("{broken", encoding="utf-8")
        store = JsonFileStore(path)
        store.set("slot", "[]")
        assert store.get("slot") == "[]"

    def test_non_utf8_file_raises_read_error(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_bytes(b'{"slot": "\xff\xfe"}')
        with pytest.raises(StorageReadError):
            JsonFileStore(path).get("slot")

    def test_set_overwrites_non_utf8_file(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_bytes(b"\xff\xfe\x00")
        store = JsonFileStore(path)
        store.set("slot", "[]")
        assert store.get("slot") == "[]"

    def test_delete(self, tmp_path):
        store = JsonFileStore(tmp_path / "data.json")
        store.set("a", "1")
        store.set("b", "2")
        assert store.delete("a") is True
        assert store.delete("a") is False
        assert store.get("a") is None
        assert store.get("b") == "2"

    def test_write_failure_raises_write_error(self, tmp_path):
        """A path under a regular file cannot be written."""
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        store = JsonFileStore(blocker / "data.json")
        with pytest.raises(StorageWriteError):
            store.set("slot", "[]")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
