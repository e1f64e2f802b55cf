# tests/test_file_store.py
"""
File Store Tests - JSON File Persistence

Covers persistence across instances, corrupt file recovery and rollback
when a write cannot be flushed to disk.
"""
import json
from unittest.mock import patch  # Mocking for failing atomic renames

import pytest  # Testing framework for writing and running tests

from tufinanza.adapters.persistence.file_store import JsonFileStore
from tufinanza.domain.errors import StorageError


@pytest.fixture
def path(tmp_path):
    return tmp_path / "data" / "store.json"


class TestJsonFileStore:
    def test_missing_file_starts_empty(self, path):
        store = JsonFileStore(path)
        assert store.keys() == []
        assert path.parent.is_dir()

    def test_values_survive_new_instance(self, path):
        JsonFileStore(path).set_item("greeting", "hola ñandú")
        store = JsonFileStore(path)
        assert store.get_item("greeting") == "hola ñandú"
        assert json.loads(path.read_text(encoding="utf-8")) == {"greeting": "hola ñandú"}

    def test_remove_item(self, path):
        store = JsonFileStore(path)
        store.set_item("a", "1")
        store.set_item("b", "2")
        store.remove_item("a")
        store.remove_item("missing")
        assert JsonFileStore(path).keys() == ["b"]

    def test_rejects_non_text_values(self, path):
        store = JsonFileStore(path)
        with pytest.raises(StorageError):
            store.set_item("n", 5)

    def test_corrupt_file_is_backed_up(self, path):
        path.parent.mkdir(parents=True)
        path.write_text("{broken", encoding="utf-8")
        store = JsonFileStore(path)
        assert store.keys() == []
        backup = path.with_name("store.json.corrupt")
        assert backup.read_text(encoding="utf-8") == "{broken"
        assert not path.exists()

    def test_non_object_file_is_backed_up(self, path):
        path.parent.mkdir(parents=True)
        path.write_text("[1, 2]", encoding="utf-8")
        assert JsonFileStore(path).keys() == []
        assert path.with_name("store.json.corrupt").exists()

    def test_non_text_entries_are_dropped(self, path):
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps({"ok": "yes", "bad": 3}), encoding="utf-8")
        store = JsonFileStore(path)
        assert store.keys() == ["ok"]

    def test_failed_flush_rolls_back(self, path):
        store = JsonFileStore(path)
        store.set_item("k", "old")
        with patch("tufinanza.adapters.persistence.file_store.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(StorageError):
                store.set_item("k", "new")
            with pytest.raises(StorageError):
                store.set_item("other", "x")
            with pytest.raises(StorageError):
                store.remove_item("k")
        assert store.get_item("k") == "old"
        assert store.get_item("other") is None
        assert JsonFileStore(path).get_item("k") == "old"
        assert list(path.parent.glob("*.tmp")) == []
