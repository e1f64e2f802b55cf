# src/tufinanza/adapters/persistence/file_store.py
"""
File Store - Key-Value Storage in a JSON File

This module keeps the whole key-value store in one JSON object on disk
(key -> string value). Every write rewrites the file atomically through a
temporary file and os.replace, so a crash never leaves a half-written file.

Files that USE this module:
- tufinanza.app (default store for the command line entry point)
- tests.test_file_store (unit tests)

Files that this module USES:
- tufinanza.adapters.persistence.kv_store (KeyValueStore interface)
- tufinanza.domain.errors (StorageError)
"""
from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Union

from tufinanza.adapters.persistence.kv_store import KeyValueStore
from tufinanza.domain.errors import StorageError

log = logging.getLogger(__name__)


class JsonFileStore(KeyValueStore):
    """
    Key-value store persisted as a single JSON file.

    The file is read once at construction; afterwards the in-memory copy is
    authoritative and every change is flushed to disk. Two processes sharing
    a file overwrite each other (last writer wins).
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize the store and load existing data.

        Args:
            path: JSON file location; parent directories are created
        """
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._data: Dict[str, str] = self._load()

    def _load(self) -> Dict[str, str]:
        """
        Load the store from disk.

        Handles corrupt files gracefully: the file is backed up to *.corrupt
        and the store starts empty.
        """
        if not self.path.exists():
            return {}

        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            self._backup_corrupt(f"JSON decode error: {e}")
            return {}
        except OSError as e:
            raise StorageError(f"Failed to read store file {self.path}: {e}") from e

        if not isinstance(data, dict):
            self._backup_corrupt("top-level value is not an object")
            return {}

        # Values are always text; drop anything else
        cleaned = {str(k): v for k, v in data.items() if isinstance(v, str)}
        if len(cleaned) != len(data):
            log.warning("Dropped %d non-text entries from %s", len(data) - len(cleaned), self.path)
        log.info("Loaded %d keys from %s", len(cleaned), self.path)
        return cleaned

    def _backup_corrupt(self, reason: str) -> None:
        backup_path = self.path.with_suffix(self.path.suffix + ".corrupt")
        try:
            shutil.copy2(self.path, backup_path)
            self.path.unlink()
            log.warning("Store file corrupted (%s), backed up to %s", reason, backup_path)
        except OSError as backup_error:
            log.error("Failed to backup corrupt store file: %s", backup_error)

    def _flush(self) -> None:
        """Write the store to disk using temp file + atomic rename."""
        temp_fd, temp_path = tempfile.mkstemp(
            suffix=".json.tmp",
            dir=str(self.path.parent),
            text=True,
        )

        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(self._data, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())

            os.replace(temp_path, str(self.path))
        except Exception as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise StorageError(f"Failed to save store file: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise StorageError(f"Value for {key} must be text, got {type(value).__name__}")
        previous = self._data.get(key)
        self._data[key] = value
        try:
            self._flush()
        except StorageError:
            # Keep memory and disk in agreement
            if previous is None:
                self._data.pop(key, None)
            else:
                self._data[key] = previous
            raise

    def remove_item(self, key: str) -> None:
        if key not in self._data:
            return
        previous = self._data.pop(key)
        try:
            self._flush()
        except StorageError:
            self._data[key] = previous
            raise

    def keys(self) -> List[str]:
        return list(self._data)
