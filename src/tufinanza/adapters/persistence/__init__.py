# src/tufinanza/adapters/persistence/__init__.py
"""
Persistence Adapters - Data Storage

This package contains adapters for persisting data:
- Key-value store interface and in-memory store
- JSON file-backed store
- Typed record access (FinanceDatabase)
"""

from tufinanza.adapters.persistence.kv_store import KeyValueStore, MemoryStore, StorageKeys
from tufinanza.adapters.persistence.file_store import JsonFileStore
from tufinanza.adapters.persistence.database import FinanceDatabase, StorageStats

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "StorageKeys",
    "JsonFileStore",
    "FinanceDatabase",
    "StorageStats",
]
