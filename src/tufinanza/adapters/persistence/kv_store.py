# src/tufinanza/adapters/persistence/kv_store.py
"""
Key-Value Store Interface - String Storage Contract

The app persists everything as text under fixed string keys, the way a
browser localStorage does. This module defines that contract and an
in-memory implementation used by tests and embedded callers.

Files that USE this module:
- tufinanza.adapters.persistence.file_store (JsonFileStore implements KeyValueStore)
- tufinanza.adapters.persistence.database (FinanceDatabase reads/writes through it)
- tufinanza.application.quote_service (quote cache)

Files that this module USES:
- None (pure interface definition)
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Optional


class StorageKeys:
    """
    Fixed storage keys.

    These strings are part of the persisted format: data written by one
    session is only found again by callers using the same keys.
    """
    USER_PROFILE = "tufinanza_user_profile"
    MOVEMENTS = "tufinanza_movements"
    SAVING_GOALS = "tufinanza_saving_goals"
    SAVING_TRANSACTIONS = "tufinanza_saving_transactions"
    USDT_QUOTE = "tufinanza_usdt_quote"
    EXCHANGE_RATES = "tufinanza_exchange_rates"
    ONBOARDING = "tufinanza_onboarding"
    APP_STATE = "tufinanza_app_state"
    BALANCE_DISPLAY_CURRENCY = "tufinanza_balance_display_currency"

    @classmethod
    def all(cls) -> Dict[str, str]:
        """Map of key name -> key string, in declaration order."""
        return {
            name: value
            for name, value in vars(cls).items()
            if name.isupper() and isinstance(value, str)
        }


class KeyValueStore(ABC):
    """
    String-keyed storage of string values.

    Implementations raise StorageError when the backend fails.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None if absent."""
        raise NotImplementedError

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        raise NotImplementedError

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove key; removing a missing key is not an error."""
        raise NotImplementedError

    @abstractmethod
    def keys(self) -> List[str]:
        """Return all stored keys."""
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """Dict-backed store. Nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data)

    def __len__(self) -> int:
        return len(self._data)
