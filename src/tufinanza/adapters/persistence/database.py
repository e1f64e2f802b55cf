# src/tufinanza/adapters/persistence/database.py
"""
Finance Database - Records Stored in the Key-Value Store

This module persists the user's data (profile, movements, saving goals,
saving transactions, quotes and preferences) as JSON text under fixed keys of
an injected KeyValueStore.

Reads never raise: missing or unreadable data comes back as None or an empty
list. Writes return True/False and log failures.

Files that USE this module:
- tufinanza.app (loads the profile and movements for the summary)
- tests.test_database (unit tests)

Files that this module USES:
- tufinanza.adapters.persistence.kv_store (KeyValueStore, StorageKeys)
- tufinanza.domain.models (records and their JSON codecs)
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, TypeVar

from tufinanza.adapters.persistence.kv_store import KeyValueStore, StorageKeys
from tufinanza.domain.currencies import Currency
from tufinanza.domain.errors import InvalidRecordError
from tufinanza.domain.models import (
    ExchangeRates,
    Movement,
    SavingGoal,
    SavingTransaction,
    USDTQuote,
    UserProfile,
    format_timestamp,
)

logger = logging.getLogger(__name__)

EXPORT_VERSION = "1.0.0"

T = TypeVar("T")

# Keys cleared by reset_financial_data; profile, onboarding and display
# preference survive.
FINANCIAL_KEYS = (
    StorageKeys.MOVEMENTS,
    StorageKeys.SAVING_GOALS,
    StorageKeys.SAVING_TRANSACTIONS,
    StorageKeys.USDT_QUOTE,
    StorageKeys.EXCHANGE_RATES,
)

PROFILE_CURRENCY_FIELDS = ("currency", "preferred_balance_currency")


@dataclass
class StorageStats:
    """Size of each stored item in UTF-8 bytes, keyed by StorageKeys name."""
    total_size: int = 0
    item_count: int = 0
    items: Dict[str, int] = field(default_factory=dict)


class FinanceDatabase:
    """Typed access to the app's records on top of a key-value store."""

    def __init__(self, store: KeyValueStore, clock: Optional[Callable[[], datetime]] = None):
        """
        Initialize the database.

        Args:
            store: Key-value store holding the data
            clock: Callable returning the current aware datetime (export timestamps)
        """
        self.store = store
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    # -------- generic helpers --------

    def _get_json(self, key: str) -> Any:
        try:
            raw = self.store.get_item(key)
        except Exception as e:
            logger.error("Error reading %s from storage: %s", key, e)
            return None
        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("Error parsing JSON stored under %s: %s", key, e)
            return None

    def _set_json(self, key: str, data: Any) -> bool:
        try:
            self.store.set_item(key, json.dumps(data, ensure_ascii=False))
            return True
        except Exception as e:
            logger.error("Error saving %s to storage: %s", key, e)
            return False

    def _remove(self, key: str) -> bool:
        try:
            self.store.remove_item(key)
            return True
        except Exception as e:
            logger.error("Error removing %s from storage: %s", key, e)
            return False

    def _get_record(self, key: str, decode: Callable[[dict], T]) -> Optional[T]:
        data = self._get_json(key)
        if not isinstance(data, dict):
            return None
        try:
            return decode(data)
        except InvalidRecordError as e:
            logger.error("Invalid record stored under %s: %s", key, e)
            return None

    def _get_records(self, key: str, decode: Callable[[dict], T]) -> List[T]:
        data = self._get_json(key)
        if not isinstance(data, list):
            return []
        records: List[T] = []
        for item in data:
            try:
                records.append(decode(item))
            except (InvalidRecordError, AttributeError) as e:
                logger.warning("Skipping invalid entry under %s: %s", key, e)
        return records

    def _save_records(self, key: str, records: List[Any]) -> bool:
        return self._set_json(key, [record.to_json() for record in records])

    # -------- user profile --------

    def get_user_profile(self) -> Optional[UserProfile]:
        return self._get_record(StorageKeys.USER_PROFILE, UserProfile.from_json)

    def save_user_profile(self, profile: UserProfile) -> bool:
        return self._set_json(StorageKeys.USER_PROFILE, profile.to_json())

    def update_user_profile(self, **changes: Any) -> bool:
        """
        Update fields of the stored profile.

        Currency fields accept a Currency or its code ("EUR").

        Returns:
            False if there is no profile, a field name is unknown or a value is invalid
        """
        current = self.get_user_profile()
        if current is None:
            return False
        try:
            for name in PROFILE_CURRENCY_FIELDS:
                if name in changes:
                    changes[name] = Currency(changes[name])
            data = replace(current, **changes).to_json()
        except (TypeError, ValueError, AttributeError) as e:
            logger.error("Invalid profile update: %s", e)
            return False
        return self._set_json(StorageKeys.USER_PROFILE, data)

    def delete_user_profile(self) -> bool:
        return self._remove(StorageKeys.USER_PROFILE)

    # -------- display preference --------

    def get_balance_display_currency(self) -> Optional[Currency]:
        code = self._get_json(StorageKeys.BALANCE_DISPLAY_CURRENCY)
        if code is None:
            return None
        try:
            return Currency(code)
        except ValueError:
            logger.warning("Unknown balance display currency stored: %s", code)
            return None

    def set_balance_display_currency(self, currency: Currency) -> bool:
        return self._set_json(StorageKeys.BALANCE_DISPLAY_CURRENCY, Currency(currency).value)

    # -------- movements --------

    def get_movements(self) -> List[Movement]:
        return self._get_records(StorageKeys.MOVEMENTS, Movement.from_json)

    def save_movements(self, movements: List[Movement]) -> bool:
        return self._save_records(StorageKeys.MOVEMENTS, movements)

    def add_movement(self, movement: Movement) -> bool:
        movements = self.get_movements()
        movements.append(movement)
        return self.save_movements(movements)

    def update_movement(self, movement: Movement) -> bool:
        """Replace the movement with the same id; False if it does not exist."""
        movements = self.get_movements()
        for index, existing in enumerate(movements):
            if existing.id == movement.id:
                movements[index] = movement
                return self.save_movements(movements)
        return False

    def delete_movement(self, movement_id: str) -> bool:
        movements = [m for m in self.get_movements() if m.id != movement_id]
        return self.save_movements(movements)

    # -------- saving goals --------

    def get_saving_goals(self) -> List[SavingGoal]:
        return self._get_records(StorageKeys.SAVING_GOALS, SavingGoal.from_json)

    def save_saving_goals(self, goals: List[SavingGoal]) -> bool:
        return self._save_records(StorageKeys.SAVING_GOALS, goals)

    def add_saving_goal(self, goal: SavingGoal) -> bool:
        goals = self.get_saving_goals()
        goals.append(goal)
        return self.save_saving_goals(goals)

    def update_saving_goal(self, goal: SavingGoal) -> bool:
        """Replace the goal with the same id; False if it does not exist."""
        goals = self.get_saving_goals()
        for index, existing in enumerate(goals):
            if existing.id == goal.id:
                goals[index] = goal
                return self.save_saving_goals(goals)
        return False

    def delete_saving_goal(self, goal_id: str) -> bool:
        goals = [g for g in self.get_saving_goals() if g.id != goal_id]
        return self.save_saving_goals(goals)

    # -------- saving transactions --------

    def get_saving_transactions(self) -> List[SavingTransaction]:
        return self._get_records(StorageKeys.SAVING_TRANSACTIONS, SavingTransaction.from_json)

    def save_saving_transactions(self, transactions: List[SavingTransaction]) -> bool:
        return self._save_records(StorageKeys.SAVING_TRANSACTIONS, transactions)

    def add_saving_transaction(self, transaction: SavingTransaction) -> bool:
        transactions = self.get_saving_transactions()
        transactions.append(transaction)
        return self.save_saving_transactions(transactions)

    def delete_saving_transaction(self, transaction_id: str) -> bool:
        transactions = [t for t in self.get_saving_transactions() if t.id != transaction_id]
        return self.save_saving_transactions(transactions)

    # -------- market data (no freshness check) --------

    def get_usdt_quote(self) -> Optional[USDTQuote]:
        return self._get_record(StorageKeys.USDT_QUOTE, USDTQuote.from_json)

    def save_usdt_quote(self, quote: USDTQuote) -> bool:
        return self._set_json(StorageKeys.USDT_QUOTE, quote.to_json())

    def get_exchange_rates(self) -> Optional[ExchangeRates]:
        return self._get_record(StorageKeys.EXCHANGE_RATES, ExchangeRates.from_json)

    def save_exchange_rates(self, rates: ExchangeRates) -> bool:
        return self._set_json(StorageKeys.EXCHANGE_RATES, rates.to_json())

    # -------- onboarding --------

    def get_onboarding_status(self) -> bool:
        return bool(self._get_json(StorageKeys.ONBOARDING) or False)

    def set_onboarding_status(self, completed: bool) -> bool:
        return self._set_json(StorageKeys.ONBOARDING, bool(completed))

    # -------- maintenance --------

    def reset_all_data(self) -> bool:
        """Remove every key the app owns."""
        ok = True
        for key in StorageKeys.all().values():
            ok = self._remove(key) and ok
        if ok:
            logger.info("All data reset")
        return ok

    def reset_financial_data(self) -> bool:
        """Remove movements, savings and cached quotes; keep the profile."""
        ok = True
        for key in FINANCIAL_KEYS:
            ok = self._remove(key) and ok
        if ok:
            logger.info("Financial data reset")
        return ok

    def get_storage_stats(self) -> StorageStats:
        stats = StorageStats()
        for name, key in StorageKeys.all().items():
            try:
                raw = self.store.get_item(key)
            except Exception as e:
                logger.error("Error reading %s from storage: %s", key, e)
                continue
            if raw:
                size = len(raw.encode("utf-8"))
                stats.items[name] = size
                stats.total_size += size
                stats.item_count += 1
        return stats

    # -------- backup --------

    def export_data(self) -> str:
        """
        Export the user's data as indented JSON for backup.

        Cached quotes are not exported.
        """
        profile = self.get_user_profile()
        display_currency = self.get_balance_display_currency()
        data = {
            "userProfile": profile.to_json() if profile else None,
            "movements": [m.to_json() for m in self.get_movements()],
            "savingGoals": [g.to_json() for g in self.get_saving_goals()],
            "savingTransactions": [t.to_json() for t in self.get_saving_transactions()],
            "balanceDisplayCurrency": display_currency.value if display_currency else None,
            "exportDate": format_timestamp(self.clock()),
            "version": EXPORT_VERSION,
        }
        return json.dumps(data, ensure_ascii=False, indent=2)

    def import_data(self, json_data: str) -> bool:
        """
        Import a backup produced by export_data.

        Every record is decoded before anything is written, so an invalid
        backup leaves the stored data untouched.

        Returns:
            True on success, False if the backup is not valid
        """
        try:
            data = json.loads(json_data)
            if not isinstance(data, dict):
                raise InvalidRecordError("backup must be a JSON object")
            profile = UserProfile.from_json(data["userProfile"]) if data.get("userProfile") else None
            movements = [Movement.from_json(m) for m in data.get("movements") or []]
            goals = [SavingGoal.from_json(g) for g in data.get("savingGoals") or []]
            transactions = [SavingTransaction.from_json(t) for t in data.get("savingTransactions") or []]
            display_currency = (
                Currency(data["balanceDisplayCurrency"]) if data.get("balanceDisplayCurrency") else None
            )
        except (json.JSONDecodeError, InvalidRecordError, ValueError, TypeError, AttributeError) as e:
            logger.error("Error importing data: %s", e)
            return False

        ok = True
        if profile is not None:
            ok = self.save_user_profile(profile) and ok
        if data.get("movements") is not None:
            ok = self.save_movements(movements) and ok
        if data.get("savingGoals") is not None:
            ok = self.save_saving_goals(goals) and ok
        if data.get("savingTransactions") is not None:
            ok = self.save_saving_transactions(transactions) and ok
        if display_currency is not None:
            ok = self.set_balance_display_currency(display_currency) and ok

        logger.info(
            "Imported backup: %d movements, %d goals, %d transactions",
            len(movements), len(goals), len(transactions),
        )
        return ok
