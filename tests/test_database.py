# tests/test_database.py
"""
Finance Database Tests - Records in the Key-Value Store

This module contains unit tests for FinanceDatabase:
- Profile, movement, goal and transaction CRUD
- Display preference and onboarding flags
- Resets and storage statistics
- Backup export and import

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- tufinanza.adapters.persistence.database (FinanceDatabase under test)
- tufinanza.adapters.persistence.kv_store (MemoryStore, StorageKeys)
- pytest (testing framework)
"""
import json
from dataclasses import replace
from unittest.mock import patch  # Mocking for failing store writes

import pytest  # Testing framework for writing and running tests

from tufinanza.adapters.persistence.database import EXPORT_VERSION, FinanceDatabase
from tufinanza.adapters.persistence.kv_store import MemoryStore, StorageKeys
from tufinanza.domain.currencies import Currency, USD_EXCHANGE_RATES
from tufinanza.domain.errors import StorageError
from tufinanza.domain.models import (
    ExchangeRates,
    MovementType,
    SavingTransaction,
    TransactionType,
    USDTQuote,
)

from conftest import NOW, make_goal, make_movement, make_profile


@pytest.fixture
def db(store, clock):
    return FinanceDatabase(store, clock=clock)


class TestUserProfile:
    def test_missing_profile(self, db):
        assert db.get_user_profile() is None
        assert db.update_user_profile(name="X") is False

    def test_save_and_update(self, db, store):
        assert db.save_user_profile(make_profile())
        assert db.update_user_profile(name="Ana María", currency=Currency.EUR)
        profile = db.get_user_profile()
        assert profile.name == "Ana María"
        assert profile.currency is Currency.EUR
        raw = json.loads(store.get_item(StorageKeys.USER_PROFILE))
        assert raw["createdAt"] == "2024-06-15T12:00:00Z"
        assert raw["preferredBalanceCurrency"] == "USD"

    def test_unknown_field_is_rejected(self, db):
        db.save_user_profile(make_profile())
        assert db.update_user_profile(nickname="A") is False

    def test_currency_codes_are_accepted(self, db):
        db.save_user_profile(make_profile())
        assert db.update_user_profile(currency="EUR", preferred_balance_currency="BRL") is True
        profile = db.get_user_profile()
        assert profile.currency is Currency.EUR
        assert profile.preferred_balance_currency is Currency.BRL

    @pytest.mark.parametrize("changes", [{"currency": "XYZ"}, {"created_at": "yesterday"}])
    def test_invalid_values_return_false(self, db, changes):
        db.save_user_profile(make_profile())
        assert db.update_user_profile(**changes) is False
        assert db.get_user_profile() == make_profile()

    def test_delete(self, db):
        db.save_user_profile(make_profile())
        assert db.delete_user_profile()
        assert db.get_user_profile() is None

    def test_corrupt_profile_reads_as_none(self, db, store):
        store.set_item(StorageKeys.USER_PROFILE, "{oops")
        assert db.get_user_profile() is None


class TestMovements:
    def test_add_update_delete(self, db):
        db.add_movement(make_movement("m1"))
        db.add_movement(make_movement("m2", MovementType.INCOME, 500))
        assert [m.id for m in db.get_movements()] == ["m1", "m2"]

        assert db.update_movement(replace(make_movement("m1"), amount=42))
        assert db.get_movements()[0].amount == 42

        assert db.delete_movement("m1")
        assert [m.id for m in db.get_movements()] == ["m2"]

    def test_update_missing_id(self, db):
        db.add_movement(make_movement("m1"))
        assert db.update_movement(make_movement("nope")) is False
        assert len(db.get_movements()) == 1

    def test_invalid_entries_are_skipped(self, db, store):
        good = make_movement("m1").to_json()
        store.set_item(StorageKeys.MOVEMENTS, json.dumps([good, {"id": "bad"}, "junk"]))
        assert [m.id for m in db.get_movements()] == ["m1"]

    def test_write_failure_returns_false(self, db, store):
        with patch.object(store, "set_item", side_effect=StorageError("full")):
            assert db.add_movement(make_movement()) is False


class TestSavings:
    def test_goals(self, db):
        db.add_saving_goal(make_goal("g1"))
        db.add_saving_goal(make_goal("g2", currency=Currency.EUR))
        assert db.update_saving_goal(replace(make_goal("g1"), current_amount=900))
        assert db.get_saving_goals()[0].progress == pytest.approx(0.9)
        assert db.update_saving_goal(make_goal("g9")) is False
        db.delete_saving_goal("g2")
        assert [g.id for g in db.get_saving_goals()] == ["g1"]

    def test_transactions(self, db):
        tx = SavingTransaction(
            id="t1",
            goal_id="g1",
            amount=50,
            currency=Currency.USD,
            type=TransactionType.DEPOSIT,
            date=NOW,
            created_at=NOW,
        )
        db.add_saving_transaction(tx)
        assert db.get_saving_transactions() == [tx]
        db.delete_saving_transaction("t1")
        assert db.get_saving_transactions() == []


class TestPreferencesAndMarketData:
    def test_balance_display_currency(self, db, store):
        assert db.get_balance_display_currency() is None
        db.set_balance_display_currency(Currency.BRL)
        assert db.get_balance_display_currency() is Currency.BRL
        store.set_item(StorageKeys.BALANCE_DISPLAY_CURRENCY, '"XYZ"')
        assert db.get_balance_display_currency() is None

    def test_onboarding(self, db):
        assert db.get_onboarding_status() is False
        db.set_onboarding_status(True)
        assert db.get_onboarding_status() is True

    def test_quotes_are_returned_without_freshness_check(self, db):
        old = USDTQuote(price=900.0, timestamp=NOW.replace(year=2020))
        db.save_usdt_quote(old)
        assert db.get_usdt_quote() == old
        rates = ExchangeRates(rates=dict(USD_EXCHANGE_RATES), timestamp=NOW.replace(year=2020))
        db.save_exchange_rates(rates)
        assert db.get_exchange_rates() == rates


class TestMaintenance:
    def fill(self, db):
        db.save_user_profile(make_profile())
        db.add_movement(make_movement())
        db.add_saving_goal(make_goal())
        db.save_usdt_quote(USDTQuote(price=1200.0, timestamp=NOW))
        db.set_onboarding_status(True)

    def test_reset_financial_data_keeps_profile(self, db, store):
        self.fill(db)
        assert db.reset_financial_data()
        assert db.get_movements() == []
        assert db.get_saving_goals() == []
        assert db.get_usdt_quote() is None
        assert db.get_user_profile() is not None
        assert db.get_onboarding_status() is True

    def test_reset_all_data(self, db, store):
        self.fill(db)
        store.set_item("unrelated", "kept")
        assert db.reset_all_data()
        assert store.keys() == ["unrelated"]

    def test_storage_stats(self, db, store):
        db.set_balance_display_currency(Currency.EUR)
        db.set_onboarding_status(True)
        store.set_item("unrelated", "x" * 100)
        stats = db.get_storage_stats()
        assert stats.items == {"BALANCE_DISPLAY_CURRENCY": 5, "ONBOARDING": 4}
        assert stats.total_size == 9
        assert stats.item_count == 2

    def test_storage_stats_counts_utf8_bytes(self, db):
        db.save_user_profile(make_profile(name="Ñandú"))
        raw = db.store.get_item(StorageKeys.USER_PROFILE)
        assert db.get_storage_stats().items["USER_PROFILE"] == len(raw.encode("utf-8"))


class TestBackup:
    def test_export_contents(self, db):
        db.save_user_profile(make_profile())
        db.add_movement(make_movement())
        db.save_usdt_quote(USDTQuote(price=1200.0, timestamp=NOW))
        data = json.loads(db.export_data())
        assert data["version"] == EXPORT_VERSION
        assert data["exportDate"] == "2024-06-15T12:00:00Z"
        assert data["userProfile"]["name"] == "Ana"
        assert len(data["movements"]) == 1
        assert "usdtQuote" not in data

    def test_export_import_into_new_store(self, db, clock):
        db.save_user_profile(make_profile())
        db.add_movement(make_movement("m1"))
        db.add_saving_goal(make_goal("g1"))
        db.set_balance_display_currency(Currency.ARS)

        other = FinanceDatabase(MemoryStore(), clock=clock)
        assert other.import_data(db.export_data())
        assert other.get_user_profile() == db.get_user_profile()
        assert other.get_movements() == db.get_movements()
        assert other.get_saving_goals() == db.get_saving_goals()
        assert other.get_balance_display_currency() is Currency.ARS

    @pytest.mark.parametrize(
        "backup",
        [
            "not json",
            "[]",
            json.dumps({"movements": [{"id": "m1"}]}),
            json.dumps({"balanceDisplayCurrency": "XYZ"}),
        ],
    )
    def test_invalid_backup_leaves_data_untouched(self, db, store, backup):
        db.add_movement(make_movement("keep"))
        before = dict((k, store.get_item(k)) for k in store.keys())
        assert db.import_data(backup) is False
        assert dict((k, store.get_item(k)) for k in store.keys()) == before
