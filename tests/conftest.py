# tests/conftest.py
"""
Shared Test Fixtures

Provides an in-memory store, a fixed clock, a seeded random source and
factories for domain records.
"""
import logging
import random  # Seeded random source for reproducible simulation
from datetime import datetime, timezone  # Fixed timestamps for test data

import pytest  # Testing framework for writing and running tests

from tufinanza.adapters.persistence.kv_store import MemoryStore  # In-memory key-value store
from tufinanza.config import Settings  # Settings with test overrides
from tufinanza.domain.currencies import Currency
from tufinanza.domain.models import Movement, MovementType, SavingGoal, UserProfile
from tufinanza.shared.language import LANG_ENGLISH, set_language

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


class FixedClock:
    """Clock that returns a settable instant."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture(autouse=True)
def english_messages():
    set_language(LANG_ENGLISH)
    yield
    set_language(LANG_ENGLISH)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def test_settings(tmp_path):
    return Settings(data_file=tmp_path / "tufinanza.json")


def make_movement(
    movement_id: str = "m1",
    movement_type: MovementType = MovementType.EXPENSE,
    amount: float = 100.0,
    currency: Currency = Currency.USD,
    category: str = "food",
    date: datetime = NOW,
) -> Movement:
    return Movement(
        id=movement_id,
        type=movement_type,
        amount=amount,
        currency=currency,
        category=category,
        description=f"{movement_type.value} {movement_id}",
        date=date,
        created_at=date,
        updated_at=date,
    )


def make_goal(
    goal_id: str = "g1",
    target: float = 1000.0,
    current: float = 250.0,
    currency: Currency = Currency.USD,
    completed: bool = False,
) -> SavingGoal:
    return SavingGoal(
        id=goal_id,
        title=f"Goal {goal_id}",
        target_amount=target,
        current_amount=current,
        currency=currency,
        created_at=NOW,
        updated_at=NOW,
        is_completed=completed,
    )


def make_profile(**overrides) -> UserProfile:
    fields = dict(
        id="u1",
        email="ana@example.com",
        name="Ana",
        country="AR",
        currency=Currency.ARS,
        created_at=NOW,
        is_onboarded=True,
        preferred_balance_currency=Currency.USD,
    )
    fields.update(overrides)
    return UserProfile(**fields)


@pytest.fixture
def restore_logging():
    """Undo setup_logging's changes to the root logger."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
