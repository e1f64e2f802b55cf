# src/tufinanza/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains the records the app persists and exchanges:
- Market data (USDT quote, exchange rate snapshots)
- User profile
- Movements (income, expense, saving)
- Saving goals and saving transactions
- Reference data (categories, countries)

Every persisted record owns its JSON codec (to_json / from_json). The key-value
store only keeps plain text, so datetime fields are written as ISO-8601 strings
and rebuilt on read. Keys are camelCase to stay compatible with data written by
earlier versions of the app.

Files that USE this module:
- tufinanza.application.* (services build and consume these records)
- tufinanza.adapters.persistence.database (encode/decode on every read/write)
- tests.* (tests use domain models for test data)

Files that this module USES:
- tufinanza.domain.currencies (Currency enum)
- tufinanza.domain.errors (InvalidRecordError on decode failures)
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from tufinanza.domain.currencies import Currency
from tufinanza.domain.errors import InvalidRecordError


def parse_timestamp(raw: Any) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware UTC datetime.

    Accepts both "...Z" and "+00:00" suffixes. Naive values are assumed UTC.

    Raises:
        InvalidRecordError: If the value is not a valid timestamp
    """
    if isinstance(raw, datetime):
        ts = raw
    elif isinstance(raw, str):
        try:
            ts = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError as e:
            raise InvalidRecordError(f"Invalid timestamp: {raw!r}") from e
    else:
        raise InvalidRecordError(f"Invalid timestamp: {raw!r}")
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def format_timestamp(ts: datetime) -> str:
    """Render a datetime as ISO-8601 text in UTC with a trailing Z."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _optional_timestamp(raw: Any) -> Optional[datetime]:
    if raw in (None, ""):
        return None
    return parse_timestamp(raw)


def _currency(raw: Any) -> Currency:
    try:
        return Currency(raw)
    except ValueError as e:
        raise InvalidRecordError(f"Unsupported currency: {raw!r}") from e


class QuoteSource(str, Enum):
    """Where a USDT quote came from."""
    SIMULATION = "simulation"
    BINANCE = "binance"


class RatesSource(str, Enum):
    """Where an exchange rate snapshot came from."""
    SIMULATION = "simulation"
    API = "api"


class MovementType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"
    SAVING = "saving"


class TransactionType(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


@dataclass(frozen=True)
class USDTQuote:
    """
    Price of one USDT in ARS at a point in time.

    Attributes:
        price: ARS per USDT (positive)
        timestamp: When the quote was produced (UTC)
        source: Simulated or external feed
    """
    price: float
    timestamp: datetime
    source: QuoteSource = QuoteSource.SIMULATION

    def to_json(self) -> dict:
        return {
            "price": self.price,
            "timestamp": format_timestamp(self.timestamp),
            "source": self.source.value,
        }

    @staticmethod
    def from_json(data: dict) -> "USDTQuote":
        try:
            price = float(data["price"])
            source = QuoteSource(data.get("source", QuoteSource.SIMULATION.value))
        except (KeyError, ValueError, TypeError) as e:
            raise InvalidRecordError(f"Invalid USDT quote: {e}") from e
        if price <= 0:
            raise InvalidRecordError(f"Invalid USDT quote price: {price}")
        return USDTQuote(
            price=price,
            timestamp=parse_timestamp(data.get("timestamp")),
            source=source,
        )


@dataclass(frozen=True)
class ExchangeRates:
    """
    Snapshot of the USD rate table.

    from_json only accepts a snapshot with a positive, finite rate for
    every Currency.

    Attributes:
        rates: Currency -> value of one unit in USD (USD is always 1)
        timestamp: When the snapshot was produced (UTC)
        source: Simulated or external feed
        base: Always "USD"
    """
    rates: Dict[Currency, float]
    timestamp: datetime
    source: RatesSource = RatesSource.SIMULATION
    base: str = "USD"

    def to_json(self) -> dict:
        return {
            "base": self.base,
            "rates": {code.value: rate for code, rate in self.rates.items()},
            "timestamp": format_timestamp(self.timestamp),
            "source": self.source.value,
        }

    @staticmethod
    def from_json(data: dict) -> "ExchangeRates":
        try:
            raw_rates = data["rates"]
            source = RatesSource(data.get("source", RatesSource.SIMULATION.value))
            rates: Dict[Currency, float] = {}
            for code, rate in raw_rates.items():
                try:
                    currency = Currency(code)
                except ValueError:
                    # Codes from other app versions are ignored
                    continue
                rates[currency] = float(rate)
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise InvalidRecordError(f"Invalid exchange rates: {e}") from e
        base = data.get("base", "USD")
        if base != "USD":
            raise InvalidRecordError(f"Unsupported exchange rate base: {base!r}")
        missing = [currency.value for currency in Currency if currency not in rates]
        if missing:
            raise InvalidRecordError(f"Exchange rates missing for: {', '.join(missing)}")
        bad = [currency.value for currency, rate in rates.items() if not math.isfinite(rate) or rate <= 0]
        if bad:
            raise InvalidRecordError(f"Exchange rates must be positive: {', '.join(bad)}")
        return ExchangeRates(
            rates=rates,
            timestamp=parse_timestamp(data.get("timestamp")),
            source=source,
            base=base,
        )


@dataclass(frozen=True)
class UserProfile:
    """The single local user of the app."""
    id: str
    email: str
    name: str
    country: str
    currency: Currency
    created_at: datetime
    is_onboarded: bool = False
    preferred_balance_currency: Currency = Currency.USD

    def to_json(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "country": self.country,
            "currency": self.currency.value,
            "createdAt": format_timestamp(self.created_at),
            "isOnboarded": self.is_onboarded,
            "preferredBalanceCurrency": self.preferred_balance_currency.value,
        }

    @staticmethod
    def from_json(data: dict) -> "UserProfile":
        try:
            return UserProfile(
                id=str(data["id"]),
                email=str(data.get("email", "")),
                name=str(data.get("name", "")),
                country=str(data.get("country", "")),
                currency=_currency(data["currency"]),
                created_at=parse_timestamp(data.get("createdAt")),
                is_onboarded=bool(data.get("isOnboarded", False)),
                preferred_balance_currency=_currency(
                    data.get("preferredBalanceCurrency", Currency.USD.value)
                ),
            )
        except (KeyError, TypeError) as e:
            raise InvalidRecordError(f"Invalid user profile: {e}") from e


@dataclass(frozen=True)
class Movement:
    """An income, expense or saving entry."""
    id: str
    type: MovementType
    amount: float
    currency: Currency
    category: str
    description: str
    date: datetime
    created_at: datetime
    updated_at: datetime

    def to_json(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "amount": self.amount,
            "currency": self.currency.value,
            "category": self.category,
            "description": self.description,
            "date": format_timestamp(self.date),
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
        }

    @staticmethod
    def from_json(data: dict) -> "Movement":
        try:
            return Movement(
                id=str(data["id"]),
                type=MovementType(data["type"]),
                amount=float(data["amount"]),
                currency=_currency(data["currency"]),
                category=str(data.get("category", "")),
                description=str(data.get("description", "")),
                date=parse_timestamp(data.get("date")),
                created_at=parse_timestamp(data.get("createdAt")),
                updated_at=parse_timestamp(data.get("updatedAt")),
            )
        except (KeyError, ValueError, TypeError) as e:
            raise InvalidRecordError(f"Invalid movement: {e}") from e


@dataclass(frozen=True)
class SavingGoal:
    """A savings target the user contributes to."""
    id: str
    title: str
    target_amount: float
    current_amount: float
    currency: Currency
    created_at: datetime
    updated_at: datetime
    is_completed: bool = False
    deadline: Optional[datetime] = None

    @property
    def progress(self) -> float:
        """Fraction of the target reached, clamped to [0, 1]."""
        if self.target_amount <= 0:
            return 0.0
        return max(0.0, min(1.0, self.current_amount / self.target_amount))

    def to_json(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "targetAmount": self.target_amount,
            "currentAmount": self.current_amount,
            "currency": self.currency.value,
            "deadline": format_timestamp(self.deadline) if self.deadline else None,
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
            "isCompleted": self.is_completed,
        }

    @staticmethod
    def from_json(data: dict) -> "SavingGoal":
        try:
            return SavingGoal(
                id=str(data["id"]),
                title=str(data.get("title", "")),
                target_amount=float(data["targetAmount"]),
                current_amount=float(data.get("currentAmount", 0)),
                currency=_currency(data["currency"]),
                created_at=parse_timestamp(data.get("createdAt")),
                updated_at=parse_timestamp(data.get("updatedAt")),
                is_completed=bool(data.get("isCompleted", False)),
                deadline=_optional_timestamp(data.get("deadline")),
            )
        except (KeyError, ValueError, TypeError) as e:
            raise InvalidRecordError(f"Invalid saving goal: {e}") from e


@dataclass(frozen=True)
class SavingTransaction:
    """A deposit to or withdrawal from a saving goal."""
    id: str
    goal_id: str
    amount: float
    currency: Currency
    type: TransactionType
    date: datetime
    created_at: datetime
    description: Optional[str] = None

    def to_json(self) -> dict:
        return {
            "id": self.id,
            "goalId": self.goal_id,
            "amount": self.amount,
            "currency": self.currency.value,
            "type": self.type.value,
            "description": self.description,
            "date": format_timestamp(self.date),
            "createdAt": format_timestamp(self.created_at),
        }

    @staticmethod
    def from_json(data: dict) -> "SavingTransaction":
        try:
            return SavingTransaction(
                id=str(data["id"]),
                goal_id=str(data["goalId"]),
                amount=float(data["amount"]),
                currency=_currency(data["currency"]),
                type=TransactionType(data["type"]),
                date=parse_timestamp(data.get("date")),
                created_at=parse_timestamp(data.get("createdAt")),
                description=data.get("description"),
            )
        except (KeyError, ValueError, TypeError) as e:
            raise InvalidRecordError(f"Invalid saving transaction: {e}") from e


@dataclass(frozen=True)
class Category:
    """Movement category shown in pickers."""
    id: str
    name: str
    type: MovementType
    icon: str
    color: str


@dataclass(frozen=True)
class Country:
    """Country with its default currency and flag."""
    code: str
    name: str
    currency: Currency
    flag: str = ""
