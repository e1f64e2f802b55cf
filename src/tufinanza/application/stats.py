# src/tufinanza/application/stats.py
"""
Statistics - Balance and Savings Summaries

This module filters movements and computes totals in a single display
currency, converting every amount through the USD pivot.

Files that USE this module:
- tufinanza.app (balance summary)
- tests.test_stats (unit tests)

Files that this module USES:
- tufinanza.application.conversion (convert_currency)
- tufinanza.domain.models (Movement, SavingGoal, MovementType)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Iterable, List, Mapping, Optional

from tufinanza.application.conversion import convert_currency
from tufinanza.domain.currencies import Currency
from tufinanza.domain.models import Movement, MovementType, SavingGoal

logger = logging.getLogger(__name__)


class Period(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


@dataclass(frozen=True)
class MovementFilter:
    """Criteria for filter_movements; None fields match everything."""
    type: Optional[MovementType] = None
    category: Optional[str] = None
    currency: Optional[Currency] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None


@dataclass(frozen=True)
class BalanceStats:
    """Totals of movements in one currency over a period."""
    total_income: float
    total_expenses: float
    total_savings: float
    net_balance: float
    currency: Currency
    period: Period


@dataclass(frozen=True)
class SavingStats:
    """Aggregate progress of all saving goals in one currency."""
    total_goals: int
    completed_goals: int
    total_target_amount: float
    total_current_amount: float
    currency: Currency


def _aware(ts: datetime) -> datetime:
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


def period_start(period: Period, now: datetime) -> Optional[datetime]:
    """
    First instant included in a period ending at `now`.

    Day, month and year are calendar periods (UTC); week is the last 7 days.
    Returns None for Period.ALL.
    """
    now = _aware(now).astimezone(timezone.utc)
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if period == Period.DAY:
        return midnight
    if period == Period.WEEK:
        return midnight - timedelta(days=6)
    if period == Period.MONTH:
        return midnight.replace(day=1)
    if period == Period.YEAR:
        return midnight.replace(month=1, day=1)
    return None


def filter_movements(movements: Iterable[Movement], criteria: MovementFilter) -> List[Movement]:
    """Return the movements matching every set field of criteria."""
    result = []
    for movement in movements:
        if criteria.type is not None and movement.type != criteria.type:
            continue
        if criteria.category is not None and movement.category != criteria.category:
            continue
        if criteria.currency is not None and movement.currency != criteria.currency:
            continue
        if criteria.date_from is not None and _aware(movement.date) < _aware(criteria.date_from):
            continue
        if criteria.date_to is not None and _aware(movement.date) > _aware(criteria.date_to):
            continue
        result.append(movement)
    return result


def compute_balance_stats(
    movements: Iterable[Movement],
    currency: Currency,
    period: Period = Period.ALL,
    now: Optional[datetime] = None,
    rates: Optional[Mapping[Currency, float]] = None,
) -> BalanceStats:
    """
    Sum movements per type in the given currency.

    Args:
        movements: Movements to summarize
        currency: Display currency for the totals
        period: Only movements dated between the period start and now count
        now: End of the period (default: current UTC time)
        rates: Rate table for conversion (default: static table)

    Returns:
        BalanceStats where net_balance = income - expenses - savings
    """
    period = Period(period)
    now = now or datetime.now(timezone.utc)
    start = period_start(period, now)
    # Future-dated movements only count towards the all-time totals
    end = None if start is None else now
    selected = filter_movements(movements, MovementFilter(date_from=start, date_to=end))

    totals = {movement_type: 0.0 for movement_type in MovementType}
    for movement in selected:
        totals[movement.type] += convert_currency(movement.amount, movement.currency, currency, rates)

    income = totals[MovementType.INCOME]
    expenses = totals[MovementType.EXPENSE]
    savings = totals[MovementType.SAVING]
    logger.debug("Balance stats over %d movements (%s, %s)", len(selected), currency, period.value)
    return BalanceStats(
        total_income=income,
        total_expenses=expenses,
        total_savings=savings,
        net_balance=income - expenses - savings,
        currency=currency,
        period=period,
    )


def compute_saving_stats(
    goals: Iterable[SavingGoal],
    currency: Currency,
    rates: Optional[Mapping[Currency, float]] = None,
) -> SavingStats:
    """Sum targets and progress of all goals in the given currency."""
    goals = list(goals)
    return SavingStats(
        total_goals=len(goals),
        completed_goals=sum(1 for goal in goals if goal.is_completed),
        total_target_amount=sum(
            convert_currency(goal.target_amount, goal.currency, currency, rates) for goal in goals
        ),
        total_current_amount=sum(
            convert_currency(goal.current_amount, goal.currency, currency, rates) for goal in goals
        ),
        currency=currency,
    )
