"""Savings rate estimation from progress history.

The estimator is a windowed linear model: the net change across the most
recent history entries divided by the days they span, plus a trend label
from comparing the newest and oldest changes in the window.
"""

from decimal import Decimal
from typing import Sequence

from savetrack.config import DEFAULT_SETTINGS, DAYS_PER_MONTH, DAYS_PER_WEEK, EngineSettings
from savetrack.database.base import Database
from savetrack.domain.entities import GoalProgressHistory, SavingsRate, TrendDirection
from savetrack.utils.date_parser import days_between
from savetrack.utils.money import ZERO


def zero_savings_rate(sample_size: int = 0) -> SavingsRate:
    """Rate returned when there is not enough history to estimate one."""
    return SavingsRate(
        daily_rate=ZERO,
        weekly_rate=ZERO,
        monthly_rate=ZERO,
        average_rate=ZERO,
        trend_direction=TrendDirection.STABLE,
        sample_size=sample_size,
    )


def _mean(values: Sequence[Decimal]) -> Decimal:
    return sum(values, ZERO) / len(values)


def classify_trend(
    recent_average: Decimal, older_average: Decimal, settings: EngineSettings = DEFAULT_SETTINGS
) -> TrendDirection:
    """Label recent velocity relative to older velocity."""
    if recent_average > older_average * settings.trend_increase_factor:
        return TrendDirection.INCREASING
    if recent_average < older_average * settings.trend_decrease_factor:
        return TrendDirection.DECREASING
    return TrendDirection.STABLE


def estimate_savings_rate(
    history: Sequence[GoalProgressHistory], settings: EngineSettings = DEFAULT_SETTINGS
) -> SavingsRate:
    """Estimate savings velocity from history entries ordered newest first.

    Only the first settings.history_window entries are used. Fewer than two
    entries yield zero rates and a stable trend.

    Args:
        history: Progress history, newest first
        settings: Engine settings

    Returns:
        SavingsRate at full Decimal precision
    """
    entries = list(history)[: settings.history_window]
    if len(entries) < 2:
        return zero_savings_rate(len(entries))

    changes = [entry.change_amount for entry in entries]
    total_change = sum(changes, ZERO)
    days = max(1, days_between(entries[-1].recorded_at, entries[0].recorded_at))

    daily_rate = total_change / days
    sample = settings.trend_sample_size
    trend = classify_trend(_mean(changes[:sample]), _mean(changes[-sample:]), settings)

    return SavingsRate(
        daily_rate=daily_rate,
        weekly_rate=daily_rate * DAYS_PER_WEEK,
        monthly_rate=daily_rate * DAYS_PER_MONTH,
        average_rate=total_change / len(entries),
        trend_direction=trend,
        sample_size=len(entries),
    )


class SavingsRateService:
    """Loads a goal's history window and estimates its savings rate."""

    def __init__(self, db: Database, settings: EngineSettings = DEFAULT_SETTINGS):
        self.db = db
        self.settings = settings

    def calculate_savings_rate(self, goal_id: int) -> SavingsRate:
        """Estimate the savings rate of a goal from its recent history."""
        history = self.db.list_progress_history(goal_id, limit=self.settings.history_window)
        return estimate_savings_rate(history, self.settings)
