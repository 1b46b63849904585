"""On-track evaluation of savings goals."""

from datetime import date
from decimal import Decimal, ROUND_CEILING
from typing import Optional

from savetrack.config import DEFAULT_SETTINGS, EngineSettings
from savetrack.domain.entities import GoalTrackStatus
from savetrack.utils.date_parser import days_between


def required_daily_savings(
    current_amount: Decimal,
    target_amount: Decimal,
    target_date: date,
    today: Optional[date] = None,
) -> Decimal:
    """Daily amount needed to close the gap by the target date.

    Days remaining floor at 1, so past-due goals need the whole remainder
    in a single day.
    """
    today = today or date.today()
    remaining_amount = target_amount - current_amount
    days_remaining = max(days_between(today, target_date), 1)
    return remaining_amount / days_remaining


def is_goal_on_track(
    current_amount: Decimal,
    target_amount: Decimal,
    target_date: date,
    daily_rate: Decimal,
    today: Optional[date] = None,
) -> bool:
    """True when daily_rate meets the required daily savings.

    A goal with nothing left to save is on track whatever its rate.
    """
    if target_amount - current_amount <= 0:
        return True
    return daily_rate >= required_daily_savings(current_amount, target_amount, target_date, today)


def days_to_complete(remaining_amount: Decimal, daily_rate: Decimal) -> Optional[int]:
    """Whole days until remaining_amount is saved at daily_rate.

    Returns 0 when nothing remains and None when the rate never gets there.
    """
    if remaining_amount <= 0:
        return 0
    if daily_rate <= 0:
        return None
    return int((remaining_amount / daily_rate).to_integral_value(rounding=ROUND_CEILING))


def classify_goal(
    current_amount: Decimal,
    target_amount: Decimal,
    target_date: date,
    daily_rate: Decimal,
    settings: EngineSettings = DEFAULT_SETTINGS,
    today: Optional[date] = None,
) -> GoalTrackStatus:
    """Classify a goal as behind, on track or ahead of schedule.

    AHEAD is only produced when settings.ahead_threshold_days is set and the
    projected completion lands at least that many days before target_date.
    """
    today = today or date.today()
    if not is_goal_on_track(current_amount, target_amount, target_date, daily_rate, today):
        return GoalTrackStatus.BEHIND

    if settings.ahead_threshold_days is not None:
        days_needed = days_to_complete(target_amount - current_amount, daily_rate)
        if days_needed is not None:
            days_early = days_between(today, target_date) - days_needed
            if days_early >= settings.ahead_threshold_days:
                return GoalTrackStatus.AHEAD

    return GoalTrackStatus.ON_TRACK
