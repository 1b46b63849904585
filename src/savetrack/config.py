"""Tuning constants for the savings engine."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

# Number of most recent history entries sampled by the rate estimator
HISTORY_WINDOW = 30

# Entries averaged on each side of the trend comparison
TREND_SAMPLE_SIZE = 5

TREND_INCREASE_FACTOR = Decimal("1.1")
TREND_DECREASE_FACTOR = Decimal("0.9")

STANDARD_MILESTONES = (25, 50, 75, 100)

DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30
PROJECTION_STEP_DAYS = 30

BASE_CONFIDENCE = Decimal("50")
INCREASING_CONFIDENCE_BONUS = Decimal("30")
DECREASING_CONFIDENCE_PENALTY = Decimal("20")
CONSISTENCY_WEIGHT = Decimal("20")

DEFAULT_PRIORITY = 5
MIN_PRIORITY = 1
MAX_PRIORITY = 10
MAX_GOAL_NAME_LENGTH = 100

DB_PATH_ENV_VAR = "SAVETRACK_DB_PATH"


@dataclass(frozen=True)
class EngineSettings:
    """Knobs that control rate estimation, milestones and classification.

    ahead_threshold_days: when set, a goal whose projected completion falls at
        least this many days before its target date is classified as ahead.
        None disables the ahead bucket entirely.
    """

    history_window: int = HISTORY_WINDOW
    trend_sample_size: int = TREND_SAMPLE_SIZE
    trend_increase_factor: Decimal = TREND_INCREASE_FACTOR
    trend_decrease_factor: Decimal = TREND_DECREASE_FACTOR
    milestone_percentages: tuple[int, ...] = STANDARD_MILESTONES
    projection_step_days: int = PROJECTION_STEP_DAYS
    ahead_threshold_days: Optional[int] = None


DEFAULT_SETTINGS = EngineSettings()
