"""Tests for timeline projection."""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from savetrack.domain.entities import GoalStatus, SavingsGoal, SavingsRate, TrendDirection
from savetrack.domain.errors import NotFoundError
from savetrack.domain.projection import (
    build_projection_data,
    calculate_confidence_level,
    project_timeline,
)
from savetrack.domain.rates import zero_savings_rate

TODAY = date(2026, 3, 1)


def _goal(current: str, target: str, days_out: int) -> SavingsGoal:
    now = datetime(2026, 1, 1)
    return SavingsGoal(
        id=7,
        user_id="alice",
        account_id=1,
        name="Deposit",
        target_amount=Decimal(target),
        current_amount=Decimal(current),
        initial_balance=Decimal("0"),
        target_date=TODAY + timedelta(days=days_out),
        priority=5,
        status=GoalStatus.ACTIVE,
        created_at=now,
        updated_at=now,
    )


def _rate(daily: str, average: str, trend: TrendDirection = TrendDirection.STABLE) -> SavingsRate:
    daily_rate = Decimal(daily)
    return SavingsRate(
        daily_rate=daily_rate,
        weekly_rate=daily_rate * 7,
        monthly_rate=daily_rate * 30,
        average_rate=Decimal(average),
        trend_direction=trend,
        sample_size=10,
    )


class TestConfidence:
    """Tests for the confidence heuristic."""

    def test_no_history(self):
        assert calculate_confidence_level(zero_savings_rate()) == Decimal("70.00")

    def test_increasing_and_consistent(self):
        assert calculate_confidence_level(_rate("10", "10", TrendDirection.INCREASING)) == Decimal("100.00")

    def test_decreasing(self):
        assert calculate_confidence_level(_rate("10", "10", TrendDirection.DECREASING)) == Decimal("50.00")

    def test_inconsistent_rate_lowers_confidence(self):
        # consistency = |5 - 20| / 20 = 0.75
        assert calculate_confidence_level(_rate("5", "20")) == Decimal("55.00")

    def test_clamped_at_zero(self):
        assert calculate_confidence_level(_rate("500", "2", TrendDirection.DECREASING)) == Decimal("0.00")


class TestProjectionData:
    """Tests for the projected curve."""

    def test_monthly_points(self):
        points = build_projection_data(
            Decimal("0"), Decimal("1200"), TODAY + timedelta(days=90), Decimal("10"), 30, TODAY
        )

        assert [p.date for p in points] == [TODAY + timedelta(days=30 * i) for i in range(4)]
        assert [p.projected_amount for p in points] == [
            Decimal("0.00"), Decimal("300.00"), Decimal("600.00"), Decimal("900.00"),
        ]
        assert [p.monthly_target for p in points] == [
            Decimal("400.00"), Decimal("800.00"), Decimal("1200.00"), Decimal("1600.00"),
        ]

    def test_projected_amount_capped_at_target(self):
        points = build_projection_data(
            Decimal("900"), Decimal("1000"), TODAY + timedelta(days=61), Decimal("10"), 30, TODAY
        )

        assert len(points) == 4
        assert points[-1].projected_amount == Decimal("1000.00")

    def test_past_target_date(self):
        points = build_projection_data(
            Decimal("300"), Decimal("1000"), TODAY - timedelta(days=3), Decimal("10"), 30, TODAY
        )

        assert len(points) == 1
        assert points[0].date == TODAY
        assert points[0].projected_amount == Decimal("300.00")


class TestProjectTimeline:
    """Tests for the projection bundle."""

    def test_on_track(self):
        projection = project_timeline(_goal("600", "1200", 100), _rate("10", "10"), today=TODAY)

        assert projection.days_to_complete == 60
        assert projection.projected_completion_date == TODAY + timedelta(days=60)
        assert projection.variance_in_days == -40
        assert projection.is_on_track is True
        assert projection.average_monthly_savings == Decimal("300.00")
        assert projection.required_monthly_savings == Decimal("180.00")

    def test_behind_schedule(self):
        projection = project_timeline(_goal("0", "1200", 30), _rate("10", "10"), today=TODAY)

        assert projection.days_to_complete == 120
        assert projection.variance_in_days == 90
        assert projection.is_on_track is False

    def test_rounds_days_up(self):
        projection = project_timeline(_goal("0", "100", 30), _rate("30", "30"), today=TODAY)

        assert projection.days_to_complete == 4

    def test_zero_rate_never_completes(self):
        projection = project_timeline(_goal("100", "1000", 90), zero_savings_rate(), today=TODAY)

        assert projection.projected_completion_date is None
        assert projection.days_to_complete is None
        assert projection.variance_in_days is None
        assert projection.is_on_track is False
        assert projection.confidence_level < Decimal("80")

    def test_completed_goal_with_positive_rate(self):
        projection = project_timeline(_goal("1000", "1000", 90), _rate("5", "5"), today=TODAY)

        assert projection.days_to_complete == 0
        assert projection.projected_completion_date == TODAY
        assert projection.is_on_track is True

    @pytest.mark.parametrize("daily", ["0", "-25"])
    def test_completed_goal_without_savings_rate(self, daily):
        projection = project_timeline(_goal("1000", "1000", 90), _rate(daily, daily), today=TODAY)

        assert projection.days_to_complete is None
        assert projection.projected_completion_date is None
        assert projection.variance_in_days is None
        assert projection.is_on_track is False

    def test_tiny_rate_beyond_calendar(self):
        projection = project_timeline(_goal("0", "1000000000", 90), _rate("0.0001", "0.0001"), today=TODAY)

        assert projection.projected_completion_date is None
        assert projection.is_on_track is False


class TestProjectionService:
    """Tests for projections of stored goals."""

    def test_goal_without_history(self, projection_service, sample_goal):
        projection = projection_service.get_timeline_projection(sample_goal.id, "alice")

        assert projection.goal_id == sample_goal.id
        assert projection.is_on_track is False
        assert projection.trend_direction == TrendDirection.STABLE
        assert projection.confidence_level == Decimal("70.00")
        assert len(projection.projection_data) == 14

    def test_missing_goal(self, projection_service, sample_goal):
        with pytest.raises(NotFoundError):
            projection_service.get_timeline_projection(sample_goal.id, "bob")
