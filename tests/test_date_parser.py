"""Tests for date parsing and day arithmetic."""

import pytest
from datetime import date, datetime, timedelta, UTC
from dateutil.relativedelta import relativedelta
from savetrack.utils.date_parser import parse_date, days_between


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2027-06-30") == date(2027, 6, 30)
    assert parse_date("June 30, 2027") == date(2027, 6, 30)


def test_parse_today_and_tomorrow():
    assert parse_date("today") == date.today()
    assert parse_date("Tomorrow") == date.today() + timedelta(days=1)


def test_parse_next_periods():
    today = date.today()
    assert parse_date("next week") == today + timedelta(weeks=1)
    assert parse_date("next month") == today + relativedelta(months=1)
    assert parse_date("next year") == today + relativedelta(years=1)


@pytest.mark.parametrize(
    "text, delta",
    [
        ("in 10 days", timedelta(days=10)),
        ("in 1 day", timedelta(days=1)),
        ("in 3 weeks", timedelta(weeks=3)),
        ("in 6 months", relativedelta(months=6)),
        ("in 2 years", relativedelta(years=2)),
    ],
)
def test_parse_in_n_units(text, delta):
    assert parse_date(text) == date.today() + delta


def test_parse_invalid():
    with pytest.raises(ValueError):
        parse_date("someday")


def test_days_between_dates():
    assert days_between(date(2026, 1, 1), date(2026, 1, 31)) == 30
    assert days_between(date(2026, 1, 31), date(2026, 1, 1)) == -30


def test_days_between_truncates_partial_days():
    start = datetime(2026, 1, 1, 12, 0)
    assert days_between(start, datetime(2026, 1, 2, 11, 59)) == 0
    assert days_between(start, datetime(2026, 1, 3, 13, 0)) == 2
    # Truncation is toward zero, not floor
    assert days_between(start, datetime(2025, 12, 31, 13, 0)) == 0


def test_days_between_mixed_types():
    assert days_between(date(2026, 1, 1), datetime(2026, 1, 4, 6, 0)) == 3
    assert days_between(datetime(2026, 1, 1, 0, 0, tzinfo=UTC), date(2026, 1, 5)) == 4
