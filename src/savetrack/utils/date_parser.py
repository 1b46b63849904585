"""Date parsing and day arithmetic utilities."""

from datetime import date, datetime, timedelta
from typing import Union
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

_SECONDS_PER_DAY = 86400


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2027-06-30", "June 30, 2027") and relative
    target dates:
    - "today", "tomorrow"
    - "next week", "next month", "next year"
    - "in N days", "in N weeks", "in N months", "in N years"

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    if date_str == "today":
        return today
    if date_str == "tomorrow":
        return today + timedelta(days=1)

    if date_str.startswith("next "):
        period = date_str[5:]
        if period == "week":
            return today + timedelta(weeks=1)
        elif period == "month":
            return today + relativedelta(months=1)
        elif period == "year":
            return today + relativedelta(years=1)

    if date_str.startswith("in "):
        parts = date_str[3:].split()
        if len(parts) == 2 and parts[0].isdigit():
            count = int(parts[0])
            unit = parts[1].rstrip("s")
            if unit == "day":
                return today + timedelta(days=count)
            elif unit == "week":
                return today + timedelta(weeks=count)
            elif unit == "month":
                return today + relativedelta(months=count)
            elif unit == "year":
                return today + relativedelta(years=count)

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def days_between(start: Union[date, datetime], end: Union[date, datetime]) -> int:
    """Whole days from start to end, truncated toward zero.

    Dates and datetimes can be mixed; a plain date counts as midnight.
    Negative when end is before start.
    """
    if not isinstance(start, datetime):
        start = datetime.combine(start, datetime.min.time())
    if not isinstance(end, datetime):
        end = datetime.combine(end, datetime.min.time())
    if (start.tzinfo is None) != (end.tzinfo is None):
        start = start.replace(tzinfo=None)
        end = end.replace(tzinfo=None)

    seconds = (end - start).total_seconds()
    return int(seconds / _SECONDS_PER_DAY)
