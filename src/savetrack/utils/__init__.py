"""Utility functions for savetrack."""

from savetrack.utils.date_parser import parse_date, days_between
from savetrack.utils.amount_parser import parse_amount
from savetrack.utils.money import to_money, progress_percentage

__all__ = ["parse_date", "days_between", "parse_amount", "to_money", "progress_percentage"]
