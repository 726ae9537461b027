"""Date parsing utilities."""

import re
from datetime import date, timedelta
from typing import Optional
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

_RELATIVE_OFFSET = re.compile(r"^(in )?(\d+) (day|week|month|year)s?( ago)?$")


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "15/01/2024" (day first, UK style),
      "15 January 2024", etc.
    - Relative dates: "today", "yesterday", "tomorrow", "in 10 days",
      "3 months ago"

    Args:
        date_str: Date string in various formats
        today: Reference date for relative dates (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    if today is None:
        today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    match = _RELATIVE_OFFSET.match(date_str)
    if match:
        is_future, amount, unit, is_past = match.groups()
        if bool(is_future) == bool(is_past):
            raise ValueError(f"Could not parse date '{date_str}': use 'in N {unit}s' or 'N {unit}s ago'")
        delta = relativedelta(**{f"{unit}s": int(amount)})
        return today + delta if is_future else today - delta

    # ISO dates are unambiguous; everything else is read day first
    try:
        if re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
            return date.fromisoformat(date_str)
        dt = date_parser.parse(date_str, dayfirst=True)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_optional_date(date_str: Optional[str], today: Optional[date] = None) -> Optional[date]:
    """Parse a date string, returning None for empty input."""
    if date_str is None or not date_str.strip():
        return None
    return parse_date(date_str, today=today)
