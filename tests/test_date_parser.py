"""Tests for date parser with relative dates."""

import pytest
from datetime import date, timedelta
from charitycomply.utils.date_parser import parse_date, parse_optional_date

TODAY = date(2025, 6, 1)


def test_parse_iso_date():
    """Test parsing ISO dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_day_first():
    """Slash dates are read UK style, day first."""
    assert parse_date("01/02/2024") == date(2024, 2, 1)
    assert parse_date("15/01/2024") == date(2024, 1, 15)


def test_parse_written_date():
    assert parse_date("15 January 2024") == date(2024, 1, 15)


def test_parse_today():
    """Test parsing 'today'."""
    assert parse_date("today") == date.today()
    assert parse_date("Today", today=TODAY) == TODAY


def test_parse_yesterday_and_tomorrow():
    assert parse_date("yesterday", today=TODAY) == TODAY - timedelta(days=1)
    assert parse_date("tomorrow", today=TODAY) == TODAY + timedelta(days=1)


def test_parse_future_offset():
    assert parse_date("in 10 days", today=TODAY) == date(2025, 6, 11)
    assert parse_date("in 3 years", today=TODAY) == date(2028, 6, 1)


def test_parse_past_offset():
    assert parse_date("2 weeks ago", today=TODAY) == date(2025, 5, 18)
    assert parse_date("1 month ago", today=TODAY) == date(2025, 5, 1)


def test_offset_without_direction_rejected():
    with pytest.raises(ValueError):
        parse_date("10 days", today=TODAY)


def test_invalid_date():
    """Test parsing invalid date raises ValueError."""
    with pytest.raises(ValueError):
        parse_date("not a date")
    with pytest.raises(ValueError):
        parse_date("2024-13-45")


def test_parse_optional_date():
    assert parse_optional_date(None) is None
    assert parse_optional_date("   ") is None
    assert parse_optional_date("2024-01-15") == date(2024, 1, 15)
