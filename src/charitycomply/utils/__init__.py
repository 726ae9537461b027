"""Utility functions for charitycomply."""

from charitycomply.utils.date_parser import parse_date, parse_optional_date
from charitycomply.utils.amount_parser import parse_amount
from charitycomply.utils.flag_parser import parse_flag

__all__ = ["parse_date", "parse_optional_date", "parse_amount", "parse_flag"]
