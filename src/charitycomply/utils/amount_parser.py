"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse a sterling amount string into a Decimal with two places.

    Handles various formats:
    - "123.45"
    - "£123.45"
    - "1,234.56"
    - "1234.56 GBP"
    - "(123.45)" (negative in parentheses, e.g. refunds)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount rounded to pence

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = re.sub(r"(?i)\bgbp\b", "", amount_str)
    amount_str = re.sub(r"[£$€]", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str).quantize(Decimal("0.01"))
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    return -amount if is_negative else amount
