"""Yes/no flag parsing for imported records."""

from typing import Optional

TRUE_VALUES = {"y", "yes", "true", "t", "1", "x"}
FALSE_VALUES = {"n", "no", "false", "f", "0"}


def parse_flag(value: Optional[str]) -> Optional[bool]:
    """Parse a yes/no cell into a bool.

    Empty cells return None so that scoring can treat the flag as unknown.

    Raises:
        ValueError: If the value is not a recognised yes/no token
    """
    if value is None:
        return None
    normalized = value.strip().lower()
    if not normalized:
        return None
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ValueError(f"Could not parse yes/no value '{value}'")
