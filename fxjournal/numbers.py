"""Lenient number parsing for user-entered values."""

import math
from typing import Any


def parse_number(value: Any) -> float:
    """Parse a user-entered value into a float.

    Numbers pass through unchanged; strings are stripped and parsed.
    Anything that cannot be read as a finite number, infinities included,
    becomes NaN, which callers treat as "unavailable" rather than zero.

    Args:
        value: Raw value (number, numeric string, or anything else).

    Returns:
        Parsed float, or NaN.
    """
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return math.nan
    else:
        return math.nan
    return number if math.isfinite(number) else math.nan


def is_blank(value: Any) -> bool:
    """Return True for None and whitespace-only strings."""
    return value is None or (isinstance(value, str) and not value.strip())


def is_finite_number(value: Any) -> bool:
    """Return True if the value parses to a finite float."""
    return math.isfinite(parse_number(value))
