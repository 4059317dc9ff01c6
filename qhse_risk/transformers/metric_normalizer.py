"""
Metric normalization for QHSE project records.

Register values arrive as numbers, numeric strings, percent strings,
blanks or the 'N/A' sentinel. Every numeric read in the engine goes
through parse_number() or parse_percentage() so the "no data -> 0"
convention lives in one place.
"""

import math
import numbers
import re
from typing import Any

MISSING_SENTINELS = frozenset({'', 'N/A'})

# Plain decimal literal: sign, digits, optional fraction, optional exponent
_NUMERIC_RE = re.compile(r'^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$')


def is_missing(value: Any) -> bool:
    """
    Check whether a raw register value means "no data".

    Args:
        value: Raw field value

    Returns:
        True for None, blank strings and 'N/A'
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() in MISSING_SENTINELS
    if isinstance(value, float) and math.isnan(value):
        return True
    return False


def _coerce(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, numbers.Real):
        number = float(value)
    elif isinstance(value, str) and _NUMERIC_RE.match(value):
        number = float(value)
    else:
        return 0.0

    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def parse_number(value: Any) -> float:
    """
    Normalize a count or day-delay field.

    Args:
        value: Raw field value (number, numeric string, blank, 'N/A', ...)

    Returns:
        Finite non-negative float; 0 for missing or malformed input
    """
    if is_missing(value):
        return 0.0
    if isinstance(value, str):
        value = value.strip()
    return _coerce(value)


def parse_percentage(value: Any) -> float:
    """
    Normalize a percentage field.

    A single trailing '%' is stripped before coercion. Numbers are taken as
    already scaled: 83 and '83%' both mean 83 percent.

    Args:
        value: Raw field value

    Returns:
        Finite non-negative float; 0 for missing or malformed input
    """
    if is_missing(value):
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if value.endswith('%'):
            value = value[:-1].rstrip()
    return _coerce(value)


def format_metric(value: float) -> str:
    """Render a normalized metric for display ('125' rather than '125.0', all digits kept)."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
