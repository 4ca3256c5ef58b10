"""
Numeric parsing and rendering shared by validators and builders.
"""

import math
import re

DECIMAL_PATTERN = re.compile(r"^[-+]?(?:\d+(?:\.\d*)?|\.\d+)$")


def parse_number(value: object) -> int | float | None:
    """
    Coerce a parameter value to a number.

    Booleans are never numbers. Text must be a plain decimal literal;
    integral text parses to int, anything with a decimal point to float.

    Params:
        value: Candidate value

    Returns:
        The number, or None when the value is not numeric
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        if not DECIMAL_PATTERN.match(text):
            return None
        if "." in text:
            return float(text)
        return int(text)
    return None


def format_number(value: int | float) -> str:
    """
    Render a number the way the console expects it.

    Integral floats drop their fraction, so 3.0 renders as "3".

    Params:
        value: Number to render

    Returns:
        Shortest faithful text form
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)
