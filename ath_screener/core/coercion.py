"""Turns messy spreadsheet cells into numbers.

Cells arrive as whatever the spreadsheet parser produced: numbers, strings
such as "$1,234.50" or "12.3%", booleans or nothing at all.
"""

import math
import re

from ath_screener.core.domain_models import CellValue

# Everything except digits, dot and minus is dropped before parsing.
_NON_NUMERIC_CHARS = re.compile(r"[^0-9.\-]+")
# Longest leading float literal of the stripped text, e.g. "1.2.3" -> "1.2".
_LEADING_FLOAT = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


def is_number(value: object) -> bool:
    """True for real numbers. Booleans are not numbers here."""
    return isinstance(value, int | float) and not isinstance(value, bool)


def stringify_cell(value: CellValue) -> str:
    """Display form of a cell value.

    Integral floats drop the trailing ".0" and booleans are lower case,
    so "95.0" and "95" filter and render the same way.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return str(int(value))
        return str(value)
    return str(value)


def extract_numeric_price(value: CellValue) -> float:
    """Coerce a cell value into a float.

    Numbers pass through unchanged. Absent, false and empty values count
    as "0". Anything else is stripped down to digits, "." and "-" and the
    leading float literal is parsed. Returns nan when nothing parses.
    Integers beyond the float range become a signed infinity.
    """
    if is_number(value):
        try:
            return float(value)  # type: ignore[arg-type]
        except OverflowError:
            return math.inf if value > 0 else -math.inf  # type: ignore[operator]

    if value is None or value is False or value == "":
        text = "0"
    else:
        text = stringify_cell(value)

    stripped = _NON_NUMERIC_CHARS.sub("", text)
    match = _LEADING_FLOAT.match(stripped)
    if match is None:
        return math.nan
    return float(match.group(0))


def calculate_percent_from_high(price: float, high: float) -> float:
    """Percentage the price sits below its high. 0 if the high is not positive."""
    return (high - price) / high * 100 if high > 0 else 0.0
