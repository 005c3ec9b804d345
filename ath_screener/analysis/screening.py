"""Screens rows by their distance to the all-time high.

Both screens resolve the price and high columns per row, since uploaded
files do not guarantee a uniform key set. Rows with an unresolved column
or a non-numeric cell are dropped silently.
"""

import math
from collections.abc import Sequence

from ath_screener.core.column_resolver import (
    AT_HIGH_PRICE_RULES,
    COLUMN_RULES,
    SCREEN_FALLBACK_RULES,
    HeaderRule,
    find_row_key,
)
from ath_screener.core.coercion import extract_numeric_price
from ath_screener.core.domain_models import Row


def _price_and_high(
    row: Row,
    price_column: str | None,
    high_column: str | None,
    price_rules: Sequence[HeaderRule],
    high_rules: Sequence[HeaderRule],
) -> tuple[float, float] | None:
    """Coerced (price, high) for a row, or None if either is missing or non-numeric."""
    price_key = find_row_key(row, price_column, price_rules)
    high_key = find_row_key(row, high_column, high_rules)
    if price_key is None or high_key is None:
        return None

    price = extract_numeric_price(row[price_key])
    high = extract_numeric_price(row[high_key])
    if math.isnan(price) or math.isnan(high) or high <= 0:
        return None
    return price, high


def find_stocks_within_threshold(
    data: Sequence[Row],
    price_column: str,
    high_column: str,
    percent_threshold: float,
) -> list[Row]:
    """Rows at most percent_threshold% below their all-time high.

    A price above the recorded high gives a negative distance and always
    passes a non-negative threshold.
    """
    if not data:
        return []

    result = []
    for row in data:
        values = _price_and_high(
            row,
            price_column,
            high_column,
            SCREEN_FALLBACK_RULES["price"],
            SCREEN_FALLBACK_RULES["high"],
        )
        if values is None:
            continue
        price, high = values
        if (high - price) / high <= percent_threshold / 100:
            result.append(row)
    return result


def find_stocks_at_all_time_high(
    data: Sequence[Row],
    price_column: str | None = None,
    high_column: str | None = None,
    tolerance_percent: float = 0.1,
) -> list[Row]:
    """Rows trading at, above, or within tolerance_percent% of their all-time high."""
    if not data:
        return []

    result = []
    for row in data:
        values = _price_and_high(
            row,
            price_column,
            high_column,
            AT_HIGH_PRICE_RULES,
            COLUMN_RULES["high"],
        )
        if values is None:
            continue
        price, high = values
        # price >= high passes even at zero tolerance
        if (high - price) / high <= tolerance_percent / 100 or price >= high:
            result.append(row)
    return result
