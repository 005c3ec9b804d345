import math
from collections.abc import Sequence

from ath_screener.core.column_resolver import COLUMN_RULES, find_row_key
from ath_screener.core.coercion import calculate_percent_from_high, extract_numeric_price
from ath_screener.core.domain_models import Row


def proximity_to_ath(
    row: Row,
    price_column: str | None = None,
    high_column: str | None = None,
) -> float:
    """Percent below the all-time high for one row; 0 when it cannot be computed."""
    price_key = find_row_key(row, price_column, COLUMN_RULES["price"])
    high_key = find_row_key(row, high_column, COLUMN_RULES["high"])
    if price_key is None or high_key is None:
        return 0.0

    percent = calculate_percent_from_high(
        extract_numeric_price(row[price_key]),
        extract_numeric_price(row[high_key]),
    )
    # nan would break the ordering, rank it as neutral instead
    return 0.0 if math.isnan(percent) else percent


def sort_stocks_by_proximity_to_ath(
    data: Sequence[Row],
    price_column: str | None = None,
    high_column: str | None = None,
) -> list[Row]:
    """
    Order rows from closest to furthest from their all-time high.

    Columns are resolved for every row on its own. Rows that cannot be
    measured are kept with a neutral distance of 0. The sort is stable.
    """
    if not data:
        return []
    return sorted(data, key=lambda row: proximity_to_ath(row, price_column, high_column))
