"""TradingView symbol export.

The "TV SYMBOL" field is consumed by watchlist imports, so its format
("NSE:" + symbol, comma separated on export) must stay exactly as is.
"""

from collections.abc import Sequence

from ath_screener.core.column_resolver import COLUMN_RULES, find_header
from ath_screener.core.coercion import stringify_cell
from ath_screener.core.domain_models import TV_SYMBOL_COLUMN, Row

TV_SYMBOL_PREFIX = "NSE:"


def _is_truthy(value: object) -> bool:
    # zero, nan, empty text and False carry no symbol
    return bool(value) and value == value


def add_tradingview_symbols(data: Sequence[Row]) -> list[Row]:
    """Copy of the rows with a "TV SYMBOL" field wherever a symbol is present."""
    result: list[Row] = []
    for row in data:
        symbol_key = find_header(row.keys(), COLUMN_RULES["symbol"])
        if symbol_key is not None and _is_truthy(row[symbol_key]):
            result.append(
                {**row, TV_SYMBOL_COLUMN: f"{TV_SYMBOL_PREFIX}{stringify_cell(row[symbol_key])}"}
            )
        else:
            result.append(row)
    return result


def collect_tradingview_symbols(data: Sequence[Row]) -> str:
    """Comma separated "TV SYMBOL" values, skipping rows without one."""
    return ",".join(
        str(row[TV_SYMBOL_COLUMN]) for row in data if row.get(TV_SYMBOL_COLUMN)
    )
