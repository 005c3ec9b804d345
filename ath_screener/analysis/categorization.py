"""Market capitalization tiers.

Thresholds are absolute amounts applied to the "Market capitalization"
cell as-is. The source files do not share a currency, and the
"Market capitalization - Currency" column is carried along for display
only, never used for conversion.
"""

import math
from collections.abc import Sequence

from loguru import logger

from ath_screener.config.models import MarketCapThresholds
from ath_screener.core.coercion import extract_numeric_price, stringify_cell
from ath_screener.core.domain_models import (
    MARKET_CAP_CATEGORY_COLUMN,
    MARKET_CAP_COLUMN,
    MARKET_CAP_CURRENCY_COLUMN,
    CategorizationResult,
    CategorizationSummary,
    CategorizedStock,
    MarketCapCategory,
    Row,
)

DEFAULT_THRESHOLDS = MarketCapThresholds()

SUMMARY_FIELDS: dict[MarketCapCategory, str] = {
    MarketCapCategory.LARGE_CAP: "large_cap",
    MarketCapCategory.MID_CAP: "mid_cap",
    MarketCapCategory.SMALL_CAP: "small_cap",
    MarketCapCategory.MICRO_CAP: "micro_cap",
    MarketCapCategory.UNKNOWN: "unknown",
}


def categorize_stock(
    row: Row, thresholds: MarketCapThresholds = DEFAULT_THRESHOLDS
) -> MarketCapCategory:
    """Assign a market cap tier to a row. Largest tier is checked first."""
    raw_value = row.get(MARKET_CAP_COLUMN)
    if raw_value is None or isinstance(raw_value, bool):
        return MarketCapCategory.UNKNOWN
    if isinstance(raw_value, str) and not raw_value.strip():
        return MarketCapCategory.UNKNOWN

    market_cap = extract_numeric_price(raw_value)
    if math.isnan(market_cap):
        return MarketCapCategory.UNKNOWN

    if market_cap >= thresholds.large_cap:
        return MarketCapCategory.LARGE_CAP
    if market_cap >= thresholds.mid_cap:
        return MarketCapCategory.MID_CAP
    if market_cap >= thresholds.small_cap:
        return MarketCapCategory.SMALL_CAP
    return MarketCapCategory.MICRO_CAP


def to_categorized_stock(row: Row) -> CategorizedStock:
    return CategorizedStock(
        symbol=stringify_cell(row.get("Symbol")),
        description=stringify_cell(row.get("Description")),
        market_cap=row.get(MARKET_CAP_COLUMN),
        market_cap_currency=stringify_cell(row.get(MARKET_CAP_CURRENCY_COLUMN)),
    )


def categorize_stocks(
    rows: Sequence[Row], thresholds: MarketCapThresholds = DEFAULT_THRESHOLDS
) -> CategorizationResult:
    """Partition rows into the five market cap buckets with summary counts."""
    buckets: dict[MarketCapCategory, list[CategorizedStock]] = {
        category: [] for category in MarketCapCategory
    }
    for row in rows:
        buckets[categorize_stock(row, thresholds)].append(to_categorized_stock(row))

    counts = {SUMMARY_FIELDS[category]: len(stocks) for category, stocks in buckets.items()}
    summary = CategorizationSummary(total=len(rows), **counts)
    logger.debug(f"Categorized {summary.total} rows: {counts}")

    return CategorizationResult(summary=summary, categorized_stocks=buckets)


def add_market_cap_category(
    rows: Sequence[Row], thresholds: MarketCapThresholds = DEFAULT_THRESHOLDS
) -> list[Row]:
    """Copy of the rows with a derived "Market Cap Category" field."""
    return [
        {**row, MARKET_CAP_CATEGORY_COLUMN: categorize_stock(row, thresholds).value}
        for row in rows
    ]
