"""Builds the all-time-high analyses shown on the dashboard.

Pure Python - the same functions back the Streamlit page and the CLI.
"""

from dataclasses import dataclass

from loguru import logger

from ath_screener.analysis.categorization import DEFAULT_THRESHOLDS, add_market_cap_category
from ath_screener.analysis.ranking import sort_stocks_by_proximity_to_ath
from ath_screener.analysis.screening import (
    find_stocks_at_all_time_high,
    find_stocks_within_threshold,
)
from ath_screener.analysis.symbols import add_tradingview_symbols, collect_tradingview_symbols
from ath_screener.app.logic.table import DataTable, ExtraCell, ExtraColumn
from ath_screener.config.models import Config, MarketCapThresholds
from ath_screener.core.column_resolver import SCREEN_FALLBACK_RULES, find_row_key, resolve_columns
from ath_screener.core.coercion import calculate_percent_from_high, extract_numeric_price
from ath_screener.core.domain_models import (
    MARKET_CAP_COLUMN,
    PERCENT_FROM_HIGH_COLUMN,
    Dataset,
    ResolvedColumns,
    Row,
)

# At or below this distance the "% From High" cell is highlighted as positive.
CLOSE_TO_HIGH_PERCENT = 10.0


@dataclass(frozen=True)
class StockAnalysis:
    """One screened and ranked view of the dataset."""

    title: str
    found_message: str
    empty_message: str
    rows: list[Row]
    columns: ResolvedColumns

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def symbols(self) -> str:
        return collect_tradingview_symbols(self.rows)

    def make_table(self, rows_per_page: int = 10) -> DataTable:
        return DataTable(
            self.rows,
            rows_per_page=rows_per_page,
            extra_column=percent_from_high_column(self.columns),
        )


@dataclass(frozen=True)
class DashboardAnalysis:
    columns: ResolvedColumns
    near_high: StockAnalysis
    at_high: StockAnalysis


def percent_from_high_cell(row: Row, price_column: str, high_column: str) -> ExtraCell:
    """Formatted distance to the high for the "% From High" column."""
    price_key = find_row_key(row, price_column, SCREEN_FALLBACK_RULES["price"])
    high_key = find_row_key(row, high_column, SCREEN_FALLBACK_RULES["high"])

    price = extract_numeric_price(row.get(price_key) if price_key else None)
    high = extract_numeric_price(row.get(high_key) if high_key else None)
    percent = calculate_percent_from_high(price, high)

    return ExtraCell(
        value=f"{percent:.2f}%",
        highlight="positive" if percent <= CLOSE_TO_HIGH_PERCENT else "warning",
    )


def percent_from_high_column(columns: ResolvedColumns) -> ExtraColumn:
    return ExtraColumn(
        name=PERCENT_FROM_HIGH_COLUMN,
        calculate=lambda row: percent_from_high_cell(
            row, columns.price_column, columns.high_column
        ),
    )


def _format_percent(value: float) -> str:
    return f"{value:g}"


def _derive_fields(
    dataset: Dataset, ranked: list[Row], market_cap: MarketCapThresholds
) -> list[Row]:
    """Add "TV SYMBOL", and "Market Cap Category" when the file has market caps."""
    rows = add_tradingview_symbols(ranked)
    if MARKET_CAP_COLUMN in dataset.headers:
        rows = add_market_cap_category(rows, market_cap)
    return rows


def prepare_near_high_analysis(
    dataset: Dataset,
    columns: ResolvedColumns,
    percent_threshold: float,
    market_cap: MarketCapThresholds = DEFAULT_THRESHOLDS,
) -> StockAnalysis:
    """Stocks within percent_threshold% of their high, closest first."""
    threshold = _format_percent(percent_threshold)
    screened = find_stocks_within_threshold(
        dataset.rows, columns.price_column, columns.high_column, percent_threshold
    )
    ranked = sort_stocks_by_proximity_to_ath(screened, columns.price_column, columns.high_column)
    logger.debug(f"{len(ranked)} of {len(dataset)} rows within {threshold}% of their high")

    return StockAnalysis(
        title=f"Stocks Within {threshold}% of All-Time High",
        found_message=(
            f"Found {len(ranked)} stocks that are at most {threshold}% below their all-time high"
        ),
        empty_message=f"No stocks found within {threshold}% of their all-time high.",
        rows=_derive_fields(dataset, ranked, market_cap),
        columns=columns,
    )


def prepare_at_high_analysis(
    dataset: Dataset,
    columns: ResolvedColumns,
    tolerance_percent: float = 0.1,
    market_cap: MarketCapThresholds = DEFAULT_THRESHOLDS,
) -> StockAnalysis:
    """Stocks trading at (or just below) their all-time high."""
    screened = find_stocks_at_all_time_high(
        dataset.rows,
        columns.price_column or None,
        columns.high_column or None,
        tolerance_percent,
    )
    ranked = sort_stocks_by_proximity_to_ath(screened, columns.price_column, columns.high_column)
    logger.debug(f"{len(ranked)} of {len(dataset)} rows at their all-time high")

    return StockAnalysis(
        title="Stocks at All-Time High",
        found_message=f"Found {len(ranked)} stocks that are at their all-time high",
        empty_message="No stocks found at all-time high.",
        rows=_derive_fields(dataset, ranked, market_cap),
        columns=columns,
    )


def prepare_dashboard(dataset: Dataset, config: Config) -> DashboardAnalysis:
    """Resolve columns once for the dataset and build both analyses."""
    columns = resolve_columns(dataset.headers)
    if not dataset.is_empty and not columns.is_complete:
        logger.warning(
            f"Could not resolve price/high columns from headers {list(dataset.headers)!r}, "
            "falling back to per-row detection"
        )
    else:
        logger.info(
            f"Resolved columns: price={columns.price_column!r}, high={columns.high_column!r}, "
            f"symbol={columns.symbol_column!r}"
        )

    return DashboardAnalysis(
        columns=columns,
        near_high=prepare_near_high_analysis(
            dataset, columns, config.screening.percent_threshold, config.market_cap
        ),
        at_high=prepare_at_high_analysis(
            dataset, columns, config.screening.at_high_tolerance_percent, config.market_cap
        ),
    )
