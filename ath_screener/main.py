"""ATH Screener - Command line entry point.

Supports:
- screen: Stocks near / at their all-time high, ranked by distance
- categorize: Market cap breakdown of a file
- symbols: TradingView symbol list of the screened stocks
"""

import argparse
import sys
from pathlib import Path

import polars as pl
from loguru import logger

from ath_screener.analysis.categorization import categorize_stocks
from ath_screener.app.logic.analysis import StockAnalysis, prepare_dashboard
from ath_screener.config.models import Config, ScreeningSettings
from ath_screener.config.settings import load_config
from ath_screener.core.coercion import stringify_cell
from ath_screener.core.config import settings
from ath_screener.core.domain_models import PERCENT_FROM_HIGH_COLUMN, Dataset
from ath_screener.core.file_loader import process_file


def _configure_logging() -> None:
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level.upper())


def _load(args: argparse.Namespace) -> tuple[Dataset, Config]:
    """Load config and the input file, exiting on failure."""
    try:
        config = load_config(Path(args.config) if args.config else None)
    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        sys.exit(1)

    path = Path(args.file)
    if not path.exists():
        logger.error(f"Input file not found: {path}")
        sys.exit(1)

    result = process_file(path)
    if not result.ok:
        logger.error(f"{path.name}: {result.status.message}")
        sys.exit(1)
    return result.dataset, config


def _apply_overrides(
    config: Config, threshold: float | None = None, tolerance: float | None = None
) -> Config:
    """Config with command line thresholds applied (validated like the YAML values)."""
    screening = config.screening.model_dump()
    if threshold is not None:
        screening["percent_threshold"] = threshold
    if tolerance is not None:
        screening["at_high_tolerance_percent"] = tolerance
    return config.model_copy(update={"screening": ScreeningSettings(**screening)})


def analysis_to_frame(analysis: StockAnalysis, limit: int | None = None) -> pl.DataFrame:
    """Ranked rows of an analysis as a DataFrame of display strings."""
    table = analysis.make_table(rows_per_page=max(len(analysis.rows), 1))
    view = table.view()
    data_headers = [h for h in view.headers if h != PERCENT_FROM_HIGH_COLUMN]
    records = []
    for row, extra in zip(view.rows, view.extra_cells, strict=True):
        record = {h: stringify_cell(row.get(h)) for h in data_headers}
        record[PERCENT_FROM_HIGH_COLUMN] = str(extra.value)
        records.append(record)
    df = pl.DataFrame(records, schema={h: pl.Utf8 for h in view.headers})
    return df.head(limit) if limit else df


def cmd_screen(args: argparse.Namespace) -> None:
    """Print stocks near and at their all-time high."""
    dataset, config = _load(args)
    config = _apply_overrides(config, args.threshold, args.tolerance)

    analysis = prepare_dashboard(dataset, config)
    sections = [analysis.at_high] if args.at_high_only else [analysis.near_high, analysis.at_high]

    with pl.Config(tbl_rows=args.limit or -1, tbl_cols=-1, fmt_str_lengths=40):
        for section in sections:
            logger.info(f"=== {section.title} ===")
            if section.is_empty:
                logger.info(section.empty_message)
                continue
            logger.info(section.found_message)
            print(analysis_to_frame(section, args.limit))
    logger.success("✅ Screening completed")


def cmd_categorize(args: argparse.Namespace) -> None:
    """Print the market cap tier counts."""
    dataset, config = _load(args)
    result = categorize_stocks(dataset.rows, config.market_cap)

    summary = result.summary
    logger.info(f"Categorized {summary.total} stocks:")
    for category, stocks in result.categorized_stocks.items():
        logger.info(f"  • {category.value}: {len(stocks)}")
        if args.verbose:
            for stock in stocks:
                logger.info(
                    f"      {stock.symbol:<12} {stringify_cell(stock.market_cap):>20} "
                    f"{stock.market_cap_currency}"
                )


def cmd_symbols(args: argparse.Namespace) -> None:
    """Export the TradingView symbols of a screen."""
    dataset, config = _load(args)
    config = _apply_overrides(config, args.threshold)

    analysis = prepare_dashboard(dataset, config)
    section = analysis.at_high if args.at_high else analysis.near_high
    symbols = section.symbols
    if not symbols:
        logger.warning("No symbols found (no symbol column or no matching stocks)")
        return

    if args.output:
        output = Path(args.output)
        try:
            output.write_text(symbols + "\n")
        except OSError as e:
            # export is best effort; the screen itself succeeded
            logger.error(f"Failed to write symbols to {output}: {e}")
            return
        logger.success(f"✅ Wrote {symbols.count(',') + 1} symbols to {output}")
    else:
        print(symbols)


def main() -> None:
    """Main entry point with CLI argument parsing."""
    _configure_logging()

    parser = argparse.ArgumentParser(
        description="ATH Screener - screen spreadsheets of securities by all-time high",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config", type=str, help="Path to config.yaml (default: config/config.yaml)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    # Screen command
    parser_screen = subparsers.add_parser("screen", help="Show stocks near their all-time high")
    parser_screen.add_argument("file", help="CSV or Excel file")
    parser_screen.add_argument(
        "--threshold", type=float, help="Max percent below the all-time high (default: config)"
    )
    parser_screen.add_argument(
        "--tolerance", type=float, help="At-high tolerance in percent (default: config)"
    )
    parser_screen.add_argument(
        "--at-high-only", action="store_true", help="Only show stocks at their all-time high"
    )
    parser_screen.add_argument("--limit", type=int, help="Max rows to print per section")
    parser_screen.set_defaults(func=cmd_screen)

    # Categorize command
    parser_categorize = subparsers.add_parser("categorize", help="Market cap breakdown")
    parser_categorize.add_argument("file", help="CSV or Excel file")
    parser_categorize.add_argument(
        "-v", "--verbose", action="store_true", help="List the stocks in each tier"
    )
    parser_categorize.set_defaults(func=cmd_categorize)

    # Symbols command
    parser_symbols = subparsers.add_parser("symbols", help="Export TradingView symbols")
    parser_symbols.add_argument("file", help="CSV or Excel file")
    parser_symbols.add_argument("--threshold", type=float, help="Max percent below the high")
    parser_symbols.add_argument(
        "--at-high", action="store_true", help="Export the at-high screen instead"
    )
    parser_symbols.add_argument("--output", type=str, help="Write to file instead of stdout")
    parser_symbols.set_defaults(func=cmd_symbols)

    # Parse arguments and execute
    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
