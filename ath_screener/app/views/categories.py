import polars as pl
import streamlit as st

from ath_screener.app.views.colors import MARKET_CAP_COLOR_MAP
from ath_screener.app.views.common import make_pie_chart, render_empty_state
from ath_screener.core.coercion import stringify_cell
from ath_screener.core.domain_models import CategorizationResult, MarketCapCategory


def categorization_counts(result: CategorizationResult) -> pl.DataFrame:
    """One row per tier with its stock count."""
    return pl.DataFrame(
        {
            "category": [category.value for category in MarketCapCategory],
            "count": [len(result.bucket(category)) for category in MarketCapCategory],
        }
    )


def render_summary_metrics(result: CategorizationResult) -> None:
    summary = result.summary
    cols = st.columns(6)
    metrics = [
        ("Total", summary.total),
        (MarketCapCategory.LARGE_CAP.value, summary.large_cap),
        (MarketCapCategory.MID_CAP.value, summary.mid_cap),
        (MarketCapCategory.SMALL_CAP.value, summary.small_cap),
        (MarketCapCategory.MICRO_CAP.value, summary.micro_cap),
        (MarketCapCategory.UNKNOWN.value, summary.unknown),
    ]
    for col, (label, value) in zip(cols, metrics, strict=True):
        with col:
            st.metric(label=label, value=f"{value:,}")


def render_category_chart(result: CategorizationResult) -> None:
    df_counts = categorization_counts(result).filter(pl.col("count") > 0)
    if df_counts.is_empty():
        return
    fig = make_pie_chart(
        df_counts,
        names="category",
        values="count",
        color_map=MARKET_CAP_COLOR_MAP,
        title="Stocks by Market Cap",
    )
    st.plotly_chart(fig, use_container_width=True)


def render_category_tables(result: CategorizationResult) -> None:
    tabs = st.tabs([category.value for category in MarketCapCategory])
    for tab, category in zip(tabs, MarketCapCategory, strict=True):
        with tab:
            stocks = result.bucket(category)
            if not stocks:
                render_empty_state(f"No {category.value.lower()} stocks.")
                continue
            df_bucket = pl.DataFrame(
                [
                    {
                        "Symbol": stock.symbol,
                        "Description": stock.description,
                        "Market capitalization": stringify_cell(stock.market_cap),
                        "Currency": stock.market_cap_currency,
                    }
                    for stock in stocks
                ]
            )
            st.dataframe(df_bucket, hide_index=True, use_container_width=True)


def render_categorization(result: CategorizationResult) -> None:
    """Summary, chart and bucket tables for the market cap breakdown."""
    if result.summary.total == 0:
        render_empty_state("No data available.")
        return
    render_summary_metrics(result)
    render_category_chart(result)
    render_category_tables(result)
