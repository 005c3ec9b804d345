import pandas as pd
import streamlit as st

from ath_screener.app.logic.analysis import StockAnalysis
from ath_screener.app.logic.table import DataTable, TableView
from ath_screener.app.views.colors import HIGHLIGHT_COLORS
from ath_screener.app.views.common import render_empty_state
from ath_screener.core.coercion import stringify_cell
from ath_screener.core.domain_models import SortDirection, TableStatus


def get_table(key: str, analysis: StockAnalysis, rows_per_page: int) -> DataTable:
    """Table stored in session state so sort/filter/page survive reruns."""
    if key not in st.session_state:
        st.session_state[key] = analysis.make_table(rows_per_page)
    table: DataTable = st.session_state[key]
    return table


def _data_headers(table: DataTable, view: TableView) -> list[str]:
    """Headers without the derived column, which cannot be sorted or filtered."""
    if table.extra_column is None:
        return view.headers
    return [h for h in view.headers if h != table.extra_column.name]


def _sort_indicator(view: TableView) -> str:
    if view.sort_config is None:
        return "Unsorted"
    arrow = "▲" if view.sort_config.direction == SortDirection.ASCENDING else "▼"
    return f"Sorted by {view.sort_config.key} {arrow}"


def render_sort_controls(table: DataTable, view: TableView, key: str) -> None:
    data_headers = _data_headers(table, view)
    col1, col2, col3 = st.columns([3, 1, 3])
    with col1:
        st.selectbox(
            "Sort column",
            options=data_headers,
            key=f"{key}_sort_key",
            label_visibility="collapsed",
        )
    with col2:
        st.button(
            "Sort",
            key=f"{key}_sort_button",
            on_click=lambda: table.request_sort(st.session_state[f"{key}_sort_key"]),
            help="Click again to toggle ascending / descending",
        )
    with col3:
        st.caption(_sort_indicator(view))


def render_filter_controls(table: DataTable, view: TableView, key: str) -> None:
    data_headers = _data_headers(table, view)

    def on_filter_change(header: str, widget_key: str) -> None:
        table.set_filter(header, st.session_state.get(widget_key, ""))

    active = sum(1 for pattern in view.filters.values() if pattern)
    with st.expander(f"Filters ({active} active)"):
        cols = st.columns(min(len(data_headers), 4) or 1)
        for index, header in enumerate(data_headers):
            widget_key = f"{key}_filter_{index}"
            with cols[index % len(cols)]:
                st.text_input(
                    f"Filter {header}",
                    value=view.filters.get(header, ""),
                    key=widget_key,
                    on_change=on_filter_change,
                    args=(header, widget_key),
                )


def _page_frame(table: DataTable, view: TableView) -> pd.DataFrame:
    records = []
    for index, row in enumerate(view.rows):
        record = {h: stringify_cell(row.get(h)) for h in view.headers if h in row}
        if table.extra_column is not None:
            record[table.extra_column.name] = view.extra_cells[index].value
        records.append(record)
    return pd.DataFrame(records, columns=view.headers)


def render_table_page(table: DataTable, view: TableView) -> None:
    df_page = _page_frame(table, view)
    if table.extra_column is None:
        st.dataframe(df_page, hide_index=True, use_container_width=True)
        return

    colors = [HIGHLIGHT_COLORS[cell.highlight] for cell in view.extra_cells]
    styler = df_page.style.apply(
        lambda _: [f"color: {c}; font-weight: 600" if c else "" for c in colors],
        subset=[table.extra_column.name],
    )
    st.dataframe(styler, hide_index=True, use_container_width=True)


def render_pagination(table: DataTable, view: TableView, key: str) -> None:
    col1, col2, col3 = st.columns([6, 1, 1])
    with col1:
        st.caption(
            f"Showing {view.start_item} to {view.end_item} of {view.total_items} results"
        )
    with col2:
        st.button(
            "Previous",
            key=f"{key}_previous",
            disabled=not view.has_previous,
            on_click=table.previous_page,
        )
    with col3:
        st.button(
            "Next",
            key=f"{key}_next",
            disabled=not view.has_next,
            on_click=table.next_page,
        )


def render_data_table(table: DataTable, key: str) -> None:
    """Render an interactive table: sort, filters, current page, pagination."""
    view = table.view()
    if view.status == TableStatus.NO_DATA:
        render_empty_state("No data available.")
        return

    render_sort_controls(table, view, key)
    render_filter_controls(table, view, key)

    if view.status == TableStatus.NO_MATCHES:
        render_empty_state("No rows match the current filters.", icon="🔎")
    else:
        render_table_page(table, view)
    render_pagination(table, view, key)


def render_symbol_export(analysis: StockAnalysis, key: str) -> None:
    """Copyable TradingView symbol list for the analysis."""
    symbols = analysis.symbols
    if not symbols:
        st.caption("No symbol column detected, TradingView export unavailable.")
        return
    with st.expander("Copy All TV Symbols"):
        st.code(symbols, language=None)
        st.download_button(
            "Download TV symbols",
            data=symbols,
            file_name="tv_symbols.txt",
            mime="text/plain",
            key=f"{key}_download",
        )


def render_stock_analysis(analysis: StockAnalysis, key: str, rows_per_page: int = 10) -> None:
    """Render one analysis section with header, symbol export and table."""
    if analysis.is_empty:
        render_empty_state(analysis.empty_message, icon="🔍")
        return

    st.subheader(analysis.title)
    st.caption(analysis.found_message)
    render_symbol_export(analysis, key)

    table = get_table(f"{key}_table", analysis, rows_per_page)
    render_data_table(table, key)
