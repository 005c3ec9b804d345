"""ATH Screener Dashboard - Main Entry Point.

Upload a spreadsheet of securities and see which trade near their
all-time high. Run with: streamlit run ath_screener/app/main.py
"""

import streamlit as st
from loguru import logger

from ath_screener.app.logic.analysis import prepare_dashboard
from ath_screener.app.logic.data_loader import load_app_config, load_uploaded_file, upload_token
from ath_screener.app.views.analysis import render_stock_analysis
from ath_screener.app.views.common import render_sidebar_header, render_upload_status
from ath_screener.core.file_loader import VALID_EXTENSIONS

st.set_page_config(
    page_title="ATH Screener",
    page_icon="📈",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.title("📈 All-Time High Screener")

config = load_app_config()

render_sidebar_header(
    "Screening",
    f"Near high: within {config.screening.percent_threshold:g}% · "
    f"At high: within {config.screening.at_high_tolerance_percent:g}%",
)

uploaded = st.file_uploader(
    "Upload a CSV or Excel file",
    type=[ext.lstrip(".") for ext in VALID_EXTENSIONS],
    help="Only the first sheet is read. Columns are detected from the header row.",
)

if uploaded is not None:
    content = uploaded.getvalue()
    token = upload_token(content, uploaded.name)
    try:
        result = load_uploaded_file(content, uploaded.name)
    except Exception as e:
        st.error(f"Failed to load data: {e}")
        logger.error(f"Data loading error: {e}", exc_info=True)
        raise e

    render_upload_status(result.status)
    # A new upload replaces the dataset wholesale; other pages read it from here.
    st.session_state["dataset"] = result.dataset
    st.session_state["upload_token"] = token

dataset = st.session_state.get("dataset")
token = st.session_state.get("upload_token", "")

if dataset is not None and not dataset.is_empty:
    analysis = prepare_dashboard(dataset, config)
    rows_per_page = config.table.records_per_page

    with st.container(border=True):
        render_stock_analysis(analysis.near_high, key=f"near_{token}", rows_per_page=rows_per_page)
    with st.container(border=True):
        render_stock_analysis(analysis.at_high, key=f"at_{token}", rows_per_page=rows_per_page)
