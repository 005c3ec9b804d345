import streamlit as st

from ath_screener.analysis.categorization import categorize_stocks
from ath_screener.app.logic.data_loader import load_app_config
from ath_screener.app.views.categories import render_categorization
from ath_screener.app.views.common import render_empty_state

# Page config
st.set_page_config(
    page_title="Market Caps",
    page_icon="🏦",
    layout="wide",
)

st.title("🏦 Market Cap Breakdown")

config = load_app_config()
thresholds = config.market_cap
st.caption(
    f"Large ≥ {thresholds.large_cap:,.0f} · Mid ≥ {thresholds.mid_cap:,.0f} · "
    f"Small ≥ {thresholds.small_cap:,.0f}. "
    "Amounts are compared as-is, without currency conversion."
)

dataset = st.session_state.get("dataset")
if dataset is None or dataset.is_empty:
    render_empty_state("Upload a file on the main page first.")
    st.stop()

render_categorization(categorize_stocks(dataset.rows, thresholds))
