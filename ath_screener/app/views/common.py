"""Common UI components shared across pages.

Pure rendering functions for reusable Streamlit widgets.
"""

import plotly.express as px
import polars as pl
import streamlit as st

from ath_screener.core.domain_models import UploadStatus


def render_sidebar_header(title: str, description: str | None = None) -> None:
    """Render consistent sidebar header with optional description.

    Args:
        title: Main sidebar title
        description: Optional description text below title
    """
    st.sidebar.title(title)
    if description:
        st.sidebar.caption(description)
    st.sidebar.divider()


def render_empty_state(message: str, icon: str = "📊") -> None:
    """Render empty state placeholder when no data is available.

    Args:
        message: Message to display
        icon: Emoji icon to show
    """
    st.info(f"{icon} {message}")


def render_upload_status(status: UploadStatus) -> None:
    """Show the result of the last upload."""
    if status.status == "success":
        st.success(status.message)
    elif status.status == "error":
        st.error(status.message)
    elif status.status == "uploading":
        st.info(status.message)


GLOBAL_MARGINS = dict(t=30, l=5, r=5, b=0)
GLOBAL_FONT = dict(
    family="Arial",
    size=16,
)


def style_pie_chart(fig: px.pie) -> None:
    fig.update_traces(
        textposition="inside",
        textinfo="label+percent",
        marker=dict(line=dict(color="#FFFFFF", width=2.0)),
    )
    fig.update_layout(
        height=400,
        margin=GLOBAL_MARGINS,
        showlegend=False,
        font=GLOBAL_FONT,
    )


def make_pie_chart(
    df: pl.DataFrame,
    names: str,
    values: str,
    color_map: dict[str, str],
    title: str | None = None,
) -> px.pie:
    fig = px.pie(
        df,
        names=names,
        values=values,
        color=names,
        color_discrete_map=color_map,
        title=title,
    )
    style_pie_chart(fig)
    return fig
