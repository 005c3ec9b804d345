"""Upload handling with caching for the Streamlit application.

Parsing is cached on the file content so reruns triggered by table
interactions do not re-read the spreadsheet.
"""

import hashlib

import streamlit as st
from loguru import logger

from ath_screener.config.models import Config
from ath_screener.config.settings import load_config
from ath_screener.core.domain_models import UploadResult
from ath_screener.core.file_loader import process_file


def upload_token(content: bytes, filename: str) -> str:
    """Stable identifier of an upload, used to scope table state."""
    digest = hashlib.sha1(content, usedforsecurity=False).hexdigest()[:12]
    return f"{filename}:{digest}"


@st.cache_data(show_spinner="Processing file...")  # type: ignore[misc]
def load_uploaded_file(content: bytes, filename: str) -> UploadResult:
    """Cached helper to parse an uploaded file.

    Args:
        content: Raw bytes of the uploaded file
        filename: Original file name, selects CSV or Excel parsing

    Returns:
        UploadResult with dataset and status
    """
    result = process_file(content, filename)
    if not result.ok:
        logger.warning(f"Upload of {filename} failed: {result.status.message}")
    return result


@st.cache_resource  # type: ignore[misc]
def load_app_config() -> Config:
    return load_config()
