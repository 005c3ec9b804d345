"""App logic package.

Business logic layer for Streamlit application.
Pure Python - no Streamlit UI calls outside the cached loader.
"""

__all__ = ["analysis", "data_loader", "table"]
