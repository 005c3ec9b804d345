"""Shared fixtures for ATH screener tests."""

import pytest

from ath_screener.core.domain_models import Dataset


@pytest.fixture
def scenario_row():
    """Single row with text prices, 5% below its high."""
    return {"Symbol": "X", "Price": "$95", "High All Time": "$100"}


@pytest.fixture
def scenario_dataset(scenario_row):
    return Dataset.from_rows([scenario_row], headers=["Symbol", "Price", "High All Time"])


@pytest.fixture
def screener_rows():
    """Export-style rows with mixed numeric and text cells."""
    return [
        {"Symbol": "AAA", "Price": 50.0, "High All Time": 100.0, "Sector": "Technology"},
        {"Symbol": "BBB", "Price": "$95", "High All Time": "$100", "Sector": "Finance"},
        {"Symbol": "CCC", "Price": 80, "High All Time": 100, "Sector": "Tech Hardware"},
        {"Symbol": "DDD", "Price": 110, "High All Time": 100, "Sector": "Energy"},
        {"Symbol": "EEE", "Price": "n/a", "High All Time": 100, "Sector": "Utilities"},
        {"Symbol": "FFF", "Price": 99.95, "High All Time": 100, "Sector": "Technology"},
    ]


@pytest.fixture
def market_cap_rows():
    return [
        {
            "Symbol": "BIG",
            "Description": "Big Corp",
            "Market capitalization": 250_000_000_000,
            "Market capitalization - Currency": "INR",
        },
        {
            "Symbol": "MID",
            "Description": "Mid Corp",
            "Market capitalization": "60,000,000,000",
            "Market capitalization - Currency": "INR",
        },
        {
            "Symbol": "SML",
            "Description": "Small Corp",
            "Market capitalization": 5_000_000_000,
            "Market capitalization - Currency": "INR",
        },
        {
            "Symbol": "MIC",
            "Description": "Micro Corp",
            "Market capitalization": 4_999_999_999,
            "Market capitalization - Currency": "INR",
        },
        {"Symbol": "UNK", "Description": "No Data Corp", "Market capitalization": ""},
        {"Symbol": "NOC", "Description": "Missing Column Corp"},
    ]
