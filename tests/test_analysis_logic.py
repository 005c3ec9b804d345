from ath_screener.app.logic.analysis import (
    percent_from_high_cell,
    prepare_at_high_analysis,
    prepare_dashboard,
    prepare_near_high_analysis,
)
from ath_screener.config.models import Config, MarketCapThresholds
from ath_screener.core.column_resolver import resolve_columns
from ath_screener.core.domain_models import (
    MARKET_CAP_CATEGORY_COLUMN,
    MARKET_CAP_COLUMN,
    PERCENT_FROM_HIGH_COLUMN,
    TV_SYMBOL_COLUMN,
    Dataset,
    TableStatus,
)


def test_scenario_dashboard(scenario_dataset):
    analysis = prepare_dashboard(scenario_dataset, Config())

    near = analysis.near_high
    assert near.title == "Stocks Within 20% of All-Time High"
    assert near.found_message == (
        "Found 1 stocks that are at most 20% below their all-time high"
    )
    assert near.rows[0][TV_SYMBOL_COLUMN] == "NSE:X"
    assert near.symbols == "NSE:X"

    view = near.make_table().view()
    assert view.headers == [
        "Symbol",
        "Price",
        "High All Time",
        TV_SYMBOL_COLUMN,
        PERCENT_FROM_HIGH_COLUMN,
    ]
    assert view.extra_cells[0].value == "5.00%"
    assert view.extra_cells[0].highlight == "positive"

    assert analysis.at_high.is_empty
    assert analysis.at_high.empty_message == "No stocks found at all-time high."


def test_near_high_is_ranked(screener_rows):
    dataset = Dataset.from_rows(screener_rows)
    analysis = prepare_near_high_analysis(dataset, resolve_columns(dataset.headers), 20)
    assert [row["Symbol"] for row in analysis.rows] == ["DDD", "FFF", "BBB", "CCC"]


def test_market_cap_category_added_when_file_has_market_caps():
    dataset = Dataset.from_rows(
        [
            {"Symbol": "A", "Price": 95, "High All Time": 100, MARKET_CAP_COLUMN: 300e9},
            {"Symbol": "B", "Price": 100, "High All Time": 100, MARKET_CAP_COLUMN: 2_000},
        ]
    )
    config = Config(market_cap=MarketCapThresholds(large_cap=1000, mid_cap=100, small_cap=10))
    analysis = prepare_dashboard(dataset, config)

    near = analysis.near_high
    assert [row[MARKET_CAP_CATEGORY_COLUMN] for row in near.rows] == ["Large Cap", "Large Cap"]
    assert MARKET_CAP_CATEGORY_COLUMN in near.make_table().view().headers
    assert analysis.at_high.rows[0][MARKET_CAP_CATEGORY_COLUMN] == "Large Cap"

    default = prepare_near_high_analysis(dataset, resolve_columns(dataset.headers), 20)
    assert [row[MARKET_CAP_CATEGORY_COLUMN] for row in default.rows] == [
        "Micro Cap",
        "Large Cap",
    ]


def test_no_market_cap_category_without_market_caps(scenario_dataset):
    analysis = prepare_dashboard(scenario_dataset, Config())
    assert MARKET_CAP_CATEGORY_COLUMN not in analysis.near_high.rows[0]


def test_near_high_threshold_in_messages(scenario_dataset):
    columns = resolve_columns(scenario_dataset.headers)
    analysis = prepare_near_high_analysis(scenario_dataset, columns, 4)
    assert analysis.is_empty
    assert analysis.empty_message == "No stocks found within 4% of their all-time high."

    analysis = prepare_near_high_analysis(scenario_dataset, columns, 7.5)
    assert analysis.title == "Stocks Within 7.5% of All-Time High"


def test_at_high_analysis(screener_rows):
    dataset = Dataset.from_rows(screener_rows)
    analysis = prepare_at_high_analysis(dataset, resolve_columns(dataset.headers))
    assert [row["Symbol"] for row in analysis.rows] == ["DDD", "FFF"]
    assert analysis.found_message == "Found 2 stocks that are at their all-time high"


def test_percent_from_high_cell_highlight():
    far = percent_from_high_cell({"Price": 80, "High All Time": 100}, "Price", "High All Time")
    assert far.value == "20.00%"
    assert far.highlight == "warning"

    above = percent_from_high_cell({"Price": 110, "High All Time": 100}, "Price", "High All Time")
    assert above.value == "-10.00%"
    assert above.highlight == "positive"


def test_percent_from_high_cell_missing_columns():
    cell = percent_from_high_cell({"Symbol": "X"}, "Price", "High All Time")
    assert cell.value == "0.00%"


def test_empty_dataset():
    analysis = prepare_dashboard(Dataset(), Config())
    assert analysis.near_high.is_empty
    assert analysis.at_high.is_empty
    assert analysis.near_high.make_table().view().status == TableStatus.NO_DATA


def test_dataset_headers_follow_first_row():
    dataset = Dataset.from_rows([{"b": 1, "a": 2}, {"a": 3, "c": 4}])
    assert dataset.headers == ("b", "a")
    assert len(dataset) == 2
    assert Dataset.from_rows([]).is_empty
