import pytest

from ath_screener.app.logic.table import (
    DataTable,
    ExtraCell,
    ExtraColumn,
    compare_values,
    filter_rows,
    sort_rows,
)
from ath_screener.core.domain_models import SortConfig, SortDirection, TableStatus


@pytest.fixture
def rows():
    return [
        {"Symbol": "bbb", "Sector": "Finance", "Price": 10},
        {"Symbol": "AAA", "Sector": "Technology", "Price": 30},
        {"Symbol": "CCC", "Sector": "Tech Hardware", "Price": 20},
        {"Symbol": "DDD", "Price": 5},
    ]


@pytest.fixture
def many_rows():
    sectors = ["Technology", "Finance", "Energy", "Utilities", "Health"]
    return [
        {"Symbol": f"S{i:02d}", "Sector": sectors[i % len(sectors)], "Price": i} for i in range(25)
    ]


def symbols(rows):
    return [row["Symbol"] for row in rows]


class TestSortTransitions:
    def test_first_request_is_ascending(self, rows):
        table = DataTable(rows)
        table.request_sort("Price")
        assert table.state.sort_config == SortConfig(key="Price")

    def test_second_request_flips(self, rows):
        table = DataTable(rows)
        table.request_sort("Price")
        table.request_sort("Price")
        assert table.state.sort_config.direction == SortDirection.DESCENDING

    def test_third_request_back_to_ascending(self, rows):
        table = DataTable(rows)
        for _ in range(3):
            table.request_sort("Price")
        assert table.state.sort_config.direction == SortDirection.ASCENDING

    def test_new_key_resets_direction(self, rows):
        table = DataTable(rows)
        table.request_sort("Price")
        table.request_sort("Price")
        table.request_sort("Symbol")
        assert table.state.sort_config == SortConfig(
            key="Symbol", direction=SortDirection.ASCENDING
        )


class TestSorting:
    def test_natural_order_without_sort(self, rows):
        assert symbols(DataTable(rows).view().rows) == ["bbb", "AAA", "CCC", "DDD"]

    def test_numeric(self, rows):
        assert symbols(sort_rows(rows, SortConfig(key="Price"))) == ["DDD", "bbb", "CCC", "AAA"]

    def test_numeric_descending(self, rows):
        config = SortConfig(key="Price", direction=SortDirection.DESCENDING)
        assert symbols(sort_rows(rows, config)) == ["AAA", "CCC", "bbb", "DDD"]

    def test_text_case_insensitive(self, rows):
        assert symbols(sort_rows(rows, SortConfig(key="Symbol"))) == ["AAA", "bbb", "CCC", "DDD"]

    def test_missing_values_sort_as_empty_text(self, rows):
        assert symbols(sort_rows(rows, SortConfig(key="Sector"))) == ["DDD", "bbb", "CCC", "AAA"]

    def test_stable(self):
        rows = [{"id": i, "group": "same"} for i in range(5)]
        assert sort_rows(rows, SortConfig(key="group")) == rows
        desc = SortConfig(key="group", direction=SortDirection.DESCENDING)
        assert sort_rows(rows, desc) == rows

    def test_compare_values(self):
        assert compare_values(2, 10) < 0
        assert compare_values("2", "10") > 0
        assert compare_values("abc", "ABC") == 0
        assert compare_values(None, "a") < 0
        assert compare_values(True, 1) != compare_values(1, 1)

    def test_sort_does_not_modify_input(self, rows):
        before = list(rows)
        sort_rows(rows, SortConfig(key="Price"))
        assert rows == before


class TestFiltering:
    def test_case_insensitive_substring(self, rows):
        assert symbols(filter_rows(rows, {"Sector": "TECH"})) == ["AAA", "CCC"]

    def test_missing_key_fails_constraint(self, rows):
        assert "DDD" not in symbols(filter_rows(rows, {"Sector": "e"}))

    def test_empty_pattern_is_no_constraint(self, rows):
        assert filter_rows(rows, {"Sector": ""}) == rows

    def test_constraints_are_combined(self, rows):
        assert symbols(filter_rows(rows, {"Sector": "tech", "Symbol": "c"})) == ["CCC"]

    def test_numbers_filter_on_display_text(self):
        rows = [{"Price": 95.0}, {"Price": 9.5}]
        assert filter_rows(rows, {"Price": "95"}) == [{"Price": 95.0}]

    def test_set_filter_resets_page(self, many_rows):
        table = DataTable(many_rows, rows_per_page=10)
        table.set_page(3)
        assert table.state.current_page == 3
        table.set_filter("Sector", "finance")
        assert table.state.current_page == 1
        assert table.view().total_items == 5


class TestPagination:
    def test_window(self, many_rows):
        table = DataTable(many_rows, rows_per_page=10)
        table.set_page(3)
        view = table.view()
        assert symbols(view.rows) == [f"S{i:02d}" for i in range(20, 25)]
        assert view.total_pages == 3
        assert (view.start_item, view.end_item, view.total_items) == (21, 25, 25)
        assert view.has_previous and not view.has_next

    def test_first_page(self, many_rows):
        view = DataTable(many_rows, rows_per_page=10).view()
        assert (view.start_item, view.end_item) == (1, 10)
        assert not view.has_previous and view.has_next

    @pytest.mark.parametrize("requested, expected", [(0, 1), (-4, 1), (5, 3), (2, 2)])
    def test_set_page_clamps(self, many_rows, requested, expected):
        table = DataTable(many_rows, rows_per_page=10)
        table.set_page(requested)
        assert table.state.current_page == expected

    def test_clamp_after_filter(self, many_rows):
        table = DataTable(many_rows, rows_per_page=10)
        table.set_filter("Sector", "tech")
        table.set_page(3)
        assert table.state.current_page == 1

    def test_clamp_on_empty_filtered_set(self, many_rows):
        table = DataTable(many_rows, rows_per_page=10)
        table.set_filter("Sector", "no such sector")
        table.set_page(2)
        view = table.view()
        assert view.current_page == 1
        assert (view.start_item, view.end_item, view.total_items) == (0, 0, 0)

    def test_next_and_previous(self, many_rows):
        table = DataTable(many_rows, rows_per_page=10)
        table.next_page()
        table.next_page()
        table.next_page()
        assert table.state.current_page == 3
        table.previous_page()
        assert table.state.current_page == 2

    def test_rows_per_page_must_be_positive(self):
        with pytest.raises(ValueError):
            DataTable([], rows_per_page=0)


class TestView:
    def test_no_data_state(self):
        view = DataTable([]).view()
        assert view.status == TableStatus.NO_DATA
        assert view.headers == []
        assert view.rows == []

    def test_no_matches_state(self, rows):
        table = DataTable(rows)
        table.set_filter("Symbol", "zzz")
        view = table.view()
        assert view.status == TableStatus.NO_MATCHES
        assert view.headers == ["Symbol", "Sector", "Price"]

    def test_ready_state(self, rows):
        assert DataTable(rows).view().status == TableStatus.READY

    def test_headers_from_first_row_with_extra_column(self, rows):
        extra = ExtraColumn(name="Double", calculate=lambda row: ExtraCell(value=row["Price"] * 2))
        table = DataTable(rows, rows_per_page=2, extra_column=extra)
        table.request_sort("Price")
        view = table.view()
        assert view.headers == ["Symbol", "Sector", "Price", "Double"]
        # only the current page is computed
        assert [cell.value for cell in view.extra_cells] == [10, 20]

    def test_view_is_repeatable(self, many_rows):
        table = DataTable(many_rows, rows_per_page=7)
        table.request_sort("Sector")
        table.set_filter("Symbol", "s1")
        assert table.view() == table.view()

    def test_sort_applies_before_filter(self):
        # Mixed number/text cells make the comparator non-transitive
        # (9 < 10, 10 < "5" as text, "5" < 9 as text), so sorting a filtered
        # subset can differ from filtering the sorted set.
        rows = [
            {"P": 9, "G": "keep"},
            {"P": 10, "G": "drop"},
            {"P": "5", "G": "keep"},
        ]
        sort_config = SortConfig(key="P")
        filters = {"G": "keep"}

        table = DataTable(rows)
        table.request_sort("P")
        table.set_filter("G", "keep")
        engine_order = [row["P"] for row in table.view().rows]

        sort_then_filter = [row["P"] for row in filter_rows(sort_rows(rows, sort_config), filters)]
        filter_then_sort = [row["P"] for row in sort_rows(filter_rows(rows, filters), sort_config)]

        assert engine_order == sort_then_filter == [9, "5"]
        assert filter_then_sort == ["5", 9]
