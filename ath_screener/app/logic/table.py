"""Sort / filter / paginate engine for the dashboard tables.

Works on any row set and header list; knows nothing about stocks. The
derivation order is fixed: sort the full row set, then filter, then slice
the page window.
"""

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from functools import cmp_to_key
from typing import Literal

from ath_screener.core.coercion import is_number, stringify_cell
from ath_screener.core.domain_models import (
    FilterConfig,
    Row,
    SortConfig,
    SortDirection,
    TableStatus,
)


@dataclass(frozen=True)
class ExtraCell:
    """Value of the derived presentation column for one row."""

    value: str | float
    highlight: Literal["positive", "warning", "neutral"] = "neutral"


@dataclass(frozen=True)
class ExtraColumn:
    name: str
    calculate: Callable[[Row], ExtraCell]


@dataclass(frozen=True)
class TableState:
    sort_config: SortConfig | None = None
    filters: FilterConfig = field(default_factory=dict)
    current_page: int = 1
    rows_per_page: int = 10


@dataclass(frozen=True)
class TableView:
    """Everything a renderer needs for one table render."""

    status: TableStatus
    headers: list[str]
    rows: list[Row]
    extra_cells: list[ExtraCell]
    sort_config: SortConfig | None
    filters: FilterConfig
    current_page: int
    total_pages: int
    total_items: int
    start_item: int
    end_item: int

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages


def _sort_text(value: object) -> str:
    # falsy cells (None, 0, nan, False, "") sort as empty text
    if not value or value != value:
        return ""
    return stringify_cell(value).lower()  # type: ignore[arg-type]


def compare_values(a: object, b: object) -> int:
    """Numbers compare numerically, everything else as case-insensitive text."""
    if is_number(a) and is_number(b):
        return (a > b) - (a < b)  # type: ignore[operator]
    a_text, b_text = _sort_text(a), _sort_text(b)
    return (a_text > b_text) - (a_text < b_text)


def sort_rows(rows: Sequence[Row], sort_config: SortConfig | None) -> list[Row]:
    """Stable single-column sort. No config keeps insertion order."""
    if sort_config is None:
        return list(rows)

    sign = 1 if sort_config.direction == SortDirection.ASCENDING else -1
    key = sort_config.key
    return sorted(
        rows,
        key=cmp_to_key(lambda a, b: sign * compare_values(a.get(key), b.get(key))),
    )


def row_matches(row: Row, filters: FilterConfig) -> bool:
    """Every non-empty pattern must be a case-insensitive substring of its cell."""
    for key, pattern in filters.items():
        needle = pattern.lower()
        if not needle:
            continue
        value = row.get(key)
        if value is None or needle not in stringify_cell(value).lower():
            return False
    return True


def filter_rows(rows: Sequence[Row], filters: FilterConfig) -> list[Row]:
    return [row for row in rows if row_matches(row, filters)]


def page_count(total_items: int, rows_per_page: int) -> int:
    return math.ceil(total_items / rows_per_page)


def paginate(rows: Sequence[Row], current_page: int, rows_per_page: int) -> list[Row]:
    start = (current_page - 1) * rows_per_page
    return list(rows[start : start + rows_per_page])


class DataTable:
    """Interactive table over a fixed row set.

    Holds the sort, filter and pagination state. Every transition swaps in
    a new TableState; the row set itself is never modified.
    """

    def __init__(
        self,
        rows: Sequence[Row],
        rows_per_page: int = 10,
        extra_column: ExtraColumn | None = None,
    ) -> None:
        if rows_per_page < 1:
            raise ValueError("rows_per_page must be at least 1")
        self.rows: tuple[Row, ...] = tuple(rows)
        self.extra_column = extra_column
        self.state = TableState(rows_per_page=rows_per_page)

    @property
    def headers(self) -> list[str]:
        """Keys of the first row, plus the extra column name if configured."""
        if not self.rows:
            return []
        headers = list(self.rows[0].keys())
        if self.extra_column is not None:
            headers.append(self.extra_column.name)
        return headers

    def request_sort(self, key: str) -> None:
        """Sort by key; a second request on an ascending key flips to descending."""
        current = self.state.sort_config
        direction = SortDirection.ASCENDING
        if (
            current is not None
            and current.key == key
            and current.direction == SortDirection.ASCENDING
        ):
            direction = SortDirection.DESCENDING
        self.state = replace(self.state, sort_config=SortConfig(key=key, direction=direction))

    def set_filter(self, key: str, pattern: str) -> None:
        """Set the filter pattern for a column and go back to the first page."""
        filters = {**self.state.filters, key: pattern}
        self.state = replace(self.state, filters=filters, current_page=1)

    def set_page(self, page: int) -> None:
        total_pages = page_count(len(self._filtered_rows()), self.state.rows_per_page)
        self.state = replace(self.state, current_page=min(max(page, 1), max(total_pages, 1)))

    def next_page(self) -> None:
        self.set_page(self.state.current_page + 1)

    def previous_page(self) -> None:
        self.set_page(self.state.current_page - 1)

    def _filtered_rows(self) -> list[Row]:
        return filter_rows(sort_rows(self.rows, self.state.sort_config), self.state.filters)

    def view(self) -> TableView:
        state = self.state
        filtered = self._filtered_rows()
        page_rows = paginate(filtered, state.current_page, state.rows_per_page)
        total_items = len(filtered)

        if not self.rows:
            status = TableStatus.NO_DATA
        elif total_items == 0:
            status = TableStatus.NO_MATCHES
        else:
            status = TableStatus.READY

        extra_cells = (
            [self.extra_column.calculate(row) for row in page_rows]
            if self.extra_column is not None
            else []
        )
        return TableView(
            status=status,
            headers=self.headers,
            rows=page_rows,
            extra_cells=extra_cells,
            sort_config=state.sort_config,
            filters=dict(state.filters),
            current_page=state.current_page,
            total_pages=page_count(total_items, state.rows_per_page),
            total_items=total_items,
            start_item=(state.current_page - 1) * state.rows_per_page + 1 if total_items else 0,
            end_item=min(state.current_page * state.rows_per_page, total_items),
        )
