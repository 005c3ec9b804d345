"""Heuristic detection of semantic columns in arbitrary spreadsheet headers."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Literal

from ath_screener.core.domain_models import ResolvedColumns, Row


@dataclass(frozen=True)
class HeaderRule:
    """Case-insensitive match of a header against a pattern."""

    pattern: str
    mode: Literal["contains", "equals"] = "contains"

    def matches(self, header: str) -> bool:
        key = header.lower()
        if self.mode == "equals":
            return key == self.pattern
        return self.pattern in key


# Bump when rule order or patterns change; resolution results depend on both.
COLUMN_RULES_VERSION = 1

# Rules per slot, in priority order. Within a slot the first header (in header
# order) matching any rule wins, so exact "price" does not beat an earlier
# "Price - Currency".
COLUMN_RULES: dict[str, tuple[HeaderRule, ...]] = {
    "price": (
        HeaderRule("price"),
        HeaderRule("price", mode="equals"),
    ),
    "high": (
        HeaderRule("high all time"),
        HeaderRule("all time high"),
        HeaderRule("ath"),
    ),
    "symbol": (
        HeaderRule("symbol", mode="equals"),
        HeaderRule("ticker"),
        HeaderRule("code"),
    ),
}

# Looser per-row fallbacks used by the threshold screen.
SCREEN_FALLBACK_RULES: dict[str, tuple[HeaderRule, ...]] = {
    "price": (HeaderRule("price"),),
    "high": (
        HeaderRule("high"),
        HeaderRule("all time"),
    ),
}

# The at-high screen also accepts a "current ..." column as the price.
AT_HIGH_PRICE_RULES: tuple[HeaderRule, ...] = (*COLUMN_RULES["price"], HeaderRule("current"))


def find_header(headers: Iterable[str], rules: Sequence[HeaderRule]) -> str | None:
    """First header matching any of the rules, or None."""
    for header in headers:
        if any(rule.matches(header) for rule in rules):
            return header
    return None


def find_row_key(row: Row, preferred: str | None, rules: Sequence[HeaderRule]) -> str | None:
    """Resolve a column for a single row.

    The preferred column wins when the row has it; otherwise the first key of
    this row matching the rules. Rows may have different key sets, so this is
    evaluated per row.
    """
    if preferred and preferred in row:
        return preferred
    return find_header(row.keys(), rules)


def resolve_columns(headers: Sequence[str]) -> ResolvedColumns:
    """Find the price, all-time-high and symbol columns in a header list."""
    return ResolvedColumns(
        price_column=find_header(headers, COLUMN_RULES["price"]) or "",
        high_column=find_header(headers, COLUMN_RULES["high"]) or "",
        symbol_column=find_header(headers, COLUMN_RULES["symbol"]) or "",
    )
