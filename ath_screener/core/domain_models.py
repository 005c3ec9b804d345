from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# --- Row Shape ---

# A cell is text, a number, a boolean or absent.
# bool is listed separately: it must never be treated as a number.
CellValue = str | int | float | bool | None

# Rows are treated as read-only snapshots; transformations build new dicts.
Row = Mapping[str, CellValue]


TV_SYMBOL_COLUMN = "TV SYMBOL"
MARKET_CAP_COLUMN = "Market capitalization"
MARKET_CAP_CURRENCY_COLUMN = "Market capitalization - Currency"
MARKET_CAP_CATEGORY_COLUMN = "Market Cap Category"
PERCENT_FROM_HIGH_COLUMN = "% From High"


# --- Enums ---


class SortDirection(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


class MarketCapCategory(str, Enum):
    """Market capitalization tiers."""

    LARGE_CAP = "Large Cap"
    MID_CAP = "Mid Cap"
    SMALL_CAP = "Small Cap"
    MICRO_CAP = "Micro Cap"
    UNKNOWN = "Unknown"


class TableStatus(str, Enum):
    """Display state of a table view.

    NO_DATA is an empty input row set, NO_MATCHES is a non-empty input
    where the active filters removed every row.
    """

    NO_DATA = "no_data"
    NO_MATCHES = "no_matches"
    READY = "ready"


# --- Domain Models ---


@dataclass(frozen=True)
class Dataset:
    """Rows parsed from one uploaded file plus the derived header list."""

    rows: tuple[Row, ...] = ()
    headers: tuple[str, ...] = ()

    @classmethod
    def from_rows(cls, rows: Sequence[Row], headers: Sequence[str] | None = None) -> "Dataset":
        """
        Factory method building a dataset; headers default to the first row's keys
        """
        frozen_rows = tuple(dict(row) for row in rows)
        if headers is None:
            headers = list(frozen_rows[0].keys()) if frozen_rows else []
        return cls(rows=frozen_rows, headers=tuple(headers))

    @property
    def is_empty(self) -> bool:
        return len(self.rows) == 0

    def __len__(self) -> int:
        return len(self.rows)


class ResolvedColumns(BaseModel):
    """Semantic columns found in a header list. Empty string means unresolved."""

    model_config = ConfigDict(frozen=True)

    price_column: str = ""
    high_column: str = ""
    symbol_column: str = ""

    @property
    def is_complete(self) -> bool:
        """Price and high columns are both known."""
        return bool(self.price_column and self.high_column)


class SortConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    direction: SortDirection = SortDirection.ASCENDING


# column name -> substring pattern
FilterConfig = dict[str, str]


class CategorizedStock(BaseModel):
    """
    Lossy projection of a row used by the market cap categorization.

    market_cap keeps the raw cell so the UI can show what the file contained.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str = ""
    description: str = ""
    market_cap: CellValue = None
    market_cap_currency: str = ""


class CategorizationSummary(BaseModel):
    total: int = 0
    large_cap: int = 0
    mid_cap: int = 0
    small_cap: int = 0
    micro_cap: int = 0
    unknown: int = 0


class CategorizationResult(BaseModel):
    summary: CategorizationSummary = Field(default_factory=CategorizationSummary)
    categorized_stocks: dict[MarketCapCategory, list[CategorizedStock]] = Field(
        default_factory=lambda: {category: [] for category in MarketCapCategory}
    )

    def bucket(self, category: MarketCapCategory) -> list[CategorizedStock]:
        return self.categorized_stocks.get(category, [])


class UploadStatus(BaseModel):
    """Status reported by the file loading step."""

    status: Literal["idle", "uploading", "success", "error"] = "idle"
    message: str = ""


@dataclass(frozen=True)
class UploadResult:
    dataset: Dataset = field(default_factory=Dataset)
    status: UploadStatus = field(default_factory=UploadStatus)

    @property
    def ok(self) -> bool:
        return self.status.status == "success"
