"""Pydantic models for screener configuration."""

from pydantic import BaseModel, Field, field_validator, model_validator


class ScreeningSettings(BaseModel):
    """Thresholds used by the two screens on the dashboard."""

    percent_threshold: float = Field(
        default=20.0, ge=0, description="Max percent below the all-time high"
    )
    at_high_tolerance_percent: float = Field(
        default=0.1, ge=0, description="Tolerance for counting a stock as at its high"
    )


class TableSettings(BaseModel):
    records_per_page: int = Field(default=10, description="Rows per table page")

    @field_validator("records_per_page")
    @classmethod
    def validate_records_per_page(cls, v: int) -> int:
        """Ensure pages hold at least one row."""
        if v < 1:
            raise ValueError("records_per_page must be at least 1")
        return v


class MarketCapThresholds(BaseModel):
    """Lower bounds of the market cap tiers.

    Values are absolute amounts in whatever denomination the source file
    uses. No currency conversion is applied.
    """

    large_cap: float = Field(default=200_000_000_000, gt=0, description="Large cap lower bound")
    mid_cap: float = Field(default=50_000_000_000, gt=0, description="Mid cap lower bound")
    small_cap: float = Field(default=5_000_000_000, gt=0, description="Small cap lower bound")

    @model_validator(mode="after")
    def validate_order(self) -> "MarketCapThresholds":
        """Tiers are evaluated largest first, so bounds must strictly descend."""
        if not self.large_cap > self.mid_cap > self.small_cap:
            raise ValueError(
                "Thresholds must be strictly descending: "
                f"large_cap={self.large_cap}, mid_cap={self.mid_cap}, small_cap={self.small_cap}"
            )
        return self


class Config(BaseModel):
    """Root configuration model."""

    screening: ScreeningSettings = Field(default_factory=ScreeningSettings)
    table: TableSettings = Field(default_factory=TableSettings)
    market_cap: MarketCapThresholds = Field(default_factory=MarketCapThresholds)
