"""Application configuration using Pydantic V2."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings and configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ATH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # Project paths
    config_path: Path = Field(
        default_factory=lambda: Path(__file__).parent.parent.parent / "config" / "config.yaml"
    )


# Singleton instance
settings = Settings()
