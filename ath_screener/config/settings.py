"""Configuration management for the ATH screener.

Loads screening thresholds, table settings and market cap tiers from YAML.
"""

from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from ath_screener.config.models import Config
from ath_screener.core.config import settings


def load_config(config_path: Path | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        config_path: Path to a config.yaml file. Defaults to the path in
            Settings; a missing default file falls back to built-in defaults.

    Returns:
        Parsed configuration object

    Raises:
        FileNotFoundError: If an explicitly given config file doesn't exist
        yaml.YAMLError: If config file is malformed
        pydantic.ValidationError: If values are out of range
    """
    explicit = config_path is not None
    path = Path(config_path) if config_path is not None else settings.config_path

    if not path.exists():
        if explicit:
            raise FileNotFoundError(f"Configuration file not found: {path}")
        logger.warning(f"Config not found at {path}, using defaults")
        return Config()

    logger.info(f"Loading configuration from {path}")

    with path.open("r") as f:
        raw_config: dict[str, Any] | None = yaml.safe_load(f)

    config = Config(**(raw_config or {}))
    logger.debug(
        f"Screening threshold {config.screening.percent_threshold}%, "
        f"{config.table.records_per_page} rows per page"
    )
    return config
