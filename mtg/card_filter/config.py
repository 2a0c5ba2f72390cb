"""
Configuration for the card filter.

Settings come from three places, later ones winning:
1. Defaults on the pydantic models below
2. An optional YAML file (--config or CARD_FILTER_CONFIG)
3. Environment variables for logging (CARD_FILTER_LOG_LEVEL, CARD_FILTER_LOG_FILE)
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel

from .naming import DEFAULT_KEY_SEPARATOR


class MatchSettings(BaseModel):
    """Settings for the matching algorithm."""
    partial_match: bool = True  # Tier 3 substring search
    key_separator: str = DEFAULT_KEY_SEPARATOR


class OutputSettings(BaseModel):
    """Settings for the JSON and Markdown writers."""
    indent: int = 2
    create_dirs: bool = True


class LoggingSettings(BaseModel):
    level: str = "INFO"
    file: Optional[str] = None


class Config(BaseModel):
    """Full configuration for a card filter run."""
    matching: MatchSettings = MatchSettings()
    output: OutputSettings = OutputSettings()
    logging: LoggingSettings = LoggingSettings()


class Settings:
    """Process-level settings loaded from environment variables."""

    CONFIG_PATH: str = os.environ.get("CARD_FILTER_CONFIG", "")
    LOG_LEVEL: str = os.environ.get("CARD_FILTER_LOG_LEVEL", "")
    LOG_FILE: str = os.environ.get("CARD_FILTER_LOG_FILE", "")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def load_config(
    config_path: str | Path | None = None,
    settings: Optional[Settings] = None,
) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to a YAML config file. Falls back to
            CARD_FILTER_CONFIG, then to built-in defaults.
        settings: Environment settings (defaults to the cached instance)

    Returns:
        Config object

    Raises:
        FileNotFoundError: If an explicit config file does not exist
        ValueError: If the file is not valid YAML or not a mapping
    """
    settings = settings or get_settings()
    path_str = str(config_path) if config_path else settings.CONFIG_PATH

    data: dict = {}
    if path_str:
        path = Path(path_str)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {path}")

    config = Config(**data)

    # Environment wins over the file for logging
    if settings.LOG_LEVEL:
        config.logging.level = settings.LOG_LEVEL
    if settings.LOG_FILE:
        config.logging.file = settings.LOG_FILE

    return config
