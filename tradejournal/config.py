"""Configuration for TradeJournal.

Settings live in ``~/.config/tradejournal/config.toml``:

    [journal]
    trades_file = "~/.config/tradejournal/trades.json"
    timezone = "America/New_York"
    recent_count = 5
    default_range = "all"

    [colors]
    profit = "#22c55e"
    loss = "#ef4444"
    neutral = "#374151"
    backdrop = "#111827"

Every key is optional.
"""

import logging
import os
import re
from pathlib import Path
from typing import Optional

import pytz
import toml
from pydantic import BaseModel, Field, ValidationError, field_validator

from tradejournal.analytics.filters import DateRangePreset
from tradejournal.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "tradejournal"
CONFIG_ENV_VAR = "TRADEJOURNAL_CONFIG"

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


class JournalSettings(BaseModel):
    """Where trades come from and how they are windowed."""

    trades_file: Path = Field(default=CONFIG_DIR / "trades.json", description="JSON trade snapshot")
    timezone: Optional[str] = Field(default=None, description="IANA zone for calendar bucketing")
    recent_count: int = Field(default=5, ge=1, description="Trades shown by 'recent'")
    default_range: DateRangePreset = Field(default="all", description="Date range when --range is omitted")

    model_config = {"frozen": True}

    @field_validator("trades_file")
    @classmethod
    def _expand_user(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in pytz.all_timezones_set:
            raise ValueError(f"Unknown timezone: {value}")
        return value


class ColorSettings(BaseModel):
    """Heat map colors."""

    profit: str = "#22c55e"
    loss: str = "#ef4444"
    neutral: str = "#374151"
    backdrop: str = "#111827"

    model_config = {"frozen": True}

    @field_validator("profit", "loss", "neutral", "backdrop")
    @classmethod
    def _hex_color(cls, value: str) -> str:
        if not _HEX_COLOR.match(value):
            raise ValueError(f"Expected a #rrggbb color, got {value!r}")
        return value.lower()


class AppConfig(BaseModel):
    """Complete TradeJournal configuration."""

    journal: JournalSettings = Field(default_factory=JournalSettings)
    colors: ColorSettings = Field(default_factory=ColorSettings)

    model_config = {"frozen": True}


def default_config_path() -> Path:
    """Config file location, honouring ``TRADEJOURNAL_CONFIG``."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return CONFIG_DIR / "config.toml"


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load configuration, falling back to defaults when no file exists.

    Args:
        config_path: Explicit file to read. Defaults to default_config_path().

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If the file cannot be parsed or holds invalid values.
    """
    config_path = config_path or default_config_path()

    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return AppConfig()

    try:
        raw = toml.load(config_path)
    except (OSError, toml.TomlDecodeError) as e:
        raise ConfigError(f"Could not read {config_path}: {e}") from e

    try:
        config = AppConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"{config_path}: {e}") from e

    logger.debug("Loaded config from %s", config_path)
    return config
