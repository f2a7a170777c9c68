"""Configuration management.

Loads from TOML config files + environment variables.
Uses pydantic-settings for validation and env var overriding.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from .enums import TotalMode
from .errors import ConfigError


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class TimeInterval(BaseModel):
    label: str
    start: str  # "HH:MM", inclusive
    end: str  # "HH:MM", inclusive


def _default_intervals() -> list[TimeInterval]:
    return [
        TimeInterval(label="00:00 – 03:59", start="00:00", end="03:59"),
        TimeInterval(label="04:00 – 07:59", start="04:00", end="07:59"),
        TimeInterval(label="08:00 – 11:59", start="08:00", end="11:59"),
        TimeInterval(label="12:00 – 15:59", start="12:00", end="15:59"),
        TimeInterval(label="16:00 – 19:59", start="16:00", end="19:59"),
        TimeInterval(label="20:00 – 23:59", start="20:00", end="23:59"),
    ]


class AnalyticsConfig(BaseModel):
    risk_levels: list[float] = Field(
        default_factory=lambda: [0.25, 0.3, 0.35, 0.5, 0.7, 1.0]
    )
    grade_order: list[str] = Field(default_factory=lambda: ["A+", "A", "B", "C"])
    time_intervals: list[TimeInterval] = Field(default_factory=_default_intervals)
    sl_size_edges: list[float] = Field(  # Upper bounds of stop-loss size buckets
        default_factory=lambda: [5.0, 10.0, 20.0, 50.0]
    )
    drawdown_epsilon: float = 0.0001  # Smallest drawdown % kept for the average
    exclude_break_even_from_streaks: bool = False
    total_mode: TotalMode = TotalMode.ALL_TRADES

    @field_validator("risk_levels", "sl_size_edges")
    @classmethod
    def must_be_sorted(cls, v: list[float]) -> list[float]:
        if list(v) != sorted(v):
            raise ValueError(f"levels must be ascending, got {v}")
        return v

    @field_validator("drawdown_epsilon")
    @classmethod
    def epsilon_must_be_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"drawdown_epsilon must be >= 0, got {v}")
        return v


class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: str = "json"  # "json" or "console"


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Top-level application settings.

    Loaded from TOML config files, overridden by environment variables.
    """

    default_account_balance: float = 0.0
    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "JOURNAL_STATS_", "env_nested_delimiter": "__"}


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional).
        overrides: Dict of overrides to apply on top.

    Raises:
        ConfigError: if the file is not valid TOML or a value fails
            validation.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            import tomli

            try:
                with open(path, "rb") as f:
                    data = tomli.load(f)
            except tomli.TOMLDecodeError as exc:
                raise ConfigError(f"Cannot parse {path}: {exc}") from exc

    if overrides:
        data.update(overrides)

    try:
        return Settings(**data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
