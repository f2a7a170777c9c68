"""Core domain model: the journal trade record.

A ``Trade`` is the read-only input of every statistic.  Rows come from
an external store whose columns are loosely typed (booleans stored as
strings, profits stored as text, legacy rows without newer flags), so
the validators here coerce instead of rejecting: a malformed value
degrades to ``None``/``False`` and the record still loads.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from .enums import TradeResult

_TRUE_STRINGS = {"true", "1", "yes", "y", "t"}


def parse_trade_date(value: Any) -> date | None:
    """Coerce a date, datetime or ISO string to a calendar day.

    Date-times are truncated to the day; anything unparsable is ``None``.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) < 10:
            return None
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def coerce_flag(value: Any, default: bool = False) -> bool:
    """Interpret bool / str / number flags the way the journal stores them."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return default


def coerce_number(value: Any) -> float | None:
    """Return a finite float, or ``None`` for missing / non-numeric values."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def coerce_scale(value: Any, low: int, high: int) -> int | None:
    """Whole number within ``[low, high]``, or ``None``."""
    number = coerce_number(value)
    if number is None or not low <= number <= high:
        return None
    return int(number)


def coerce_result(value: Any) -> TradeResult | None:
    if isinstance(value, TradeResult):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip().lower()
    if text == "win":
        return TradeResult.WIN
    if text in ("lose", "loss"):
        return TradeResult.LOSE
    return None


class Trade(BaseModel):
    """One journal entry, as supplied by the trade store."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Identity
    id: str = ""
    market: str = ""
    direction: str = ""  # "Long" or "Short"

    # Timing
    trade_date: date | None = None
    trade_time: str | None = None  # "HH:MM"
    day_of_week: str | None = None

    # Result
    trade_outcome: TradeResult | None = None
    be_final_result: TradeResult | None = None
    break_even: bool = False
    executed: bool = True  # Legacy rows predate the flag and were all taken
    calculated_profit: float | None = None

    # Trade-type flags
    partials_taken: bool = False
    reentry: bool = False
    launch_hour: bool = False
    rr_hit_1_4: bool = False  # Reached 1.4R before the outcome was decided

    # Category attributes
    setup_type: str | None = None
    liquidity: str | None = None
    local_high_low: bool = False
    sl_size: float | None = None
    mss: str | None = None
    news_related: bool = False
    news_name: str | None = None
    news_intensity: int | None = None
    evaluation: str | None = None
    trend: str | None = None
    risk_per_trade: float | None = None  # Percent of balance, e.g. 0.5
    risk_reward_ratio: float | None = None

    # Self-assessment at entry, 1 (lowest) to 5
    confidence_at_entry: int | None = None
    mind_state_at_entry: int | None = None

    @field_validator("trade_date", mode="before")
    @classmethod
    def _parse_date(cls, v: Any) -> date | None:
        return parse_trade_date(v)

    @field_validator("trade_outcome", "be_final_result", mode="before")
    @classmethod
    def _parse_result(cls, v: Any) -> TradeResult | None:
        return coerce_result(v)

    @field_validator(
        "break_even", "partials_taken", "reentry", "local_high_low", "news_related",
        "launch_hour", "rr_hit_1_4",
        mode="before",
    )
    @classmethod
    def _parse_flag(cls, v: Any) -> bool:
        return coerce_flag(v, default=False)

    @field_validator("executed", mode="before")
    @classmethod
    def _parse_executed(cls, v: Any) -> bool:
        return coerce_flag(v, default=True)

    @field_validator(
        "calculated_profit", "sl_size", "risk_per_trade", "risk_reward_ratio",
        mode="before",
    )
    @classmethod
    def _parse_number(cls, v: Any) -> float | None:
        return coerce_number(v)

    @field_validator("news_intensity", mode="before")
    @classmethod
    def _parse_intensity(cls, v: Any) -> int | None:
        return coerce_scale(v, 1, 3)

    @field_validator("confidence_at_entry", "mind_state_at_entry", mode="before")
    @classmethod
    def _parse_self_assessment(cls, v: Any) -> int | None:
        return coerce_scale(v, 1, 5)

    @field_validator("id", "market", "direction", mode="before")
    @classmethod
    def _parse_required_str(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v).strip()

    @field_validator(
        "trade_time", "day_of_week", "setup_type", "liquidity", "mss",
        "news_name", "evaluation", "trend",
        mode="before",
    )
    @classmethod
    def _parse_optional_str(cls, v: Any) -> str | None:
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    # ------------------------------------------------------------------ #
    # Derived values                                                       #
    # ------------------------------------------------------------------ #

    @property
    def profit(self) -> float:
        """Signed P&L contribution; missing profit counts as zero."""
        return self.calculated_profit if self.calculated_profit is not None else 0.0

    @property
    def result(self) -> TradeResult | None:
        """Win / lose, falling back to the BE final result for legacy rows."""
        if self.trade_outcome is not None:
            return self.trade_outcome
        if self.break_even:
            return self.be_final_result
        return None


def chronological(trades: list[Trade]) -> list[Trade]:
    """Sort by trade day, ascending.

    The sort is stable, so same-day trades keep their input order.
    Undated trades go last, also in input order.
    """
    return sorted(trades, key=lambda t: (t.trade_date is None, t.trade_date or date.min))
