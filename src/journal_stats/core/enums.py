"""Enumerations used across the statistics engine."""

from enum import Enum


class TradeResult(str, Enum):
    WIN = "Win"
    LOSE = "Lose"


class ExecutionFilter(str, Enum):
    """Which trades a view admits, and whether non-executed ones are scored."""

    EXECUTED = "executed"
    NON_EXECUTED = "nonExecuted"
    ALL = "all"

    @property
    def scores_non_executed(self) -> bool:
        return self is not ExecutionFilter.EXECUTED


class ViewMode(str, Enum):
    YEARLY = "yearly"
    DATE_RANGE = "dateRange"


class TotalMode(str, Enum):
    """Denominator policy for a bucket's ``total``."""

    ALL_TRADES = "all_trades"      # Every routed trade, scored or not
    EXECUTED_ONLY = "executed_only"  # Only trades in the scoring population


class PresetRange(str, Enum):
    YEAR = "year"
    LAST_15_DAYS = "15days"
    LAST_30_DAYS = "30days"
    MONTH = "month"
