"""Statistics engine: trades in, dashboard figures out.

Key components
--------------
classify               Scoring class of one trade (win, loss, BE, skipped)
aggregate              Win/loss/BE buckets per category key
streaks                Current and longest winning/losing runs
drawdown               Equity replay with max/average drawdown
monthly                Per-month counts and profit for one year
partials_stats         Partial, re-entry, break-even and launch-hour subsets
confidence_stats       Confidence and state-of-mind ratings at entry
compose_macro_stats    Profit factor, consistency, Sharpe, TQI, R
FilteredViewReconciler Full dashboard recomputed for one filtered view
"""

from .outcome import Outcome, classify, is_in_population
from .categories import StatBucket, BucketPolicy, aggregate, sort_buckets
from .streaks import StreakStats, streaks
from .equity import EquityPoint, DrawdownStats, equity_curve, drawdown, drawdown_from_current_balance
from .monthly import MonthlyStats, MonthlyProfit, monthly, monthly_profit
from .trade_types import (
    partials_stats,
    reentry_stats,
    break_even_stats,
    launch_hour_stats,
    local_hl_be_stats,
    partial_trades_summary,
)
from .self_assessment import ScaleStats, confidence_stats, mind_state_stats
from .macro import MacroStats, compose_macro_stats
from .overview import TradingOverview, trading_overview
from .reconciler import DashboardStats, FilteredViewReconciler, TradeFilter

__all__ = [
    "Outcome",
    "classify",
    "is_in_population",
    "StatBucket",
    "BucketPolicy",
    "aggregate",
    "sort_buckets",
    "StreakStats",
    "streaks",
    "EquityPoint",
    "DrawdownStats",
    "equity_curve",
    "drawdown",
    "drawdown_from_current_balance",
    "MonthlyStats",
    "MonthlyProfit",
    "monthly",
    "monthly_profit",
    "partials_stats",
    "reentry_stats",
    "break_even_stats",
    "launch_hour_stats",
    "local_hl_be_stats",
    "partial_trades_summary",
    "ScaleStats",
    "confidence_stats",
    "mind_state_stats",
    "MacroStats",
    "compose_macro_stats",
    "TradingOverview",
    "trading_overview",
    "DashboardStats",
    "FilteredViewReconciler",
    "TradeFilter",
]
