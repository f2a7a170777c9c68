"""Filtered-view reconciliation.

The dashboard shows one *view* at a time: a calendar year or a custom
date range, optionally narrowed to one market and one execution state.
:class:`FilteredViewReconciler` re-derives every figure of a view from
the exact trade list the view selects, so two views selecting the same
trades always agree, whatever mix of precomputed data a caller holds.

Usage::

    reconciler = FilteredViewReconciler(settings.analytics)
    stats = reconciler.compute(
        trades,
        account_balance=10_500,
        trade_filter=TradeFilter.yearly(2024, market="EURUSD"),
    )
    print(stats.drawdown.max_drawdown_pct, stats.macro.profit_factor)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from journal_stats.core.config import AnalyticsConfig
from journal_stats.core.enums import ExecutionFilter, ViewMode
from journal_stats.core.models import Trade
from journal_stats.observability.logger import view_context

from . import categories as cat
from .categories import BucketPolicy, MarketProfit, NewsEventStats, StatBucket
from .equity import DrawdownStats, drawdown_from_current_balance
from .macro import MacroStats, compose_macro_stats
from .monthly import (
    BestWorstMonth,
    MonthlyProfit,
    MonthlyStats,
    average_monthly_trades,
    best_and_worst_month,
    monthly,
    monthly_profit,
    total_year_profit,
    updated_balance,
)
from .overview import TradingOverview, trading_overview
from .periods import DateRange, year_range
from .self_assessment import ScaleStats, confidence_stats, mind_state_stats
from .streaks import StreakStats, streaks
from .trade_types import (
    PartialTradesSummary,
    break_even_stats,
    launch_hour_stats,
    local_hl_be_stats,
    partial_trades_summary,
    partials_stats,
    reentry_stats,
)

logger = logging.getLogger(__name__)

ALL_MARKETS = "all"


@dataclass(frozen=True)
class TradeFilter:
    """Selection criteria of one dashboard view.

    ``market`` of ``None`` or ``"all"`` admits every market.  A view
    with a ``period`` drops undated trades.
    """

    view_mode: ViewMode = ViewMode.DATE_RANGE
    period: DateRange | None = None
    market: str | None = None
    execution: ExecutionFilter = ExecutionFilter.EXECUTED

    @classmethod
    def yearly(
        cls,
        year: int,
        *,
        market: str | None = None,
        execution: ExecutionFilter | str = ExecutionFilter.EXECUTED,
    ) -> TradeFilter:
        return cls(
            view_mode=ViewMode.YEARLY,
            period=year_range(year),
            market=market,
            execution=ExecutionFilter(execution),
        )

    @classmethod
    def date_range(
        cls,
        start: date,
        end: date,
        *,
        market: str | None = None,
        execution: ExecutionFilter | str = ExecutionFilter.EXECUTED,
    ) -> TradeFilter:
        """Inclusive ``[start, end]`` view; raises FilterError if inverted."""
        return cls(
            view_mode=ViewMode.DATE_RANGE,
            period=DateRange(start, end),
            market=market,
            execution=ExecutionFilter(execution),
        )

    @property
    def include_non_executed(self) -> bool:
        return self.execution.scores_non_executed

    @property
    def year(self) -> int | None:
        if self.view_mode == ViewMode.YEARLY and self.period is not None:
            return self.period.start.year
        return None

    def matches(self, trade: Trade) -> bool:
        if self.period is not None:
            if trade.trade_date is None or not self.period.contains(trade.trade_date):
                return False
        if self.market and self.market != ALL_MARKETS and trade.market != self.market:
            return False
        if self.execution == ExecutionFilter.EXECUTED:
            return trade.executed
        if self.execution == ExecutionFilter.NON_EXECUTED:
            return not trade.executed
        return True

    def apply(self, trades: list[Trade]) -> list[Trade]:
        """Trades admitted by this filter, in input order."""
        return [t for t in trades if self.matches(t)]

    def to_dict(self) -> dict[str, Any]:
        return {
            "viewMode": self.view_mode.value,
            "startDate": self.period.start.isoformat() if self.period else None,
            "endDate": self.period.end.isoformat() if self.period else None,
            "market": self.market or ALL_MARKETS,
            "execution": self.execution.value,
        }


def _buckets_dict(buckets: dict[str, Any]) -> dict[str, Any]:
    return {label: b.to_dict() for label, b in buckets.items()}


@dataclass
class DashboardStats:
    """Every figure of one view, computed from the same trade list."""

    trade_filter: TradeFilter
    view_id: str = ""
    trade_count: int = 0
    overview: TradingOverview = field(default_factory=TradingOverview)
    streaks: StreakStats = field(default_factory=StreakStats)
    drawdown: DrawdownStats = field(default_factory=DrawdownStats)
    monthly: dict[str, MonthlyStats] = field(default_factory=dict)
    monthly_profit: dict[str, MonthlyProfit] = field(default_factory=dict)
    total_year_profit: float = 0.0
    average_monthly_trades: float = 0.0
    updated_balance: float = 0.0
    best_worst_month: BestWorstMonth = field(default_factory=BestWorstMonth)
    macro: MacroStats = field(default_factory=MacroStats)

    partials: StatBucket = field(default_factory=StatBucket)
    partial_summary: PartialTradesSummary = field(default_factory=PartialTradesSummary)
    reentry: StatBucket = field(default_factory=StatBucket)
    break_even: StatBucket = field(default_factory=StatBucket)
    launch_hour: StatBucket = field(default_factory=StatBucket)
    local_hl_be: StatBucket = field(default_factory=StatBucket)

    market: dict[str, StatBucket] = field(default_factory=dict)
    market_profit: dict[str, MarketProfit] = field(default_factory=dict)
    direction: dict[str, StatBucket] = field(default_factory=dict)
    setup: dict[str, StatBucket] = field(default_factory=dict)
    liquidity: dict[str, StatBucket] = field(default_factory=dict)
    local_high_low: dict[str, StatBucket] = field(default_factory=dict)
    sl_size: dict[str, StatBucket] = field(default_factory=dict)
    average_sl_size: dict[str, float] = field(default_factory=dict)
    rr_hit: dict[str, int] = field(default_factory=dict)
    mss: dict[str, StatBucket] = field(default_factory=dict)
    news: dict[str, StatBucket] = field(default_factory=dict)
    news_events: dict[str, NewsEventStats] = field(default_factory=dict)
    day_of_week: dict[str, StatBucket] = field(default_factory=dict)
    time_interval: dict[str, StatBucket] = field(default_factory=dict)
    trend: dict[str, StatBucket] = field(default_factory=dict)
    risk: dict[str, StatBucket] = field(default_factory=dict)
    evaluation: list[tuple[str, StatBucket]] = field(default_factory=list)

    confidence: ScaleStats = field(default_factory=ScaleStats)
    mind_state: ScaleStats = field(default_factory=ScaleStats)

    def to_dict(self) -> dict[str, Any]:
        return {
            "filter": self.trade_filter.to_dict(),
            "viewId": self.view_id,
            "tradeCount": self.trade_count,
            "overview": self.overview.to_dict(),
            "streaks": self.streaks.to_dict(),
            "drawdown": self.drawdown.to_dict(),
            "monthly": _buckets_dict(self.monthly),
            "monthlyProfit": _buckets_dict(self.monthly_profit),
            "totalYearProfit": self.total_year_profit,
            "averageMonthlyTrades": self.average_monthly_trades,
            "updatedBalance": self.updated_balance,
            **self.best_worst_month.to_dict(),
            "macro": self.macro.to_dict(),
            "partials": self.partials.to_dict(),
            "partialSummary": self.partial_summary.to_dict(),
            "reentry": self.reentry.to_dict(),
            "breakEven": self.break_even.to_dict(),
            "launchHour": self.launch_hour.to_dict(),
            "localHighLowBE": self.local_hl_be.to_dict(),
            "categories": {
                "market": _buckets_dict(self.market),
                "marketProfit": _buckets_dict(self.market_profit),
                "direction": _buckets_dict(self.direction),
                "setup": _buckets_dict(self.setup),
                "liquidity": _buckets_dict(self.liquidity),
                "localHighLow": _buckets_dict(self.local_high_low),
                "slSize": _buckets_dict(self.sl_size),
                "averageSlSize": dict(self.average_sl_size),
                "rrHit": dict(self.rr_hit),
                "mss": _buckets_dict(self.mss),
                "news": _buckets_dict(self.news),
                "newsEvents": _buckets_dict(self.news_events),
                "dayOfWeek": _buckets_dict(self.day_of_week),
                "timeInterval": _buckets_dict(self.time_interval),
                "trend": _buckets_dict(self.trend),
                "risk": _buckets_dict(self.risk),
                "evaluation": [
                    {"grade": grade, **bucket.to_dict()} for grade, bucket in self.evaluation
                ],
            },
            "confidence": self.confidence.to_dict(),
            "mindState": self.mind_state.to_dict(),
        }


class FilteredViewReconciler:
    """Recompute a full dashboard from the trades a filter selects.

    Parameters
    ----------
    config : AnalyticsConfig
        Bucket definitions and policies.  Defaults apply when omitted.
    """

    def __init__(self, config: AnalyticsConfig | None = None) -> None:
        self._config = config or AnalyticsConfig()

    @property
    def config(self) -> AnalyticsConfig:
        return self._config

    def compute(
        self,
        trades: list[Trade],
        *,
        account_balance: float | None,
        trade_filter: TradeFilter | None = None,
    ) -> DashboardStats:
        """Filter ``trades`` and derive every statistic from the result.

        ``account_balance`` is the account's current balance; the view's
        starting balance for the drawdown replay is backed out of it.
        """
        trade_filter = trade_filter or TradeFilter()
        view = trade_filter.apply(trades)

        with view_context(**trade_filter.to_dict()) as view_id:
            logger.debug("Recomputing view: %d of %d trades", len(view), len(trades))
            return self._derive(view, trade_filter, account_balance, view_id)

    def _derive(
        self,
        view: list[Trade],
        trade_filter: TradeFilter,
        account_balance: float | None,
        view_id: str,
    ) -> DashboardStats:
        include = trade_filter.include_non_executed
        cfg = self._config
        policy = BucketPolicy(total_mode=cfg.total_mode, include_non_executed=include)
        balance = account_balance or 0.0

        month_stats = monthly(view, year=trade_filter.year, include_non_executed=include)
        month_profit = monthly_profit(
            view, year=trade_filter.year, include_non_executed=include
        )
        year_profit = total_year_profit(month_profit)

        return DashboardStats(
            trade_filter=trade_filter,
            view_id=view_id,
            trade_count=len(view),
            overview=trading_overview(view, balance, include_non_executed=include),
            streaks=streaks(
                view,
                exclude_break_even=cfg.exclude_break_even_from_streaks,
                include_non_executed=include,
            ),
            drawdown=drawdown_from_current_balance(
                view,
                balance,
                include_non_executed=include,
                epsilon=cfg.drawdown_epsilon,
            ),
            monthly=month_stats,
            monthly_profit=month_profit,
            total_year_profit=year_profit,
            updated_balance=updated_balance(account_balance, year_profit),
            average_monthly_trades=average_monthly_trades(month_stats),
            best_worst_month=best_and_worst_month(month_profit, month_stats),
            macro=compose_macro_stats(view, month_profit, include_non_executed=include),
            partials=partials_stats(view, policy),
            partial_summary=partial_trades_summary(view, include_non_executed=include),
            reentry=reentry_stats(view, policy),
            break_even=break_even_stats(view, policy),
            launch_hour=launch_hour_stats(view, policy),
            local_hl_be=local_hl_be_stats(view, policy),
            market=cat.market_stats(view, policy),
            market_profit=cat.market_profit_stats(view, balance, policy),
            direction=cat.direction_stats(view, policy),
            setup=cat.setup_stats(view, policy),
            liquidity=cat.liquidity_stats(view, policy),
            local_high_low=cat.local_hl_stats(view, policy),
            sl_size=cat.sl_size_stats(view, cfg.sl_size_edges, policy),
            average_sl_size=cat.average_sl_size_by_market(view),
            rr_hit=cat.rr_hit_stats(view, include_non_executed=include),
            mss=cat.mss_stats(view, policy),
            news=cat.news_stats(view, policy),
            news_events=cat.news_name_stats(view, include_unnamed=True, policy=policy),
            day_of_week=cat.day_stats(view, policy),
            time_interval=cat.interval_stats(view, cfg.time_intervals, policy),
            trend=cat.trend_stats(view, policy),
            risk=cat.risk_stats(view, cfg.risk_levels, policy),
            evaluation=cat.evaluation_stats(view, cfg.grade_order, policy),
            confidence=confidence_stats(view, include_non_executed=include),
            mind_state=mind_state_stats(view, include_non_executed=include),
        )
