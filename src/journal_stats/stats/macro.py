"""Headline ratios: profit factor, consistency, Sharpe, TQI and R.

All functions take the already-filtered trade list of a view and score
only its population (executed trades, plus non-executed ones when the
caller opts in).  A view without a single scored trade reports zero for
every ratio.
"""

from __future__ import annotations

import math
import statistics
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Any

from journal_stats.core.enums import TradeResult
from journal_stats.core.models import Trade

from .monthly import MonthlyProfit
from .outcome import classify, population


def _has_scored(trades: list[Trade], include_non_executed: bool) -> bool:
    return any(
        classify(t, include_non_executed=include_non_executed).is_scored for t in trades
    )


def consistency_score(profit_by_month: dict[str, MonthlyProfit]) -> float:
    """Percentage of traded months that closed with a profit."""
    if not profit_by_month:
        return 0.0
    profitable = sum(1 for m in profit_by_month.values() if m.profit > 0)
    return profitable / len(profit_by_month) * 100


def consistency_score_with_be(
    trades: list[Trade], *, include_non_executed: bool = False
) -> float:
    """Percentage of trading days that closed with a profit.

    Every scored trade counts toward its day, break-evens included, so
    a day of flat BE trades is a day without profit.  Undated trades
    are left out.
    """
    daily: dict[date, float] = defaultdict(float)
    for trade in trades:
        if trade.trade_date is None:
            continue
        if classify(trade, include_non_executed=include_non_executed).is_scored:
            daily[trade.trade_date] += trade.profit
    if not daily:
        return 0.0
    return sum(1 for pnl in daily.values() if pnl > 0) / len(daily) * 100


def profit_factor(trades: list[Trade], *, include_non_executed: bool = False) -> float:
    """Gross profit over gross loss.

    Returns ``inf`` when there is profit but no loss, ``0.0`` when there
    is neither.
    """
    if not _has_scored(trades, include_non_executed):
        return 0.0
    gross_profit = gross_loss = 0.0
    for trade in population(trades, include_non_executed):
        if trade.profit > 0:
            gross_profit += trade.profit
        elif trade.profit < 0:
            gross_loss += -trade.profit
    if gross_loss > 0:
        return gross_profit / gross_loss
    return math.inf if gross_profit > 0 else 0.0


def sharpe_ratio(trades: list[Trade], *, include_non_executed: bool = False) -> float:
    """Mean over sample standard deviation of per-trade profit."""
    if not _has_scored(trades, include_non_executed):
        return 0.0
    pnls = [t.profit for t in population(trades, include_non_executed)]
    if len(pnls) < 2:
        return 0.0
    std = statistics.stdev(pnls)
    return statistics.mean(pnls) / std if std > 0 else 0.0


def _r_value(trade: Trade) -> float | None:
    """Planned R of a trade: BE 0, win +R:R, loss -1; ``None`` if unknown."""
    if trade.break_even:
        return 0.0
    if trade.trade_outcome == TradeResult.WIN:
        return trade.risk_reward_ratio or 0.0
    if trade.trade_outcome == TradeResult.LOSE:
        return -1.0
    return None


def trade_quality_index(trades: list[Trade], *, include_non_executed: bool = False) -> float:
    """Win rate scaled by R stability, in ``[0, 1]``.

    ``TQI = wins / counted * 1 / (1 + pstdev(R))``.  Break-evens count
    in the denominator but never as wins; trades without an outcome are
    left out.
    """
    r_values: list[float] = []
    wins = 0
    for trade in population(trades, include_non_executed):
        r = _r_value(trade)
        if r is None:
            continue
        r_values.append(r)
        if not trade.break_even and trade.trade_outcome == TradeResult.WIN:
            wins += 1
    if not r_values:
        return 0.0
    return (wins / len(r_values)) * (1 / (1 + statistics.pstdev(r_values)))


def r_multiple(trades: list[Trade], *, include_non_executed: bool = False) -> float:
    """Sum of planned R over the population."""
    total = 0.0
    for trade in population(trades, include_non_executed):
        r = _r_value(trade)
        if r is not None:
            total += r
    return total


@dataclass
class MacroStats:
    profit_factor: float = 0.0
    consistency_score: float = 0.0
    consistency_score_with_be: float = 0.0
    sharpe_ratio: float = 0.0
    trade_quality_index: float = 0.0
    multiple_r: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "profitFactor": None if math.isinf(self.profit_factor) else self.profit_factor,
            "consistencyScore": self.consistency_score,
            "consistencyScoreWithBE": self.consistency_score_with_be,
            "sharpeRatio": self.sharpe_ratio,
            "tradeQualityIndex": self.trade_quality_index,
            "multipleR": self.multiple_r,
        }


def compose_macro_stats(
    trades: list[Trade],
    profit_by_month: dict[str, MonthlyProfit],
    *,
    include_non_executed: bool = False,
) -> MacroStats:
    """Compute every headline ratio for one view."""
    return MacroStats(
        profit_factor=profit_factor(trades, include_non_executed=include_non_executed),
        consistency_score=consistency_score(profit_by_month),
        consistency_score_with_be=consistency_score_with_be(
            trades, include_non_executed=include_non_executed
        ),
        sharpe_ratio=sharpe_ratio(trades, include_non_executed=include_non_executed),
        trade_quality_index=trade_quality_index(
            trades, include_non_executed=include_non_executed
        ),
        multiple_r=r_multiple(trades, include_non_executed=include_non_executed),
    )
