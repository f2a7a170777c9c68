"""Equity replay and drawdown.

Trades are replayed in date order against a starting balance.  The
balance is tracked against its running peak, and every step below the
peak is a drawdown sample (in percent of the peak).

The starting balance is not stored anywhere: it is backed out of the
account's current balance by subtracting the period's net profit.  The
same trade population therefore yields the same drawdown no matter
which view (a calendar year, or a custom range ending today) selected
it.

Usage::

    stats = drawdown_from_current_balance(trades, current_balance=10_500)
    print(stats.max_drawdown_pct, stats.average_drawdown_pct)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from journal_stats.core.models import Trade, chronological

from .outcome import population

DEFAULT_EPSILON = 0.0001


@dataclass(frozen=True)
class EquityPoint:
    """Account state around one trade."""

    balance_before: float
    balance_after: float
    peak_at_point: float
    drawdown_pct: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "balanceBefore": self.balance_before,
            "balanceAfter": self.balance_after,
            "peakAtPoint": self.peak_at_point,
            "drawdownPct": self.drawdown_pct,
        }


@dataclass
class DrawdownStats:
    max_drawdown_pct: float = 0.0
    average_drawdown_pct: float = 0.0
    starting_balance: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "maxDrawdown": self.max_drawdown_pct,
            "averageDrawdown": self.average_drawdown_pct,
            "startingBalance": self.starting_balance,
        }


def total_profit(trades: list[Trade], include_non_executed: bool = False) -> float:
    """Net P&L of the scoring population.

    Uses ``math.fsum`` so the result does not depend on input order.
    """
    return math.fsum(t.profit for t in population(trades, include_non_executed))


def starting_balance(
    current_balance: float | None,
    trades: list[Trade],
    *,
    include_non_executed: bool = False,
) -> float:
    """Balance at the start of the period: current balance minus period P&L."""
    current = current_balance or 0.0
    return max(0.0, current - total_profit(trades, include_non_executed))


def equity_curve(
    trades: list[Trade],
    starting_balance: float,
    *,
    include_non_executed: bool = False,
) -> list[EquityPoint]:
    """One point per population trade, in chronological order."""
    peak = running = starting_balance
    points: list[EquityPoint] = []
    for trade in chronological(population(trades, include_non_executed)):
        before = running
        running += trade.profit
        if running > peak:
            peak = running
        dd = (peak - running) / peak * 100 if peak > 0 else 0.0
        points.append(
            EquityPoint(
                balance_before=before,
                balance_after=running,
                peak_at_point=peak,
                drawdown_pct=dd,
            )
        )
    return points


def drawdown(
    trades: list[Trade],
    starting_balance: float,
    *,
    include_non_executed: bool = False,
    epsilon: float = DEFAULT_EPSILON,
) -> DrawdownStats:
    """Maximum and average drawdown percentage over the replay.

    Samples at or below ``epsilon`` are treated as float noise and left
    out of the average.  With a positive maximum but no retained
    samples the maximum doubles as the average.
    """
    max_dd = 0.0
    samples: list[float] = []
    for point in equity_curve(trades, starting_balance, include_non_executed=include_non_executed):
        if point.peak_at_point <= 0:
            continue
        if point.drawdown_pct > epsilon:
            samples.append(point.drawdown_pct)
        max_dd = max(max_dd, point.drawdown_pct)

    if samples:
        average = min(math.fsum(samples) / len(samples), max_dd)
    else:
        average = max_dd if max_dd > 0 else 0.0
    return DrawdownStats(
        max_drawdown_pct=max_dd,
        average_drawdown_pct=average,
        starting_balance=starting_balance,
    )


def drawdown_from_current_balance(
    trades: list[Trade],
    current_balance: float | None,
    *,
    include_non_executed: bool = False,
    epsilon: float = DEFAULT_EPSILON,
) -> DrawdownStats:
    """Drawdown with the starting balance backed out of ``current_balance``."""
    start = starting_balance(current_balance, trades, include_non_executed=include_non_executed)
    return drawdown(
        trades,
        start,
        include_non_executed=include_non_executed,
        epsilon=epsilon,
    )
