"""Calendar-month breakdowns for a single year.

Months are keyed by English name, not qualified by year: scope the
trade list to one year first, or pass ``year=`` and let the functions
do it.  Months without trades are absent from the maps.
"""

from __future__ import annotations

import calendar
import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any

from journal_stats.core.models import Trade

from .outcome import Outcome, classify, is_in_population

logger = logging.getLogger(__name__)

MONTHS = list(calendar.month_name)[1:]  # "January" .. "December"


def _pct(numerator: float, denominator: float) -> float:
    return numerator / denominator * 100 if denominator > 0 else 0.0


@dataclass
class MonthlyStats:
    wins: int = 0
    losses: int = 0
    be_wins: int = 0
    be_losses: int = 0

    @property
    def break_even(self) -> int:
        return self.be_wins + self.be_losses

    @property
    def win_rate(self) -> float:
        return _pct(self.wins, self.wins + self.losses)

    @property
    def win_rate_with_be(self) -> float:
        scored = self.wins + self.losses + self.be_wins + self.be_losses
        return _pct(self.wins + self.be_wins, scored)

    def to_dict(self) -> dict[str, Any]:
        return {
            "wins": self.wins,
            "losses": self.losses,
            "beWins": self.be_wins,
            "beLosses": self.be_losses,
            "winRate": self.win_rate,
            "winRateWithBE": self.win_rate_with_be,
        }


@dataclass
class MonthlyProfit:
    profit: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {"profit": self.profit}


def _month_of(trade: Trade, year: int | None) -> str | None:
    if trade.trade_date is None:
        return None
    if year is not None and trade.trade_date.year != year:
        return None
    return MONTHS[trade.trade_date.month - 1]


def _ordered(data: dict[str, Any]) -> dict[str, Any]:
    return {m: data[m] for m in MONTHS if m in data}


def monthly(
    trades: list[Trade],
    *,
    year: int | None = None,
    include_non_executed: bool = False,
) -> dict[str, MonthlyStats]:
    """Win/loss/break-even counts per month, in calendar order."""
    data: dict[str, MonthlyStats] = defaultdict(MonthlyStats)
    for trade in trades:
        month = _month_of(trade, year)
        if month is None:
            continue
        outcome = classify(trade, include_non_executed=include_non_executed)
        if outcome == Outcome.NON_EXECUTED:
            continue
        stats = data[month]
        if outcome == Outcome.WIN:
            stats.wins += 1
        elif outcome == Outcome.LOSE:
            stats.losses += 1
        elif outcome == Outcome.BE_WIN:
            stats.be_wins += 1
        elif outcome == Outcome.BE_LOSE:
            stats.be_losses += 1
    return _ordered(data)


def monthly_profit(
    trades: list[Trade],
    *,
    year: int | None = None,
    include_non_executed: bool = False,
) -> dict[str, MonthlyProfit]:
    """Net profit per month, in calendar order."""
    data: dict[str, MonthlyProfit] = defaultdict(MonthlyProfit)
    skipped = 0
    for trade in trades:
        if not is_in_population(trade, include_non_executed):
            continue
        month = _month_of(trade, year)
        if month is None:
            if trade.trade_date is None:
                skipped += 1
            continue
        data[month].profit += trade.profit
    if skipped:
        logger.debug("monthly_profit: %d undated trades left out", skipped)
    return _ordered(data)


def total_year_profit(profit_by_month: dict[str, MonthlyProfit]) -> float:
    return sum(m.profit for m in profit_by_month.values())


def average_monthly_trades(stats_by_month: dict[str, MonthlyStats]) -> float:
    """Scored trades per month, averaged over the months present."""
    if not stats_by_month:
        return 0.0
    scored = sum(m.wins + m.losses + m.break_even for m in stats_by_month.values())
    return scored / len(stats_by_month)


def updated_balance(base_balance: float | None, total_year_profit: float) -> float:
    """Project the balance forward; never negative, ``None`` base means 0."""
    return max(0.0, (base_balance or 0.0) + total_year_profit)


@dataclass
class BestWorstMonth:
    best: str | None = None
    worst: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"bestMonth": self.best, "worstMonth": self.worst}


def best_and_worst_month(
    profit_by_month: dict[str, MonthlyProfit],
    stats_by_month: dict[str, MonthlyStats],
) -> BestWorstMonth:
    """Highest and lowest profit month among months with a win or loss.

    Ties go to the earlier month.
    """
    result = BestWorstMonth()
    best_profit = worst_profit = 0.0
    for month in MONTHS:
        stats = stats_by_month.get(month)
        if stats is None or (stats.wins + stats.losses + stats.break_even) == 0:
            continue
        profit = profit_by_month.get(month, MonthlyProfit()).profit
        if result.best is None or profit > best_profit:
            result.best, best_profit = month, profit
        if result.worst is None or profit < worst_profit:
            result.worst, worst_profit = month, profit
    return result
