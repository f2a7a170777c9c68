"""Trading overview card: headline counts, profit and trade cadence."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from journal_stats.core.models import Trade, chronological

from .outcome import Outcome, classify, population


@dataclass
class TradingOverview:
    total_trades: int = 0
    wins: int = 0
    losses: int = 0
    be_wins: int = 0
    be_losses: int = 0
    non_executed: int = 0
    total_profit: float = 0.0
    average_profit: float = 0.0
    average_pnl_percentage: float = 0.0
    average_days_between_trades: float = 0.0

    @property
    def total_wins(self) -> int:
        return self.wins + self.be_wins

    @property
    def total_losses(self) -> int:
        return self.losses + self.be_losses

    @property
    def win_rate(self) -> float:
        decided = self.wins + self.losses
        return self.wins / decided * 100 if decided else 0.0

    @property
    def win_rate_with_be(self) -> float:
        decided = self.total_wins + self.total_losses
        return self.total_wins / decided * 100 if decided else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalTrades": self.total_trades,
            "totalWins": self.total_wins,
            "totalLosses": self.total_losses,
            "wins": self.wins,
            "losses": self.losses,
            "beWins": self.be_wins,
            "beLosses": self.be_losses,
            "nonExecutedTrades": self.non_executed,
            "totalProfit": self.total_profit,
            "averageProfit": self.average_profit,
            "averagePnLPercentage": self.average_pnl_percentage,
            "winRate": self.win_rate,
            "winRateWithBE": self.win_rate_with_be,
            "averageDaysBetweenTrades": self.average_days_between_trades,
        }


def average_days_between_trades(trades: list[Trade]) -> float:
    """Mean gap in days between consecutive dated trades."""
    days = [t.trade_date for t in chronological(trades) if t.trade_date is not None]
    if len(days) < 2:
        return 0.0
    gaps = [(b - a).days for a, b in zip(days, days[1:])]
    return sum(gaps) / len(gaps)


def trading_overview(
    trades: list[Trade],
    account_balance: float | None = None,
    *,
    include_non_executed: bool = False,
) -> TradingOverview:
    """Headline figures for a view.

    ``total_trades`` counts every trade in the view; profit and the
    win/loss counts come from the scoring population only.
    """
    overview = TradingOverview(total_trades=len(trades))
    for trade in trades:
        outcome = classify(trade, include_non_executed=include_non_executed)
        if not trade.executed:
            overview.non_executed += 1
        if outcome == Outcome.WIN:
            overview.wins += 1
        elif outcome == Outcome.LOSE:
            overview.losses += 1
        elif outcome == Outcome.BE_WIN:
            overview.be_wins += 1
        elif outcome == Outcome.BE_LOSE:
            overview.be_losses += 1

    scoring = population(trades, include_non_executed)
    overview.total_profit = sum(t.profit for t in scoring)
    if scoring:
        overview.average_profit = overview.total_profit / len(scoring)
    if account_balance:
        overview.average_pnl_percentage = overview.total_profit / account_balance * 100
    overview.average_days_between_trades = average_days_between_trades(scoring)
    return overview
