"""Outcome classification: the leaf every statistic builds on.

A trade's win/lose result and its break-even flag are orthogonal, and
non-executed (planned but skipped) trades sit outside the scoring
population unless the caller opts them in.
"""

from __future__ import annotations

import enum

from journal_stats.core.enums import TradeResult
from journal_stats.core.models import Trade


class Outcome(str, enum.Enum):
    """Scoring class of a single trade."""

    WIN = "win"
    LOSE = "lose"
    BE_WIN = "beWin"
    BE_LOSE = "beLose"
    NON_EXECUTED = "nonExecuted"
    UNSCORED = "unscored"      # Executed, but no Win/Lose recorded

    @property
    def is_scored(self) -> bool:
        return self in _SCORED

    @property
    def is_win(self) -> bool:
        return self in (Outcome.WIN, Outcome.BE_WIN)

    @property
    def is_loss(self) -> bool:
        return self in (Outcome.LOSE, Outcome.BE_LOSE)

    @property
    def is_break_even(self) -> bool:
        return self in (Outcome.BE_WIN, Outcome.BE_LOSE)

    @property
    def sign(self) -> int:
        """+1 for wins, -1 for losses, 0 otherwise."""
        if self.is_win:
            return 1
        if self.is_loss:
            return -1
        return 0


_SCORED = frozenset({Outcome.WIN, Outcome.LOSE, Outcome.BE_WIN, Outcome.BE_LOSE})


def is_in_population(trade: Trade, include_non_executed: bool = False) -> bool:
    """Whether the trade may contribute to profit, drawdown and rates."""
    return trade.executed or include_non_executed


def classify(trade: Trade, *, include_non_executed: bool = False) -> Outcome:
    """Map a trade's flags onto its scoring class."""
    if not is_in_population(trade, include_non_executed):
        return Outcome.NON_EXECUTED

    result = trade.result
    if trade.break_even:
        if result == TradeResult.WIN:
            return Outcome.BE_WIN
        if result == TradeResult.LOSE:
            return Outcome.BE_LOSE
        return Outcome.UNSCORED

    if result == TradeResult.WIN:
        return Outcome.WIN
    if result == TradeResult.LOSE:
        return Outcome.LOSE
    return Outcome.UNSCORED


def population(trades: list[Trade], include_non_executed: bool = False) -> list[Trade]:
    """The trades allowed into profit/drawdown math, in input order."""
    return [t for t in trades if is_in_population(t, include_non_executed)]


def scored_profit(trade: Trade, include_non_executed: bool = False) -> float:
    """Profit contribution; zero outside the scoring population."""
    if not is_in_population(trade, include_non_executed):
        return 0.0
    return trade.profit
