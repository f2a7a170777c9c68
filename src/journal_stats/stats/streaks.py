"""Win/loss streaks over the chronological trade sequence."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from journal_stats.core.models import Trade, chronological

from .outcome import Outcome, classify


@dataclass
class StreakStats:
    current_streak: int = 0  # Signed: + winning run, - losing run
    max_winning_streak: int = 0
    max_losing_streak: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "currentStreak": self.current_streak,
            "maxWinningStreak": self.max_winning_streak,
            "maxLosingStreak": self.max_losing_streak,
        }


def streaks(
    trades: list[Trade],
    *,
    exclude_break_even: bool = False,
    include_non_executed: bool = False,
) -> StreakStats:
    """Walk trades by date and measure consecutive same-sign outcomes.

    Unscored and non-executed trades are skipped: they neither extend
    nor break a run.  With ``exclude_break_even`` the break-even trades
    are skipped too; otherwise a BE win extends a winning run and a BE
    loss a losing run.
    """
    stats = StreakStats()
    run = 0
    for trade in chronological(trades):
        outcome = classify(trade, include_non_executed=include_non_executed)
        if not outcome.is_scored:
            continue
        if exclude_break_even and outcome.is_break_even:
            continue

        if outcome.sign > 0:
            run = run + 1 if run > 0 else 1
            stats.max_winning_streak = max(stats.max_winning_streak, run)
        else:
            run = run - 1 if run < 0 else -1
            stats.max_losing_streak = max(stats.max_losing_streak, -run)

    stats.current_streak = run
    return stats


def last_scored_outcome(
    trades: list[Trade],
    *,
    exclude_break_even: bool = False,
    include_non_executed: bool = False,
) -> Outcome | None:
    """Outcome of the most recent trade that counts toward streaks."""
    for trade in reversed(chronological(trades)):
        outcome = classify(trade, include_non_executed=include_non_executed)
        if not outcome.is_scored:
            continue
        if exclude_break_even and outcome.is_break_even:
            continue
        return outcome
    return None
