"""Stats for trade-type subsets: partials, re-entries, break-evens and
launch-hour trades.

Each subset is selected by its own flag and folded into an independent
:class:`StatBucket`, so a BE re-entry with partials shows up in each of
its subsets.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from journal_stats.core.enums import TradeResult
from journal_stats.core.models import Trade

from .categories import BucketPolicy, StatBucket, bucket_of
from .outcome import is_in_population


def partials_stats(trades: list[Trade], policy: BucketPolicy | None = None) -> StatBucket:
    return bucket_of((t for t in trades if t.partials_taken), policy)


def reentry_stats(trades: list[Trade], policy: BucketPolicy | None = None) -> StatBucket:
    return bucket_of((t for t in trades if t.reentry), policy)


def break_even_stats(trades: list[Trade], policy: BucketPolicy | None = None) -> StatBucket:
    return bucket_of((t for t in trades if t.break_even), policy)


def launch_hour_stats(trades: list[Trade], policy: BucketPolicy | None = None) -> StatBucket:
    """Trades opened during the session's launch hour."""
    return bucket_of((t for t in trades if t.launch_hour), policy)


def local_hl_be_stats(trades: list[Trade], policy: BucketPolicy | None = None) -> StatBucket:
    """Break-even trades taken after a local high/low was liquidated.

    Only ``be_wins`` and ``be_losses`` can be non-zero.
    """
    return bucket_of((t for t in trades if t.local_high_low and t.break_even), policy)


@dataclass
class PartialTradesSummary:
    """Partial-profit card counts.

    A break-even partial with no final result is *neutral*: it counts
    toward the totals but toward neither win rate.
    """

    wins: int = 0
    losses: int = 0
    be_wins: int = 0
    be_losses: int = 0
    neutral_be: int = 0

    @property
    def win_rate(self) -> float:
        decided = self.wins + self.losses
        return self.wins / decided * 100 if decided else 0.0

    @property
    def win_rate_with_be(self) -> float:
        decided = self.wins + self.losses + self.be_wins + self.be_losses
        return (self.wins + self.be_wins) / decided * 100 if decided else 0.0

    @property
    def total(self) -> int:
        return self.wins + self.losses + self.be_wins + self.be_losses + self.neutral_be

    @property
    def total_be(self) -> int:
        return self.be_wins + self.be_losses + self.neutral_be

    def to_dict(self) -> dict[str, Any]:
        return {
            "partialWinningTrades": self.wins,
            "partialLosingTrades": self.losses,
            "beWinPartialTrades": self.be_wins,
            "beLosingPartialTrades": self.be_losses,
            "partialWinRate": self.win_rate,
            "partialWinRateWithBE": self.win_rate_with_be,
            "totalPartialTradesCount": self.total,
            "totalPartialsBECount": self.total_be,
        }


def partial_trades_summary(
    trades: list[Trade], *, include_non_executed: bool = False
) -> PartialTradesSummary:
    summary = PartialTradesSummary()
    for trade in trades:
        if not trade.partials_taken or not is_in_population(trade, include_non_executed):
            continue
        if trade.break_even:
            final = trade.be_final_result or trade.trade_outcome
            if final == TradeResult.WIN:
                summary.be_wins += 1
            elif final == TradeResult.LOSE:
                summary.be_losses += 1
            else:
                summary.neutral_be += 1
        elif trade.trade_outcome == TradeResult.WIN:
            summary.wins += 1
        elif trade.trade_outcome == TradeResult.LOSE:
            summary.losses += 1
    return summary
