"""Distributions of the trader's self-assessment at entry.

Confidence and state of mind are recorded on a 1-5 scale.  Trades
without a rating are left out of both the counts and the average.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from journal_stats.core.models import Trade

from .outcome import population

SCALE = (1, 2, 3, 4, 5)

CONFIDENCE_LABELS = {
    1: "Very low",
    2: "Low",
    3: "Neutral",
    4: "Good",
    5: "Very confident",
}

MIND_STATE_LABELS = {
    1: "Very poor",
    2: "Poor",
    3: "Neutral",
    4: "Good",
    5: "Very good",
}


@dataclass
class ScaleStats:
    counts: dict[int, int] = field(default_factory=lambda: {v: 0 for v in SCALE})
    total: int = 0
    average: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "counts": {str(v): n for v, n in self.counts.items()},
            "total": self.total,
            "average": self.average,
        }


def scale_stats(
    trades: list[Trade],
    rating_of: Callable[[Trade], int | None],
    *,
    include_non_executed: bool = False,
) -> ScaleStats:
    """Count ratings 1-5 and average the rated trades."""
    stats = ScaleStats()
    for trade in population(trades, include_non_executed):
        rating = rating_of(trade)
        if rating is None or rating not in stats.counts:
            continue
        stats.counts[rating] += 1
        stats.total += 1
    if stats.total:
        stats.average = sum(v * n for v, n in stats.counts.items()) / stats.total
    return stats


def confidence_stats(trades: list[Trade], *, include_non_executed: bool = False) -> ScaleStats:
    return scale_stats(
        trades, lambda t: t.confidence_at_entry, include_non_executed=include_non_executed
    )


def mind_state_stats(trades: list[Trade], *, include_non_executed: bool = False) -> ScaleStats:
    return scale_stats(
        trades, lambda t: t.mind_state_at_entry, include_non_executed=include_non_executed
    )
