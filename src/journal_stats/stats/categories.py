"""Category breakdowns: win/loss/break-even counts per categorical key.

Every dashboard card that splits performance by an attribute (market,
direction, setup, liquidity, news, weekday, time of day, grade, risk
level ...) goes through :func:`aggregate`.  A trade whose key is empty
lands in the ``"Unknown"`` bucket rather than being dropped, so bucket
totals always reconcile against the input list.

Usage::

    buckets = market_stats(trades)
    print(buckets["EURUSD"].win_rate)

    custom = aggregate(trades, lambda t: t.setup_type)
    for label, bucket in sort_buckets(custom):
        print(label, bucket.to_dict())
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from journal_stats.core.config import TimeInterval
from journal_stats.core.enums import TotalMode
from journal_stats.core.models import Trade

from .outcome import Outcome, classify, scored_profit

UNKNOWN = "Unknown"
LIQUIDATED = "liquidated"
NOT_LIQUIDATED = "notLiquidated"
NEWS = "News"
NO_NEWS = "No News"
NEWS_NO_EVENT_LABEL = "News (no event)"
NOT_EVALUATED = "Not Evaluated"
OTHER_RISK = "Other"
TREND_VALUES = ("Trend-following", "Counter-trend")

KeyFn = Callable[[Trade], Any]


def _pct(numerator: float, denominator: float) -> float:
    return numerator / denominator * 100 if denominator > 0 else 0.0


@dataclass
class StatBucket:
    """Outcome counts for one category value.

    ``wins``/``losses`` exclude break-even trades; ``be_wins`` and
    ``be_losses`` hold the break-even ones.  ``total`` counts routed
    trades according to the aggregation's :class:`TotalMode`.
    """

    wins: int = 0
    losses: int = 0
    be_wins: int = 0
    be_losses: int = 0
    total: int = 0

    def record(self, outcome: Outcome) -> None:
        if outcome == Outcome.WIN:
            self.wins += 1
        elif outcome == Outcome.LOSE:
            self.losses += 1
        elif outcome == Outcome.BE_WIN:
            self.be_wins += 1
        elif outcome == Outcome.BE_LOSE:
            self.be_losses += 1

    @property
    def break_even(self) -> int:
        return self.be_wins + self.be_losses

    @property
    def win_rate(self) -> float:
        """Win rate excluding break-even trades (0-100)."""
        return _pct(self.wins, self.wins + self.losses)

    @property
    def win_rate_with_be(self) -> float:
        """Win rate with break-even trades in numerator and denominator (0-100)."""
        return _pct(self.wins + self.be_wins, self.total)

    def to_dict(self) -> dict[str, Any]:
        return {
            "wins": self.wins,
            "losses": self.losses,
            "beWins": self.be_wins,
            "beLosses": self.be_losses,
            "breakEven": self.break_even,
            "total": self.total,
            "winRate": self.win_rate,
            "winRateWithBE": self.win_rate_with_be,
        }


@dataclass(frozen=True)
class BucketPolicy:
    """How non-executed trades are treated while bucketing."""

    total_mode: TotalMode = TotalMode.ALL_TRADES
    include_non_executed: bool = False


_DEFAULT_POLICY = BucketPolicy()


def _label(value: Any) -> str:
    if value is None:
        return UNKNOWN
    text = str(value).strip()
    return text or UNKNOWN


def bucket_of(trades: Iterable[Trade], policy: BucketPolicy | None = None) -> StatBucket:
    """Fold a pre-filtered trade list into a single bucket."""
    policy = policy or _DEFAULT_POLICY
    bucket = StatBucket()
    for trade in trades:
        outcome = classify(trade, include_non_executed=policy.include_non_executed)
        if policy.total_mode == TotalMode.ALL_TRADES or outcome != Outcome.NON_EXECUTED:
            bucket.total += 1
        bucket.record(outcome)
    return bucket


def aggregate(
    trades: Iterable[Trade],
    key_of: KeyFn,
    *,
    total_mode: TotalMode = TotalMode.ALL_TRADES,
    include_non_executed: bool = False,
) -> dict[str, StatBucket]:
    """Group trades by ``key_of`` and count outcomes per group.

    Returns a dict keyed by category label.  Buckets carry no ordering;
    use :func:`sort_buckets` for display order.
    """
    policy = BucketPolicy(total_mode=total_mode, include_non_executed=include_non_executed)
    groups: dict[str, list[Trade]] = defaultdict(list)
    for trade in trades:
        groups[_label(key_of(trade))].append(trade)
    return {label: bucket_of(group, policy) for label, group in groups.items()}


def _aggregate(trades: Iterable[Trade], key_of: KeyFn, policy: BucketPolicy | None) -> dict[str, StatBucket]:
    policy = policy or _DEFAULT_POLICY
    return aggregate(
        trades,
        key_of,
        total_mode=policy.total_mode,
        include_non_executed=policy.include_non_executed,
    )


def sort_buckets(
    buckets: dict[str, StatBucket], by: str = "total"
) -> list[tuple[str, StatBucket]]:
    """Order buckets by descending ``total`` (ties by label) or by label."""
    if by == "label":
        return sorted(buckets.items(), key=lambda kv: kv[0])
    if by == "total":
        return sorted(buckets.items(), key=lambda kv: (-kv[1].total, kv[0]))
    raise ValueError(f"Unknown sort key: {by!r}")


# ------------------------------------------------------------------ #
# Key functions                                                        #
# ------------------------------------------------------------------ #

def market_key(trade: Trade) -> str:
    return trade.market


def direction_key(trade: Trade) -> str:
    return trade.direction


def setup_key(trade: Trade) -> str | None:
    return trade.setup_type


def liquidity_key(trade: Trade) -> str | None:
    return trade.liquidity


def local_hl_key(trade: Trade) -> str:
    return LIQUIDATED if trade.local_high_low else NOT_LIQUIDATED


def mss_key(trade: Trade) -> str:
    return trade.mss or "Normal"


def news_key(trade: Trade) -> str:
    return NEWS if trade.news_related else NO_NEWS


def day_key(trade: Trade) -> str | None:
    if trade.day_of_week:
        return trade.day_of_week
    if trade.trade_date is not None:
        return trade.trade_date.strftime("%A")
    return None


def evaluation_key(trade: Trade) -> str:
    return trade.evaluation or NOT_EVALUATED


def trend_key(trade: Trade) -> str:
    trend = (trade.trend or "").strip()
    return trend if trend in TREND_VALUES else UNKNOWN


def _minutes(hhmm: str) -> int | None:
    parts = hhmm.strip().split(":")
    if len(parts) < 2:
        return None
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        return None
    return hours * 60 + minutes


def interval_key(intervals: list[TimeInterval]) -> KeyFn:
    """Key function placing ``trade_time`` into an inclusive interval."""
    bounds = [(iv.label, _minutes(iv.start), _minutes(iv.end)) for iv in intervals]

    def key(trade: Trade) -> str:
        if not trade.trade_time:
            return UNKNOWN
        minute = _minutes(trade.trade_time)
        if minute is None:
            return UNKNOWN
        for label, start, end in bounds:
            if start is not None and end is not None and start <= minute <= end:
                return label
        return UNKNOWN

    return key


def risk_label(level: float) -> str:
    return f"{level:g}%"


def risk_key(levels: list[float]) -> KeyFn:
    """Key function matching ``risk_per_trade`` to a configured level."""

    def key(trade: Trade) -> str:
        risk = trade.risk_per_trade
        if risk is None:
            return UNKNOWN
        for level in levels:
            if abs(risk - level) < 1e-9:
                return risk_label(level)
        return OTHER_RISK

    return key


def sl_size_labels(edges: list[float]) -> list[str]:
    labels = []
    lower = None
    for edge in edges:
        labels.append(f"<={edge:g}" if lower is None else f"{lower:g}-{edge:g}")
        lower = edge
    if lower is not None:
        labels.append(f">{lower:g}")
    return labels


def sl_size_key(edges: list[float]) -> KeyFn:
    """Key function bucketing ``sl_size`` by ascending upper edges."""
    labels = sl_size_labels(edges)

    def key(trade: Trade) -> str:
        size = trade.sl_size
        if size is None or size <= 0:
            return UNKNOWN
        for edge, label in zip(edges, labels):
            if size <= edge:
                return label
        return labels[-1] if labels else UNKNOWN

    return key


# ------------------------------------------------------------------ #
# Convenience wrappers                                                 #
# ------------------------------------------------------------------ #

def market_stats(trades: list[Trade], policy: BucketPolicy | None = None) -> dict[str, StatBucket]:
    return _aggregate(trades, market_key, policy)


def direction_stats(trades: list[Trade], policy: BucketPolicy | None = None) -> dict[str, StatBucket]:
    return _aggregate(trades, direction_key, policy)


def setup_stats(trades: list[Trade], policy: BucketPolicy | None = None) -> dict[str, StatBucket]:
    return _aggregate(trades, setup_key, policy)


def liquidity_stats(trades: list[Trade], policy: BucketPolicy | None = None) -> dict[str, StatBucket]:
    return _aggregate(trades, liquidity_key, policy)


def local_hl_stats(trades: list[Trade], policy: BucketPolicy | None = None) -> dict[str, StatBucket]:
    """Liquidated vs not-liquidated local high/low; both keys always present."""
    buckets = {LIQUIDATED: StatBucket(), NOT_LIQUIDATED: StatBucket()}
    buckets.update(_aggregate(trades, local_hl_key, policy))
    return buckets


def sl_size_stats(
    trades: list[Trade], edges: list[float], policy: BucketPolicy | None = None
) -> dict[str, StatBucket]:
    return _aggregate(trades, sl_size_key(edges), policy)


def mss_stats(trades: list[Trade], policy: BucketPolicy | None = None) -> dict[str, StatBucket]:
    return _aggregate(trades, mss_key, policy)


def news_stats(trades: list[Trade], policy: BucketPolicy | None = None) -> dict[str, StatBucket]:
    return _aggregate(trades, news_key, policy)


def day_stats(trades: list[Trade], policy: BucketPolicy | None = None) -> dict[str, StatBucket]:
    return _aggregate(trades, day_key, policy)


def interval_stats(
    trades: list[Trade], intervals: list[TimeInterval], policy: BucketPolicy | None = None
) -> dict[str, StatBucket]:
    """Time-of-day buckets; every configured interval is always present."""
    buckets = {iv.label: StatBucket() for iv in intervals}
    buckets.update(_aggregate(trades, interval_key(intervals), policy))
    return buckets


def trend_stats(trades: list[Trade], policy: BucketPolicy | None = None) -> dict[str, StatBucket]:
    return _aggregate(trades, trend_key, policy)


def risk_stats(
    trades: list[Trade], levels: list[float], policy: BucketPolicy | None = None
) -> dict[str, StatBucket]:
    """Risk-percent buckets; every configured level is always present."""
    buckets = {risk_label(level): StatBucket() for level in levels}
    buckets.update(_aggregate(trades, risk_key(levels), policy))
    return buckets


def evaluation_stats(
    trades: list[Trade],
    grade_order: list[str],
    policy: BucketPolicy | None = None,
) -> list[tuple[str, StatBucket]]:
    """Buckets for the graded trades, in ``grade_order``.

    Grades that never occur are omitted, as are ungraded trades.
    """
    buckets = _aggregate(trades, evaluation_key, policy)
    return [(grade, buckets[grade]) for grade in grade_order if grade in buckets]


# ------------------------------------------------------------------ #
# Category views carrying extra figures                                #
# ------------------------------------------------------------------ #

@dataclass
class MarketProfit:
    """Market bucket plus net profit and its share of the balance."""

    bucket: StatBucket
    profit: float = 0.0
    pnl_percentage: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        d = self.bucket.to_dict()
        d["profit"] = self.profit
        d["pnlPercentage"] = self.pnl_percentage
        return d


def market_profit_stats(
    trades: list[Trade],
    account_balance: float,
    policy: BucketPolicy | None = None,
) -> dict[str, MarketProfit]:
    policy = policy or _DEFAULT_POLICY
    buckets = _aggregate(trades, market_key, policy)
    profits: dict[str, float] = defaultdict(float)
    for trade in trades:
        profits[_label(market_key(trade))] += scored_profit(trade, policy.include_non_executed)
    return {
        market: MarketProfit(
            bucket=bucket,
            profit=profits[market],
            pnl_percentage=_pct(profits[market], account_balance),
        )
        for market, bucket in buckets.items()
    }


def average_sl_size_by_market(trades: list[Trade]) -> dict[str, float]:
    """Mean recorded stop-loss size per market, largest first.

    Markets without a positive average are left out.
    """
    sizes: dict[str, list[float]] = defaultdict(list)
    for trade in trades:
        if trade.sl_size is not None:
            sizes[_label(trade.market)].append(trade.sl_size)
    averages = {m: sum(v) / len(v) for m, v in sizes.items() if v}
    return dict(
        sorted(
            ((m, avg) for m, avg in averages.items() if avg > 0),
            key=lambda kv: -kv[1],
        )
    )


def rr_hit_stats(
    trades: list[Trade], *, include_non_executed: bool = False
) -> dict[str, int]:
    """Losing trades per market that had reached 1.4R, most first.

    Break-even losses count too; markets without such a loss are absent.
    """
    counts: dict[str, int] = defaultdict(int)
    for trade in trades:
        if not trade.rr_hit_1_4:
            continue
        if classify(trade, include_non_executed=include_non_executed).is_loss:
            counts[_label(trade.market)] += 1
    return dict(sorted(counts.items(), key=lambda kv: (-kv[1], kv[0])))


@dataclass
class NewsEventStats:
    bucket: StatBucket
    average_intensity: float | None = None

    def to_dict(self) -> dict[str, Any]:
        d = self.bucket.to_dict()
        d["averageIntensity"] = self.average_intensity
        return d


def news_name_stats(
    trades: list[Trade],
    *,
    include_unnamed: bool = False,
    policy: BucketPolicy | None = None,
) -> dict[str, NewsEventStats]:
    """Stats per named news event, with average intensity (1-3).

    When ``include_unnamed`` is set, news trades without an event name
    are collected under :data:`NEWS_NO_EVENT_LABEL`.
    """
    groups: dict[str, list[Trade]] = defaultdict(list)
    for trade in trades:
        if not trade.news_related:
            continue
        if trade.news_name:
            groups[trade.news_name].append(trade)
        elif include_unnamed:
            groups[NEWS_NO_EVENT_LABEL].append(trade)

    result: dict[str, NewsEventStats] = {}
    for name, group in groups.items():
        intensities = [t.news_intensity for t in group if t.news_intensity is not None]
        average = None
        if intensities and name != NEWS_NO_EVENT_LABEL:
            average = round(sum(intensities) / len(intensities), 1)
        result[name] = NewsEventStats(bucket=bucket_of(group, policy), average_intensity=average)
    return result
