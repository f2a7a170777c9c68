"""Stats export: JSON documents and CSV tables.

Serializes computed dashboard figures for external analysis and
archival.  Infinite ratios (a profit factor with no losing trades)
are written as ``null`` in JSON and left blank in CSV.

Usage::

    exporter = StatsExporter()
    json_str = exporter.to_json(dashboard)
    csv_str = exporter.buckets_to_csv(dashboard.market, label="market")
"""

from __future__ import annotations

import csv
import io
import json
import math
from typing import Any

from journal_stats.stats.categories import StatBucket
from journal_stats.stats.monthly import MONTHS, MonthlyProfit, MonthlyStats

_BUCKET_COLUMNS = [
    "total",
    "wins",
    "losses",
    "beWins",
    "beLosses",
    "breakEven",
    "winRate",
    "winRateWithBE",
]

_MONTH_COLUMNS = [
    "month",
    "wins",
    "losses",
    "beWins",
    "beLosses",
    "winRate",
    "winRateWithBE",
    "profit",
]


def _finite(value: Any) -> Any:
    """Replace non-finite floats with ``None`` throughout a structure."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _finite(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_finite(v) for v in value]
    return value


class StatsExporter:
    """Export stats objects to JSON and CSV.

    Parameters
    ----------
    decimal_places : int
        Rounding precision for floats in CSV output.  Default 4.
    """

    def __init__(self, *, decimal_places: int = 4) -> None:
        self._dp = decimal_places

    # ------------------------------------------------------------------ #
    # JSON Export                                                          #
    # ------------------------------------------------------------------ #

    def to_json(self, stats: Any, *, indent: int = 2) -> str:
        """Serialize any object with ``to_dict()`` (or a plain dict).

        Parameters
        ----------
        stats : Any
            ``DashboardStats`` or any other stats value object.
        indent : int
            JSON indentation level.
        """
        data = stats.to_dict() if hasattr(stats, "to_dict") else stats
        return json.dumps(_finite(data), indent=indent, default=str, allow_nan=False)

    # ------------------------------------------------------------------ #
    # CSV Export                                                           #
    # ------------------------------------------------------------------ #

    def buckets_to_csv(
        self,
        buckets: dict[str, StatBucket] | list[tuple[str, StatBucket]],
        *,
        label: str = "category",
    ) -> str:
        """One CSV row per bucket, headed by a ``label`` column."""
        items = buckets.items() if isinstance(buckets, dict) else buckets
        cols = [label, *_BUCKET_COLUMNS]
        buf = io.StringIO()
        writer = csv.DictWriter(buf, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        for name, bucket in items:
            row = self._round(bucket.to_dict())
            row[label] = name
            writer.writerow({c: row.get(c, "") for c in cols})
        return buf.getvalue()

    def monthly_to_csv(
        self,
        stats_by_month: dict[str, MonthlyStats],
        profit_by_month: dict[str, MonthlyProfit] | None = None,
    ) -> str:
        """Monthly table in calendar order; months without trades are skipped."""
        profit_by_month = profit_by_month or {}
        buf = io.StringIO()
        writer = csv.DictWriter(buf, fieldnames=_MONTH_COLUMNS, extrasaction="ignore")
        writer.writeheader()
        for month in MONTHS:
            if month not in stats_by_month and month not in profit_by_month:
                continue
            row: dict[str, Any] = {"month": month}
            row.update(stats_by_month.get(month, MonthlyStats()).to_dict())
            row.update(profit_by_month.get(month, MonthlyProfit()).to_dict())
            writer.writerow(self._round(row))
        return buf.getvalue()

    # ------------------------------------------------------------------ #
    # Private helpers                                                      #
    # ------------------------------------------------------------------ #

    def _round(self, row: dict[str, Any]) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for key, value in row.items():
            if isinstance(value, float):
                out[key] = round(value, self._dp) if math.isfinite(value) else ""
            else:
                out[key] = value
        return out


_default = StatsExporter()


def stats_to_json(stats: Any, *, indent: int = 2) -> str:
    return _default.to_json(stats, indent=indent)


def buckets_to_csv(
    buckets: dict[str, StatBucket] | list[tuple[str, StatBucket]],
    *,
    label: str = "category",
) -> str:
    return _default.buckets_to_csv(buckets, label=label)
