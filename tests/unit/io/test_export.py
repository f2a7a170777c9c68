"""Tests for StatsExporter: JSON and CSV output."""

import csv
import io
import json

import pytest

from journal_stats.io.export import StatsExporter, buckets_to_csv, stats_to_json
from journal_stats.stats.categories import StatBucket
from journal_stats.stats.macro import MacroStats
from journal_stats.stats.monthly import MonthlyProfit, MonthlyStats
from journal_stats.stats.reconciler import FilteredViewReconciler


@pytest.fixture
def exporter():
    return StatsExporter(decimal_places=2)


class TestJsonExport:
    """Dashboard serialization to JSON."""

    def test_dashboard(self, three_trades):
        stats = FilteredViewReconciler().compute(three_trades, account_balance=1080.0)
        data = json.loads(stats_to_json(stats))
        assert data["tradeCount"] == 3
        assert data["overview"]["winRate"] == 50.0

    def test_infinity_becomes_null(self):
        data = json.loads(stats_to_json(MacroStats(profit_factor=float("inf"))))
        assert data["profitFactor"] is None

    def test_plain_dict(self, exporter):
        assert json.loads(exporter.to_json({"x": float("nan")})) == {"x": None}


class TestCsvExport:
    """Bucket and monthly tables as CSV."""

    def test_buckets(self, exporter):
        buckets = {
            "EURUSD": StatBucket(wins=2, losses=1, total=3),
            "GBPUSD": StatBucket(losses=1, total=1),
        }
        rows = list(csv.DictReader(io.StringIO(exporter.buckets_to_csv(buckets, label="market"))))
        assert [r["market"] for r in rows] == ["EURUSD", "GBPUSD"]
        assert rows[0]["winRate"] == "66.67"
        assert rows[1]["total"] == "1"

    def test_bucket_list(self):
        text = buckets_to_csv([("A+", StatBucket(wins=1, total=1))], label="grade")
        assert text.splitlines()[0].startswith("grade,total,wins")

    def test_monthly(self, exporter):
        stats = {"March": MonthlyStats(wins=1), "January": MonthlyStats(losses=2)}
        profits = {"January": MonthlyProfit(-20.0), "March": MonthlyProfit(12.345)}
        rows = list(csv.DictReader(io.StringIO(exporter.monthly_to_csv(stats, profits))))
        assert [r["month"] for r in rows] == ["January", "March"]
        assert rows[1]["profit"] == "12.35"
