"""Tests for loading trades from JSON files."""

import json
import logging

import pytest

from journal_stats.core.errors import TradeDataError
from journal_stats.io.loader import load_trades, trades_from_records


class TestLoadTrades:
    """Reading JSON and JSON-lines trade files."""

    def test_json_array(self, tmp_path):
        path = tmp_path / "trades.json"
        path.write_text(json.dumps([
            {"id": "1", "trade_date": "2024-01-02", "trade_outcome": "Win", "calculated_profit": "50"},
            {"id": "2", "trade_date": "2024-01-03", "trade_outcome": "Lose", "executed": "false"},
        ]))
        trades = load_trades(path)
        assert [t.id for t in trades] == ["1", "2"]
        assert trades[0].profit == 50.0
        assert trades[1].executed is False

    def test_json_lines(self, tmp_path):
        path = tmp_path / "trades.jsonl"
        path.write_text('{"id": "a"}\n\n{"id": "b"}\n')
        assert [t.id for t in load_trades(path)] == ["a", "b"]

    def test_json_lines_without_suffix(self, tmp_path):
        path = tmp_path / "trades.txt"
        path.write_text('{"id": "a"}\n{"id": "b"}\n')
        assert len(load_trades(path)) == 2

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("   ")
        assert load_trades(path) == []

    def test_non_object_rows_skipped(self, tmp_path, caplog):
        path = tmp_path / "trades.json"
        path.write_text(json.dumps([{"id": "ok"}, 42, "text"]))
        with caplog.at_level(logging.WARNING, logger="journal_stats.io.loader"):
            trades = load_trades(path)
        assert [t.id for t in trades] == ["ok"]
        assert "Skipping trade row 1" in caplog.text

    def test_missing_file(self, tmp_path):
        with pytest.raises(TradeDataError, match="Cannot read"):
            load_trades(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[{]")
        with pytest.raises(TradeDataError, match="invalid JSON"):
            load_trades(path)

    def test_top_level_must_be_list(self, tmp_path):
        path = tmp_path / "obj.json"
        path.write_text('{"id": "solo"}')
        with pytest.raises(TradeDataError, match="expected a list"):
            load_trades(path)


class TestTradesFromRecords:
    """Validating raw records into trades."""

    def test_malformed_fields_degrade(self):
        trades = trades_from_records([{"calculated_profit": "oops", "trade_date": "later"}])
        assert trades[0].profit == 0.0
        assert trades[0].trade_date is None

    def test_oversized_number_does_not_abort_load(self):
        records = json.loads(
            '[{"id": "big", "trade_outcome": "Win", "calculated_profit": 1' + "0" * 400 + "},"
            ' {"id": "ok", "trade_outcome": "Lose", "calculated_profit": -20}]'
        )
        trades = trades_from_records(records)
        assert [t.id for t in trades] == ["big", "ok"]
        assert trades[0].calculated_profit is None
        assert trades[1].profit == -20.0

    def test_oversized_number_in_file(self, tmp_path):
        path = tmp_path / "trades.json"
        path.write_text('[{"id": "big", "news_intensity": 1' + "0" * 400 + "}]")
        trades = load_trades(path)
        assert trades[0].news_intensity is None
