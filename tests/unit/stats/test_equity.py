"""Tests for the equity replay and drawdown."""

from datetime import date

import pytest

from journal_stats.stats.equity import (
    DrawdownStats,
    drawdown,
    drawdown_from_current_balance,
    equity_curve,
    starting_balance,
    total_profit,
)

from tests.factories import make_loss, make_series, make_win


class TestEquityCurve:
    """Balance replay point by point."""

    def test_points(self, three_trades):
        points = equity_curve(three_trades, 1000.0)
        assert [p.balance_after for p in points] == [1100.0, 1050.0, 1080.0]
        assert [p.peak_at_point for p in points] == [1100.0, 1100.0, 1100.0]
        assert points[0].balance_before == 1000.0
        assert points[0].drawdown_pct == 0.0
        assert points[1].drawdown_pct == pytest.approx(50 / 1100 * 100)

    def test_chronological_replay(self, three_trades):
        shuffled = [three_trades[2], three_trades[0], three_trades[1]]
        assert equity_curve(shuffled, 1000.0) == equity_curve(three_trades, 1000.0)

    def test_non_executed_left_out(self):
        trades = [make_win(100.0), make_loss(-500.0, executed=False)]
        assert len(equity_curve(trades, 1000.0)) == 1
        assert len(equity_curve(trades, 1000.0, include_non_executed=True)) == 2

    def test_missing_profit_is_zero(self):
        trades = make_series([("Win", None)])
        assert equity_curve(trades, 500.0)[0].balance_after == 500.0

    def test_to_dict(self, three_trades):
        d = equity_curve(three_trades, 1000.0)[0].to_dict()
        assert set(d) == {"balanceBefore", "balanceAfter", "peakAtPoint", "drawdownPct"}


class TestDrawdown:
    """Maximum and average drawdown over the replay."""

    def test_three_trade_scenario(self, three_trades):
        stats = drawdown(three_trades, 1000.0)
        assert stats.max_drawdown_pct == pytest.approx(4.5454545, rel=1e-6)
        # 1050 and 1080 both sit below the 1100 peak
        expected_avg = (50 / 1100 * 100 + 20 / 1100 * 100) / 2
        assert stats.average_drawdown_pct == pytest.approx(expected_avg)

    def test_single_sample(self):
        trades = make_series([("Win", 100.0), ("Lose", -50.0)])
        stats = drawdown(trades, 1000.0)
        assert stats.max_drawdown_pct == pytest.approx(50 / 1100 * 100)
        assert stats.average_drawdown_pct == stats.max_drawdown_pct

    def test_only_gains(self):
        trades = make_series([("Win", 10.0), ("Win", 20.0)])
        assert drawdown(trades, 100.0) == DrawdownStats(0.0, 0.0, 100.0)

    def test_empty(self):
        stats = drawdown([], 1000.0)
        assert stats.max_drawdown_pct == 0.0
        assert stats.average_drawdown_pct == 0.0

    def test_zero_starting_balance_waits_for_a_peak(self):
        trades = make_series([("Lose", -10.0), ("Win", 100.0), ("Lose", -50.0)])
        stats = drawdown(trades, 0.0)
        # -10 leaves the peak at 0; +100 sets a peak of 90; -50 is 55.55% off
        assert stats.max_drawdown_pct == pytest.approx(50 / 90 * 100)

    def test_epsilon_filters_noise(self):
        trades = make_series([("Win", 1000.0), ("Lose", -0.0000001), ("Lose", -100.0)])
        stats = drawdown(trades, 1000.0, epsilon=0.0001)
        assert stats.average_drawdown_pct == pytest.approx(stats.max_drawdown_pct, rel=1e-6)

    def test_max_at_least_average(self):
        trades = make_series([
            ("Win", 200.0), ("Lose", -300.0), ("Win", 50.0), ("Lose", -20.0), ("Win", 400.0),
        ])
        stats = drawdown(trades, 1000.0)
        assert stats.max_drawdown_pct >= stats.average_drawdown_pct >= 0


class TestStartingBalance:
    """Starting balance backed out of the current balance."""

    def test_backs_out_period_profit(self, three_trades):
        assert total_profit(three_trades) == 80.0
        assert starting_balance(1080.0, three_trades) == 1000.0

    def test_never_negative(self):
        assert starting_balance(50.0, [make_win(100.0)]) == 0.0

    def test_none_balance_is_zero(self):
        assert starting_balance(None, [make_loss(-20.0)]) == 20.0

    def test_non_executed_ignored(self):
        trades = [make_win(100.0), make_win(900.0, executed=False)]
        assert starting_balance(1100.0, trades) == 1000.0
        assert starting_balance(1100.0, trades, include_non_executed=True) == 100.0

    def test_drawdown_from_current_balance(self, three_trades):
        stats = drawdown_from_current_balance(three_trades, 1080.0)
        assert stats.starting_balance == 1000.0
        assert stats == drawdown(three_trades, 1000.0)

    def test_same_trades_same_drawdown(self):
        jan = make_series([("Win", 100.0), ("Lose", -60.0)], start=date(2024, 1, 10))
        assert drawdown_from_current_balance(jan, 5040.0) == drawdown_from_current_balance(
            list(reversed(jan)), 5040.0
        )
