"""Tests for the streak walk."""

from journal_stats.stats.outcome import Outcome
from journal_stats.stats.streaks import StreakStats, last_scored_outcome, streaks

from tests.factories import make_series


class TestStreaks:
    """Current and longest winning and losing runs."""

    def test_empty(self):
        assert streaks([]) == StreakStats()

    def test_runs(self):
        trades = make_series([
            ("Win", 10), ("Win", 10), ("Lose", -5), ("Lose", -5), ("Lose", -5), ("Win", 10),
        ])
        stats = streaks(trades)
        assert stats.current_streak == 1
        assert stats.max_winning_streak == 2
        assert stats.max_losing_streak == 3

    def test_current_losing_streak_is_negative(self):
        stats = streaks(make_series([("Win", 10), ("Lose", -5), ("Lose", -5)]))
        assert stats.current_streak == -2

    def test_unscored_trades_do_not_break_runs(self):
        stats = streaks(make_series([("Win", 10), (None, 0), ("Win", 10)]))
        assert stats.current_streak == 2

    def test_input_order_does_not_matter(self):
        trades = make_series([("Lose", -5), ("Win", 10), ("Win", 10)])
        assert streaks(list(reversed(trades))) == streaks(trades)

    def test_break_even_extends_by_result(self):
        trades = make_series([("Win", 10), ("BE-Lose", -1)])
        assert streaks(trades).current_streak == -1
        assert streaks(trades, exclude_break_even=True).current_streak == 1

    def test_non_executed_skipped_unless_opted_in(self):
        trades = make_series([("Win", 10), ("Lose", -5), ("Win", 10)])
        trades[1] = trades[1].model_copy(update={"executed": False})
        assert streaks(trades).current_streak == 2
        opted_in = streaks(trades, include_non_executed=True)
        assert opted_in.current_streak == 1
        assert opted_in.max_losing_streak == 1

    def test_to_dict(self):
        d = streaks(make_series([("Win", 1)])).to_dict()
        assert d == {"currentStreak": 1, "maxWinningStreak": 1, "maxLosingStreak": 0}


class TestLastScoredOutcome:
    """The most recent scored outcome in date order."""

    def test_latest_by_date(self):
        trades = make_series([("Lose", -5), ("BE-Win", 1), (None, 0)])
        assert last_scored_outcome(trades) == Outcome.BE_WIN
        assert last_scored_outcome(trades, exclude_break_even=True) == Outcome.LOSE

    def test_none_when_nothing_scored(self):
        assert last_scored_outcome(make_series([(None, 0)])) is None
