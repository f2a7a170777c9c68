"""Tests for confidence and state-of-mind distributions."""

import pytest

from journal_stats.stats.self_assessment import (
    CONFIDENCE_LABELS,
    MIND_STATE_LABELS,
    SCALE,
    confidence_stats,
    mind_state_stats,
)

from tests.factories import make_loss, make_win


class TestConfidenceStats:
    """Confidence ratings counted per level and averaged."""

    def test_counts_and_average(self):
        trades = [
            make_win(confidence_at_entry=5),
            make_win(confidence_at_entry=4),
            make_loss(confidence_at_entry=2),
            make_loss(confidence_at_entry=4),
            make_win(),
        ]
        stats = confidence_stats(trades)
        assert stats.counts == {1: 0, 2: 1, 3: 0, 4: 2, 5: 1}
        assert stats.total == 4
        assert stats.average == pytest.approx(3.75)

    def test_no_ratings(self):
        stats = confidence_stats([make_win(), make_loss()])
        assert stats.total == 0
        assert stats.average == 0.0
        assert set(stats.counts) == set(SCALE)

    def test_non_executed_need_opt_in(self):
        trades = [make_win(confidence_at_entry=1, executed=False)]
        assert confidence_stats(trades).total == 0
        assert confidence_stats(trades, include_non_executed=True).counts[1] == 1

    def test_to_dict(self):
        d = confidence_stats([make_win(confidence_at_entry=3)]).to_dict()
        assert d["counts"]["3"] == 1
        assert d["total"] == 1
        assert d["average"] == 3.0


class TestMindStateStats:
    """State-of-mind ratings are independent of confidence."""

    def test_reads_its_own_field(self):
        trades = [make_win(confidence_at_entry=5, mind_state_at_entry=2)]
        assert mind_state_stats(trades).counts[2] == 1
        assert mind_state_stats(trades).counts[5] == 0

    def test_labels_cover_the_scale(self):
        assert set(CONFIDENCE_LABELS) == set(SCALE)
        assert set(MIND_STATE_LABELS) == set(SCALE)
        assert MIND_STATE_LABELS[3] == "Neutral"
