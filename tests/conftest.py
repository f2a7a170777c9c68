"""Shared fixtures for the journal-stats test suite."""

from __future__ import annotations

import logging
from datetime import date

import pytest
import structlog

from journal_stats.core.config import AnalyticsConfig
from journal_stats.core.models import Trade
from journal_stats.observability.logger import HANDLER_NAME

from tests.factories import make_be, make_loss, make_trade, make_win


# ---------------------------------------------------------------------------
# Trade lists
# ---------------------------------------------------------------------------

@pytest.fixture
def three_trades() -> list[Trade]:
    """+100 win, -50 loss, +30 BE win on consecutive days."""
    return [
        make_win(100.0, day=date(2024, 1, 2), id="a"),
        make_loss(-50.0, day=date(2024, 1, 3), id="b"),
        make_be("Win", 30.0, day=date(2024, 1, 4), id="c"),
    ]


@pytest.fixture
def mixed_year() -> list[Trade]:
    """A 2024 journal across markets, months and execution states."""
    return [
        make_win(200.0, day=date(2024, 1, 5), market="EURUSD", trade_time="09:15",
                 risk_per_trade=0.5, risk_reward_ratio=2.0, evaluation="A"),
        make_loss(-100.0, day=date(2024, 1, 12), market="EURUSD", trade_time="14:30",
                  risk_per_trade=0.5, evaluation="B"),
        make_win(150.0, day=date(2024, 2, 2), market="GBPUSD", trade_time="10:00",
                 risk_per_trade=1.0, risk_reward_ratio=3.0, partials_taken=True),
        make_be("Lose", -5.0, day=date(2024, 2, 9), market="GBPUSD", reentry=True),
        make_loss(-120.0, day=date(2024, 3, 1), market="XAUUSD", trade_time="21:45",
                  risk_per_trade=0.7),
        make_trade("Win", 400.0, day=date(2024, 3, 8), market="XAUUSD", executed=False),
        make_trade(None, 0.0, day=date(2024, 3, 15), market="EURUSD"),
    ]


@pytest.fixture
def config() -> AnalyticsConfig:
    return AnalyticsConfig()


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

@pytest.fixture
def restore_logging():
    """Undo ``setup_logging``: drop its root handler and reset structlog."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler.get_name() == HANDLER_NAME:
            root.removeHandler(handler)
    root.setLevel(level)
    structlog.reset_defaults()
