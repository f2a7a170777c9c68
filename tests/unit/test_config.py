"""Test Settings loading and validation."""

from pathlib import Path

import pytest

from journal_stats.core.config import AnalyticsConfig, Settings, load_settings
from journal_stats.core.enums import TotalMode
from journal_stats.core.errors import ConfigError


class TestSettingsDefaults:
    """Default configuration values."""

    def test_default_settings(self):
        settings = Settings()
        assert settings.default_account_balance == 0.0
        assert settings.observability.log_format == "json"

    def test_analytics_defaults(self):
        cfg = AnalyticsConfig()
        assert cfg.risk_levels == [0.25, 0.3, 0.35, 0.5, 0.7, 1.0]
        assert cfg.grade_order == ["A+", "A", "B", "C"]
        assert len(cfg.time_intervals) == 6
        assert cfg.time_intervals[0].start == "00:00"
        assert cfg.time_intervals[-1].end == "23:59"
        assert cfg.drawdown_epsilon == 0.0001
        assert cfg.total_mode == TotalMode.ALL_TRADES

    def test_unsorted_levels_rejected(self):
        with pytest.raises(ValueError):
            AnalyticsConfig(risk_levels=[1.0, 0.5])

    def test_negative_epsilon_rejected(self):
        with pytest.raises(ValueError):
            AnalyticsConfig(drawdown_epsilon=-1)


class TestLoadSettings:
    """Settings from TOML files, overrides and environment."""

    def test_missing_file_uses_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "absent.toml")
        assert settings.analytics.grade_order == ["A+", "A", "B", "C"]

    def test_toml_file(self, tmp_path):
        path = tmp_path / "stats.toml"
        path.write_text(
            "default_account_balance = 2500.0\n"
            "[analytics]\n"
            "exclude_break_even_from_streaks = true\n"
            "total_mode = \"executed_only\"\n"
        )
        settings = load_settings(path)
        assert settings.default_account_balance == 2500.0
        assert settings.analytics.exclude_break_even_from_streaks is True
        assert settings.analytics.total_mode == TotalMode.EXECUTED_ONLY

    def test_overrides_win_over_file(self, tmp_path):
        path = tmp_path / "stats.toml"
        path.write_text("default_account_balance = 2500.0\n")
        settings = load_settings(path, overrides={"default_account_balance": 10.0})
        assert settings.default_account_balance == 10.0

    def test_invalid_toml_raises_config_error(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("this is = = not toml")
        with pytest.raises(ConfigError, match="Cannot parse"):
            load_settings(path)

    def test_invalid_value_raises_config_error(self):
        with pytest.raises(ConfigError):
            load_settings(overrides={"analytics": {"risk_levels": [2, 1]}})

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("JOURNAL_STATS_DEFAULT_ACCOUNT_BALANCE", "777")
        monkeypatch.setenv("JOURNAL_STATS_OBSERVABILITY__LOG_LEVEL", "DEBUG")
        settings = load_settings()
        assert settings.default_account_balance == 777.0
        assert settings.observability.log_level == "DEBUG"

    def test_shipped_example_config(self):
        path = Path(__file__).parents[2] / "configs" / "journal_stats.toml"
        settings = load_settings(path)
        assert settings.default_account_balance == 10000.0
        assert settings.observability.log_format == "console"
