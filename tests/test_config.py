"""Tests for configuration loading."""

from pathlib import Path

import pytest

from tradejournal.config import CONFIG_ENV_VAR, AppConfig, default_config_path, load_config
from tradejournal.errors import ConfigError


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.toml")

        assert config == AppConfig()
        assert config.journal.recent_count == 5
        assert config.journal.default_range == "all"
        assert config.journal.timezone is None
        assert config.colors.profit == "#22c55e"

    def test_reads_values(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            '[journal]\n'
            'trades_file = "~/journal/trades.json"\n'
            'timezone = "America/New_York"\n'
            'recent_count = 10\n'
            'default_range = "last_30_days"\n'
            '\n'
            '[colors]\n'
            'profit = "#00FF00"\n'
        )

        config = load_config(path)

        assert config.journal.trades_file == Path.home() / "journal" / "trades.json"
        assert config.journal.timezone == "America/New_York"
        assert config.journal.recent_count == 10
        assert config.journal.default_range == "last_30_days"
        assert config.colors.profit == "#00ff00"
        assert config.colors.loss == "#ef4444"

    @pytest.mark.parametrize(
        "content",
        [
            '[journal]\ntimezone = "Mars/Olympus"\n',
            '[journal]\nrecent_count = 0\n',
            '[journal]\ndefault_range = "forever"\n',
            '[colors]\nprofit = "green"\n',
            '[journal\n',
        ],
    )
    def test_invalid_config(self, tmp_path, content):
        path = tmp_path / "config.toml"
        path.write_text(content)

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        assert exc_info.value.code == "CONFIG_ERROR"
        assert not exc_info.value.recoverable


class TestDefaultPath:
    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "custom.toml"))

        assert default_config_path() == tmp_path / "custom.toml"

    def test_home_default(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)

        assert default_config_path() == Path.home() / ".config" / "tradejournal" / "config.toml"
