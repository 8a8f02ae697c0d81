from pathlib import Path

import tomli_w

import config as config_module
from config import Config, load_config


class TestConfig:
    """Tests for configuration loading."""

    def test_db_path(self, test_config):
        assert test_config.db_path == test_config.db_data_dir / "test.db"

    def test_defaults(self):
        config = Config.default()

        assert config.db_filename == "tally.db"
        assert config.log_level == "INFO"
        assert config.db_path == Path.home() / "data" / "tally" / "db" / "tally.db"

    def test_load_creates_default_file(self, tmp_path, monkeypatch):
        config_path = tmp_path / ".config" / "tally.toml"
        monkeypatch.setattr(config_module, "get_config_path", lambda: config_path)

        config = load_config()

        assert config_path.exists()
        assert config == Config.default()
        # Loading the written file gives the same values back
        assert load_config() == config

    def test_load_reads_values_and_fills_missing(self, tmp_path, monkeypatch):
        config_path = tmp_path / "tally.toml"
        monkeypatch.setattr(config_module, "get_config_path", lambda: config_path)
        with open(config_path, "wb") as f:
            tomli_w.dump(
                {
                    "base_dir": str(tmp_path / "base"),
                    "database": {"filename": "custom.db", "statement_timeout": 2},
                    "logging": {"level": "DEBUG"},
                },
                f,
            )

        config = load_config()

        assert config.base_dir == tmp_path / "base"
        assert config.db_path == tmp_path / "base" / "db" / "custom.db"
        assert config.statement_timeout == 2.0
        assert config.db_timeout == Config.default().db_timeout
        assert config.log_level == "DEBUG"
        assert config.log_dir == tmp_path / "base" / "logs"
