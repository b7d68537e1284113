"""Tests for environment-driven settings."""

import importlib
import logging
from pathlib import Path

import pytest

import config


@pytest.fixture
def reload_config(monkeypatch):
    """Reload config under patched environment, restoring defaults afterwards."""
    yield lambda: importlib.reload(config)
    monkeypatch.undo()
    importlib.reload(config)


class TestDefaults:

    def test_defaults(self, monkeypatch, reload_config):
        for name in ("TOTP_SEED_FILE", "TOTP_DIGITS", "TOTP_PERIOD",
                     "TOTP_VALID_WINDOW", "TOTP_ISSUER", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        reload_config()

        assert config.SEED_FILE_PATH == Path("/data/seed.txt")
        assert config.TOTP_DIGITS == 6
        assert config.TOTP_PERIOD == 30
        assert config.TOTP_WINDOW == 1
        assert config.TOTP_ISSUER == "TOTP"
        assert config.LOG_LEVEL == logging.INFO


class TestOverrides:

    def test_environment_overrides(self, monkeypatch, reload_config, tmp_path):
        monkeypatch.setenv("TOTP_SEED_FILE", str(tmp_path / "seed.txt"))
        monkeypatch.setenv("TOTP_DIGITS", "8")
        monkeypatch.setenv("TOTP_PERIOD", "60")
        monkeypatch.setenv("TOTP_VALID_WINDOW", "2")
        monkeypatch.setenv("TOTP_ISSUER", "Example")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        reload_config()

        assert config.SEED_FILE_PATH == tmp_path / "seed.txt"
        assert config.TOTP_DIGITS == 8
        assert config.TOTP_PERIOD == 60
        assert config.TOTP_WINDOW == 2
        assert config.TOTP_ISSUER == "Example"
        assert config.LOG_LEVEL == logging.DEBUG


class TestInvalidValues:

    @pytest.mark.parametrize("name", ["TOTP_DIGITS", "TOTP_PERIOD", "TOTP_VALID_WINDOW"])
    def test_non_numeric(self, monkeypatch, reload_config, name):
        monkeypatch.setenv(name, "six")
        with pytest.raises(ValueError):
            reload_config()

    @pytest.mark.parametrize("level", ["basic_format", "getLogger", "verbose", "raiseExceptions"])
    def test_log_level_must_name_a_level(self, monkeypatch, reload_config, level):
        monkeypatch.setenv("LOG_LEVEL", level)
        with pytest.raises(ValueError, match="Invalid LOG_LEVEL"):
            reload_config()
