"""Tests for settings and logging configuration."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from repcycle.config import DATA_DIR, Settings, configure_logging, get_settings


class TestSettings:
    """Tests for REPCYCLE_* environment settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("REPCYCLE_DATA_DIR", raising=False)
        monkeypatch.delenv("REPCYCLE_LOG_LEVEL", raising=False)
        settings = Settings()

        assert settings.data_dir == DATA_DIR
        assert settings.log_level == "WARNING"
        assert settings.default_user_id == 1

    def test_environment_overrides(self, tmp_path, monkeypatch):
        monkeypatch.setenv("REPCYCLE_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("REPCYCLE_LOG_LEVEL", "debug")
        monkeypatch.setenv("REPCYCLE_DEFAULT_USER_ID", "7")
        settings = Settings()

        assert settings.data_dir == tmp_path
        assert settings.log_level == "DEBUG"
        assert settings.default_user_id == 7

    def test_expands_home(self, monkeypatch):
        monkeypatch.setenv("REPCYCLE_DATA_DIR", "~/repcycle-data")
        assert Settings().data_dir == Path("~/repcycle-data").expanduser()

    def test_unknown_log_level(self, monkeypatch):
        monkeypatch.setenv("REPCYCLE_LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError):
            Settings()

    def test_get_settings_is_cached(self, tmp_path, monkeypatch):
        monkeypatch.setenv("REPCYCLE_DATA_DIR", str(tmp_path))
        first = get_settings()
        monkeypatch.setenv("REPCYCLE_DATA_DIR", str(tmp_path / "other"))

        assert get_settings() is first
        get_settings.cache_clear()
        assert get_settings().data_dir == tmp_path / "other"


class TestConfigureLogging:
    def test_uses_configured_level(self, monkeypatch):
        calls = {}
        monkeypatch.setenv("REPCYCLE_LOG_LEVEL", "INFO")
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

        configure_logging()

        assert calls["level"] == "INFO"
        assert "%(name)s" in calls["format"]

    def test_explicit_level_wins(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
        configure_logging(logging.DEBUG)
        assert calls["level"] == logging.DEBUG
