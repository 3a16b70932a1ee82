"""Unit tests for settings loading."""

import pytest
from pydantic import ValidationError

from tablespec.settings import _reload_settings, get_settings, sqlite_url


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("TABLESPEC_RETRY_DELAY_SECONDS", raising=False)
        settings = _reload_settings()

        assert settings.database_path == ":memory:"
        assert settings.echo_sql is False
        assert settings.log_level == "INFO"
        assert settings.max_retries == 3
        assert settings.retry_delay_seconds == 0.1
        assert settings.database_url == "sqlite://"

    def test_singleton(self):
        assert get_settings() is get_settings()
        assert get_settings(force_reload=True) is get_settings()

    def test_environment_overrides(self, monkeypatch, tmp_path):
        path = str(tmp_path / "data.db")
        monkeypatch.setenv("TABLESPEC_DATABASE_PATH", path)
        monkeypatch.setenv("TABLESPEC_LOG_LEVEL", "debug")
        monkeypatch.setenv("TABLESPEC_MAX_RETRIES", "5")

        settings = _reload_settings()

        assert settings.database_path == path
        assert settings.database_url == f"sqlite:///{path}"
        assert settings.log_level == "DEBUG"
        assert settings.max_retries == 5

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("TABLESPEC_LOG_LEVEL", "verbose")

        with pytest.raises(ValidationError):
            _reload_settings()

    def test_retry_bounds(self, monkeypatch):
        monkeypatch.setenv("TABLESPEC_MAX_RETRIES", "11")

        with pytest.raises(ValidationError):
            _reload_settings()


class TestSqliteUrl:

    def test_memory(self):
        assert sqlite_url(":memory:") == "sqlite://"

    def test_file(self):
        assert sqlite_url("runs.db") == "sqlite:///runs.db"
