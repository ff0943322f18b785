"""Tests for liteorm.core.settings."""

import pytest
from pydantic import ValidationError

from liteorm.core.settings import LiteOrmSettings, get_settings


class TestLiteOrmSettings:
    def test_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)  # no stray .env
        settings = LiteOrmSettings()
        assert settings.database_path == "liteorm.db"
        assert settings.enforce_foreign_keys is True
        assert settings.log_level == "INFO"
        assert settings.log_json is None

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("LITEORM_DATABASE_PATH", "/tmp/school.db")
        monkeypatch.setenv("LITEORM_ENFORCE_FOREIGN_KEYS", "false")
        settings = LiteOrmSettings()
        assert settings.database_path == "/tmp/school.db"
        assert settings.enforce_foreign_keys is False

    def test_dotenv_file(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("LITEORM_LOG_LEVEL=debug\n")
        monkeypatch.chdir(tmp_path)
        assert LiteOrmSettings().log_level == "DEBUG"

    def test_log_level_is_normalised(self):
        assert LiteOrmSettings(log_level="warning").log_level == "WARNING"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            LiteOrmSettings(log_level="LOUD")

    def test_unknown_env_vars_ignored(self, monkeypatch):
        monkeypatch.setenv("LITEORM_SOMETHING_ELSE", "1")
        LiteOrmSettings()


class TestGetSettings:
    def test_cached(self):
        assert get_settings() is get_settings()

    def test_reload(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("LITEORM_DATABASE_PATH", "other.db")
        second = get_settings(reload=True)
        assert second is not first
        assert second.database_path == "other.db"
