from pathlib import Path

import pytest
from pydantic import ValidationError

from logon_hours.config import Settings


def test_settings_read_prefixed_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("LOGON_HOURS_DATABASE_PATH", str(tmp_path / "directory.db"))
    monkeypatch.setenv("LOGON_HOURS_PORT", "9000")
    monkeypatch.setenv("LOGON_HOURS_CORS_ORIGINS", '["http://a.example", "http://b.example"]')
    monkeypatch.setenv("LOGON_HOURS_SESSION_TTL_SECONDS", "60")

    settings = Settings()

    assert settings.port == 9000
    assert settings.database_path == Path(tmp_path / "directory.db")
    assert settings.database_url == f"sqlite:///{tmp_path / 'directory.db'}"
    assert settings.cors_origins == ["http://a.example", "http://b.example"]
    assert settings.session_ttl_seconds == 60


def test_settings_reject_invalid_values(monkeypatch):
    monkeypatch.setenv("LOGON_HOURS_PORT", "eighty")
    with pytest.raises(ValidationError):
        Settings()


def test_settings_reject_non_positive_session_limits(monkeypatch):
    monkeypatch.setenv("LOGON_HOURS_MAX_SESSIONS", "0")
    with pytest.raises(ValidationError):
        Settings()
