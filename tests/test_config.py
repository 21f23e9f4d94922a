from __future__ import annotations

import pytest
from pydantic import ValidationError

from damage_claims.config import Settings, get_settings, reset_settings_cache


def test_defaults_leave_delivery_channels_unconfigured(monkeypatch):
    monkeypatch.delenv("ENABLE_REMINDER_SCHEDULER", raising=False)
    monkeypatch.delenv("APP_TIMEZONE", raising=False)

    settings = Settings(database_url="sqlite://", _env_file=None)

    assert settings.app_timezone == "UTC"
    assert settings.sendgrid_api_key is None
    assert settings.twilio_account_sid is None
    assert settings.email_send_timeout_seconds == 10.0
    assert settings.enable_reminder_scheduler is True


def test_scheduler_can_be_disabled_from_environment(monkeypatch):
    monkeypatch.setenv("ENABLE_REMINDER_SCHEDULER", "false")

    assert Settings(database_url="sqlite://", _env_file=None).enable_reminder_scheduler is False


def test_sendgrid_credentials_must_be_paired():
    with pytest.raises(ValidationError):
        Settings(database_url="sqlite://", sendgrid_api_key="SG.key")

    with pytest.raises(ValidationError):
        Settings(database_url="sqlite://", sendgrid_api_key="SG.key", sendgrid_sender="claims")

    settings = Settings(
        database_url="sqlite://",
        sendgrid_api_key="SG.key",
        sendgrid_sender="claims@example.com",
    )
    assert settings.sendgrid_sender == "claims@example.com"


def test_settings_are_cached_until_reset(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("FRONTEND_URL", "https://claims.example.com")

    assert get_settings() is first

    reset_settings_cache()
    try:
        assert get_settings().frontend_url == "https://claims.example.com"
    finally:
        monkeypatch.delenv("FRONTEND_URL")
        reset_settings_cache()
