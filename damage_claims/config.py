"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used for calendar-day boundaries and stored datetimes",
    )
    frontend_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the web client, used for links inside emails",
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending transactional emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of transactional messages",
        min_length=3,
    )
    email_send_timeout_seconds: float = Field(
        default=10.0,
        description="Seconds to wait for SendGrid before an email dispatch is dropped",
        gt=0,
    )
    twilio_account_sid: str | None = Field(
        default=None, description="Twilio account SID used for SMS delivery"
    )
    twilio_auth_token: str | None = Field(
        default=None, description="Twilio auth token used for SMS delivery"
    )
    twilio_phone_number: str | None = Field(
        default=None, description="Phone number SMS messages are sent from"
    )
    sms_send_timeout_seconds: float = Field(
        default=30.0,
        description="Seconds to wait for Twilio before an SMS dispatch is dropped",
        gt=0,
    )
    notification_workers: int = Field(
        default=4,
        description="Number of background threads delivering email and SMS",
        gt=0,
    )
    enable_reminder_scheduler: bool = Field(
        default=True,
        description="Start the hourly deadline reminder job together with the API",
    )

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
