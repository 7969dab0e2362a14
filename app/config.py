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
        default="sqlite:///./bandmate.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing access tokens", min_length=1
    )
    refresh_secret_key: str | None = Field(
        default=None,
        description="Secret key for signing refresh tokens (derived from SECRET_KEY when unset)",
    )
    access_token_expire_minutes: int = Field(
        default=15,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    refresh_token_expire_days: int = Field(
        default=7,
        description="Number of days before refresh tokens expire",
        gt=0,
    )
    app_url: str = Field(
        default="http://localhost:5173",
        description="Public URL of the web client, used for links in emails",
    )
    cors_origins: str = Field(
        default="http://localhost:5173",
        description="Comma separated list of origins allowed by CORS",
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
    app_timezone: str = Field(
        default="UTC", description="Timezone used for persisted timestamps"
    )
    activity_retention_days: int = Field(default=90, gt=0)
    notification_retention_days: int = Field(default=30, gt=0)
    invitation_expiry_days: int = Field(default=7, gt=0)
    log_level: str = Field(default="INFO")

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self

    @property
    def effective_refresh_secret_key(self) -> str:
        return self.refresh_secret_key or f"{self.secret_key}:refresh"

    @property
    def cookies_secure(self) -> bool:
        return self.app_url.startswith("https://")

    @property
    def allowed_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
