"""
razvivayka/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (bot token, data file, timers)
- Validates configuration on startup
- Environment-specific settings
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, Literal


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Validates all required configs on startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # Telegram
    TELEGRAM_BOT_TOKEN: Optional[str] = Field(
        default=None,
        description="Bot token issued by @BotFather"
    )
    TELEGRAM_MODE: Literal["polling", "webhook", "disabled"] = Field(
        default="polling",
        description="How inbound updates are received"
    )
    PUBLIC_URL: Optional[str] = Field(
        default=None,
        description="Public base URL of this service (webhook mode only)"
    )
    WEB_APP_URL: Optional[str] = Field(
        default=None,
        description="Companion web app URL shown by /app"
    )

    # Storage
    DATA_FILE: str = Field(
        default="data/users.json",
        description="Path of the JSON user store"
    )

    # Timers
    SCHEDULER_INTERVAL_SECONDS: int = Field(
        default=60,
        description="Reminder scan interval in seconds"
    )
    EPHEMERAL_FLUSH_SECONDS: int = Field(
        default=1,
        description="How often expired temporary messages are deleted"
    )
    EPHEMERAL_TTL_SECONDS: int = Field(
        default=2,
        description="Lifetime of settings confirmation messages"
    )
    TEST_NOTIFICATION_TTL_SECONDS: int = Field(
        default=10,
        description="Lifetime of test notification messages"
    )

    # Application
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    CORS_ORIGINS: list = Field(
        default=["*"],
        description="Allowed CORS origins"
    )
    HOST: str = Field(default="0.0.0.0", description="Bind address")
    PORT: int = Field(default=3000, description="Bind port")

    @field_validator("SCHEDULER_INTERVAL_SECONDS", "EPHEMERAL_FLUSH_SECONDS")
    @classmethod
    def validate_positive_interval(cls, v: int) -> int:
        """Timer intervals must be at least one second."""
        if v < 1:
            raise ValueError("interval must be >= 1 second")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    @property
    def telegram_enabled(self) -> bool:
        return self.TELEGRAM_MODE != "disabled"


# Global settings instance
settings = Settings()


def validate_settings(config: Optional[Settings] = None):
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    config = config or settings
    errors = []

    if config.telegram_enabled and not config.TELEGRAM_BOT_TOKEN:
        errors.append("TELEGRAM_BOT_TOKEN is required unless TELEGRAM_MODE=disabled")

    if config.TELEGRAM_MODE == "webhook" and not config.PUBLIC_URL:
        errors.append("PUBLIC_URL is required in webhook mode")

    if not config.DATA_FILE:
        errors.append("DATA_FILE is required")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
