import pytest
from pydantic import ValidationError

from razvivayka.core.config import Settings, validate_settings


def test_disabled_mode_needs_no_token():
    assert validate_settings(Settings(TELEGRAM_MODE="disabled", TELEGRAM_BOT_TOKEN=None))


def test_polling_requires_token():
    with pytest.raises(ValueError, match="TELEGRAM_BOT_TOKEN"):
        validate_settings(Settings(TELEGRAM_MODE="polling", TELEGRAM_BOT_TOKEN=None))


def test_webhook_requires_public_url():
    config = Settings(TELEGRAM_MODE="webhook", TELEGRAM_BOT_TOKEN="123:abc", PUBLIC_URL=None)
    with pytest.raises(ValueError, match="PUBLIC_URL"):
        validate_settings(config)


def test_defaults():
    config = Settings(TELEGRAM_MODE="disabled")
    assert config.SCHEDULER_INTERVAL_SECONDS == 60
    assert config.EPHEMERAL_TTL_SECONDS == 2
    assert config.TEST_NOTIFICATION_TTL_SECONDS == 10
    assert config.PORT == 3000
    assert config.telegram_enabled is False


def test_interval_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(SCHEDULER_INTERVAL_SECONDS=0)
