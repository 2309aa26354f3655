"""
razvivayka/schemas/telegram.py

Pydantic models for the companion web app API.
Field names are camelCase on the wire.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from razvivayka.utils.constants import DEFAULT_TIME, DEFAULT_TIMEZONE, DEFAULT_REMINDER_TYPE
from razvivayka.utils.validation_utils import normalize_time, is_known_city, is_known_reminder_type


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ConnectSettings(CamelModel):
    """Reminder settings chosen in the web app."""

    time: str = Field(default=DEFAULT_TIME, description="Reminder time, HH:MM")
    reminder_type: str = Field(default=DEFAULT_REMINDER_TYPE, description="Message style key")
    timezone: Optional[str] = Field(default=None, description="City from the offset table")

    @field_validator("time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        return normalize_time(v)

    @field_validator("reminder_type")
    @classmethod
    def validate_reminder_type(cls, v: str) -> str:
        if not is_known_reminder_type(v):
            raise ValueError(f"Unknown reminder type: {v}")
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_known_city(v):
            raise ValueError(f"Unknown city: {v}")
        return v


class ConnectRequest(CamelModel):
    """Request schema for the connect endpoint."""

    user_id: Union[str, int] = Field(..., description="Telegram user id")
    username: Optional[str] = Field(default=None, description="Telegram username")
    settings: ConnectSettings = Field(default_factory=ConnectSettings)

    @field_validator("user_id")
    @classmethod
    def stringify_user_id(cls, v) -> str:
        v = str(v).strip()
        if not v:
            raise ValueError("userId must not be empty")
        return v


class ConnectResponse(CamelModel):
    success: bool
    message: str


class StatusResponse(CamelModel):
    """Response schema for the status endpoint."""

    connected: bool = False
    enabled: bool = False
    time: str = DEFAULT_TIME
    timezone: str = DEFAULT_TIMEZONE
    type: str = DEFAULT_REMINDER_TYPE


class SendNotificationRequest(CamelModel):
    user_id: Union[str, int] = Field(..., description="Telegram user id")
    message: str = Field(..., min_length=1, max_length=4096, description="Text to deliver")

    @field_validator("user_id")
    @classmethod
    def stringify_user_id(cls, v) -> str:
        return str(v).strip()


class SendNotificationResponse(CamelModel):
    success: bool
