"""
razvivayka/models/user.py

Purpose: User record model

- Telegram user and chat identifiers
- Reminder settings (time, city, reminder type, enabled flag)
- Handshake flag and activity timestamps
- camelCase on disk and over HTTP, snake_case in Python
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from razvivayka.utils.constants import DEFAULT_TIME, DEFAULT_TIMEZONE, DEFAULT_REMINDER_TYPE
from razvivayka.utils.time_utils import iso_now
from razvivayka.utils.validation_utils import normalize_time


class User(BaseModel):
    """
    One record per registered chat participant.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    user_id: str
    chat_id: Optional[int] = None
    username: Optional[str] = None
    first_name: Optional[str] = None
    enabled: bool = False
    time: str = DEFAULT_TIME
    timezone: str = DEFAULT_TIMEZONE
    reminder_type: str = DEFAULT_REMINDER_TYPE
    has_started: bool = False
    created_at: str = Field(default_factory=iso_now)
    last_active: str = Field(default_factory=iso_now)

    @field_validator("user_id", mode="before")
    @classmethod
    def coerce_user_id(cls, v):
        """Telegram ids arrive as ints; the store keys on strings."""
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        return normalize_time(v)

    def touch(self):
        """Marks the record as just used."""
        self.last_active = iso_now()

    def to_record(self) -> dict:
        """Serializes the user with camelCase keys."""
        return self.model_dump(by_alias=True)
