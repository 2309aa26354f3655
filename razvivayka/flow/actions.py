"""
razvivayka/flow/actions.py

Purpose: Inbound command and button vocabulary

- Enum of slash commands
- Enum of callback actions with optional payloads
- Single parse step from raw callback_data to a validated action
- Encoding helpers used when building keyboards
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional

from razvivayka.utils.constants import TIMEZONE_OFFSETS
from razvivayka.utils.validation_utils import validate_time, normalize_time, is_known_reminder_type


class Command(str, Enum):
    """
    Slash commands understood by the bot.
    """
    START = "start"
    APP = "app"
    SETTINGS = "settings"
    STATUS = "status"
    HELP = "help"
    NOTIFY = "notify"
    TIME = "time"


class ActionKind(str, Enum):
    """
    Inline-button actions. Members ending in a prefix carry a payload.
    """
    SETTINGS = "settings"
    STATUS = "status"
    HELP = "help"
    TOGGLE_NOTIFICATIONS = "toggle_notifications"
    CHANGE_TIME = "change_time"
    CHANGE_TIMEZONE = "change_timezone"
    CHANGE_TYPE = "change_type"
    TEST_NOTIFICATION = "test_notification"
    MAIN_MENU = "main_menu"
    BACK_TO_SETTINGS = "back_to_settings"

    # Parametrized
    SET_TIME = "time"
    SET_TIMEZONE = "tz"
    SET_TYPE = "type"


PARAMETRIZED = {ActionKind.SET_TIME, ActionKind.SET_TIMEZONE, ActionKind.SET_TYPE}
SIMPLE = {kind.value: kind for kind in ActionKind if kind not in PARAMETRIZED}


@dataclass(frozen=True)
class CallbackAction:
    kind: ActionKind
    payload: Optional[str] = None

    def encode(self) -> str:
        """Renders the action as Telegram callback_data."""
        if self.kind in PARAMETRIZED:
            if self.kind == ActionKind.SET_TIMEZONE:
                return f"{self.kind.value}_{encode_city(self.payload)}"
            return f"{self.kind.value}_{self.payload}"
        return self.kind.value


def encode_city(city: str) -> str:
    return city.replace(" ", "_")


# Encoded button value → city. Lookup by exact key, so underscores in the
# encoded form never need to be split.
_CITIES_BY_CODE = {encode_city(city): city for city in TIMEZONE_OFFSETS}


def parse_callback(data: Optional[str]) -> Optional[CallbackAction]:
    """
    Parses raw callback_data into an action.

    Args:
        data: callback_data from Telegram

    Returns:
        CallbackAction, or None for anything unrecognized or invalid
    """
    if not data:
        return None

    if data in SIMPLE:
        return CallbackAction(SIMPLE[data])

    prefix, sep, payload = data.partition("_")
    if not sep or not payload:
        return None

    if prefix == ActionKind.SET_TIME.value:
        if not validate_time(payload):
            return None
        return CallbackAction(ActionKind.SET_TIME, normalize_time(payload))

    if prefix == ActionKind.SET_TIMEZONE.value:
        city = _CITIES_BY_CODE.get(payload)
        if city is None:
            return None
        return CallbackAction(ActionKind.SET_TIMEZONE, city)

    if prefix == ActionKind.SET_TYPE.value:
        if not is_known_reminder_type(payload):
            return None
        return CallbackAction(ActionKind.SET_TYPE, payload)

    return None


def parse_command(text: Optional[str]):
    """
    Splits a message like "/notify@RazvivaykaBot 08:15" into (Command, args).

    Returns:
        (Command, list of args), or (None, []) if the text is not a known command
    """
    if not text or not text.startswith("/"):
        return None, []

    head, *args = text.strip().split()
    name = head[1:].split("@", 1)[0].lower()
    try:
        return Command(name), args
    except ValueError:
        return None, []
