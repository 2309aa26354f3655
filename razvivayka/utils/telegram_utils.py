"""
razvivayka/utils/telegram_utils.py

Purpose: Telegram keyboard builders

- Main, settings, status and help menus
- Time, city and reminder-type pickers
- Companion app button
"""

from typing import List

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, WebAppInfo

from razvivayka.flow.actions import ActionKind, CallbackAction
from razvivayka.models.user import User
from razvivayka.utils.constants import (
    TIME_SLOTS,
    TIMEZONE_OFFSETS,
    REMINDER_TYPES,
    TIME_BUTTONS_PER_ROW,
    CITY_BUTTONS_PER_ROW,
    BUTTON_SETTINGS,
    BUTTON_STATUS,
    BUTTON_HELP,
    BUTTON_DISABLE,
    BUTTON_ENABLE,
    BUTTON_TIME,
    BUTTON_TIMEZONE,
    BUTTON_TYPE,
    BUTTON_TEST,
    BUTTON_MAIN_MENU,
    BUTTON_CHANGE_SETTINGS,
    BUTTON_BACK_TO_SETTINGS,
    BUTTON_OPEN_APP,
)
from razvivayka.utils.message_utils import type_label


def action_button(text: str, kind: ActionKind, payload: str = None) -> InlineKeyboardButton:
    return InlineKeyboardButton(text, callback_data=CallbackAction(kind, payload).encode())


def chunk(items: list, size: int) -> List[list]:
    """
    Splits a list into rows of at most `size` items.
    """
    return [items[i:i + size] for i in range(0, len(items), size)]


def main_menu_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([
        [action_button(BUTTON_SETTINGS, ActionKind.SETTINGS)],
        [action_button(BUTTON_STATUS, ActionKind.STATUS)],
        [action_button(BUTTON_HELP, ActionKind.HELP)],
    ])


def settings_keyboard(user: User) -> InlineKeyboardMarkup:
    """
    Settings menu; button captions reflect the user's current values.
    """
    return InlineKeyboardMarkup([
        [action_button(BUTTON_DISABLE if user.enabled else BUTTON_ENABLE, ActionKind.TOGGLE_NOTIFICATIONS)],
        [action_button(BUTTON_TIME.format(time=user.time), ActionKind.CHANGE_TIME)],
        [action_button(BUTTON_TIMEZONE.format(timezone=user.timezone), ActionKind.CHANGE_TIMEZONE)],
        [action_button(BUTTON_TYPE.format(type_label=type_label(user.reminder_type)), ActionKind.CHANGE_TYPE)],
        [action_button(BUTTON_TEST, ActionKind.TEST_NOTIFICATION)],
        [action_button(BUTTON_MAIN_MENU, ActionKind.MAIN_MENU)],
    ])


def status_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([
        [action_button(BUTTON_CHANGE_SETTINGS, ActionKind.SETTINGS)],
        [action_button(BUTTON_MAIN_MENU, ActionKind.MAIN_MENU)],
    ])


def help_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([
        [action_button(BUTTON_MAIN_MENU, ActionKind.MAIN_MENU)],
    ])


def _with_back_button(rows: List[list]) -> InlineKeyboardMarkup:
    rows.append([action_button(BUTTON_BACK_TO_SETTINGS, ActionKind.BACK_TO_SETTINGS)])
    return InlineKeyboardMarkup(rows)


def time_keyboard() -> InlineKeyboardMarkup:
    buttons = [action_button(slot, ActionKind.SET_TIME, slot) for slot in TIME_SLOTS]
    return _with_back_button(chunk(buttons, TIME_BUTTONS_PER_ROW))


def timezone_keyboard() -> InlineKeyboardMarkup:
    buttons = [action_button(city, ActionKind.SET_TIMEZONE, city) for city in TIMEZONE_OFFSETS]
    return _with_back_button(chunk(buttons, CITY_BUTTONS_PER_ROW))


def type_keyboard() -> InlineKeyboardMarkup:
    rows = [[action_button(label, ActionKind.SET_TYPE, key)] for key, label in REMINDER_TYPES.items()]
    return _with_back_button(rows)


def app_keyboard(url: str) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([
        [InlineKeyboardButton(BUTTON_OPEN_APP, web_app=WebAppInfo(url=url))],
    ])
