import random
from datetime import datetime, timezone

import pytest

from razvivayka.flow.actions import ActionKind, CallbackAction, Command, parse_callback, parse_command
from razvivayka.utils.constants import REMINDER_MESSAGES, TIMEZONE_OFFSETS, TIME_SLOTS
from razvivayka.utils.message_utils import get_messages_for_type, pick_message, type_label
from razvivayka.utils.telegram_utils import (
    main_menu_keyboard,
    time_keyboard,
    timezone_keyboard,
    type_keyboard,
    settings_keyboard,
)
from razvivayka.utils.time_utils import get_offset, local_hhmm
from razvivayka.utils.validation_utils import validate_time, normalize_time
from razvivayka.models.user import User


@pytest.mark.parametrize("value", ["00:00", "8:15", "08:15", "19:00", "23:59"])
def test_valid_times(value):
    assert validate_time(value)


@pytest.mark.parametrize("value", ["24:00", "12:60", "1215", "ab:cd", "", None, "12:5", " 12:00x"])
def test_invalid_times(value):
    assert not validate_time(value)


def test_normalize_time_pads_hour():
    assert normalize_time("8:15") == "08:15"
    assert normalize_time("19:00") == "19:00"
    with pytest.raises(ValueError):
        normalize_time("25:00")


def test_offsets():
    assert get_offset("Москва") == 3
    assert get_offset("Калининград") == 2
    assert get_offset("Петропавловск-Камчатский") == 12


def test_unknown_city_falls_back_to_moscow_offset():
    assert get_offset("Атлантида") == 3
    assert get_offset(None) == 3


def test_local_hhmm_wraps_midnight():
    now = datetime(2024, 3, 1, 22, 30, tzinfo=timezone.utc)
    assert local_hhmm(now, "Москва") == "01:30"
    assert local_hhmm(now, "Владивосток") == "08:30"
    assert local_hhmm(now, "Калининград") == "00:30"


def test_unknown_type_falls_back_to_motivational():
    assert get_messages_for_type("nonexistent") == REMINDER_MESSAGES["motivational"]
    assert pick_message("nonexistent", random.Random(1)) in REMINDER_MESSAGES["motivational"]
    assert type_label("nonexistent") == type_label("motivational")


def test_pick_message_stays_in_type():
    rng = random.Random(7)
    for reminder_type, messages in REMINDER_MESSAGES.items():
        assert pick_message(reminder_type, rng) in messages


def test_parse_simple_callbacks():
    assert parse_callback("settings") == CallbackAction(ActionKind.SETTINGS)
    assert parse_callback("back_to_settings") == CallbackAction(ActionKind.BACK_TO_SETTINGS)
    assert parse_callback("toggle_notifications") == CallbackAction(ActionKind.TOGGLE_NOTIFICATIONS)


def test_parse_parametrized_callbacks():
    assert parse_callback("time_08:00") == CallbackAction(ActionKind.SET_TIME, "08:00")
    assert parse_callback("time_7:05") == CallbackAction(ActionKind.SET_TIME, "07:05")
    assert parse_callback("type_playful") == CallbackAction(ActionKind.SET_TYPE, "playful")


def test_parse_city_with_space():
    action = parse_callback("tz_Нижний_Новгород")
    assert action == CallbackAction(ActionKind.SET_TIMEZONE, "Нижний Новгород")


@pytest.mark.parametrize("data", [None, "", "time_", "time_25:00", "tz_Атлантида", "type_loud", "dance", "tz"])
def test_parse_rejects_invalid_callbacks(data):
    assert parse_callback(data) is None


def _callback_data(markup):
    return [button.callback_data for row in markup.inline_keyboard for button in row]


def test_every_keyboard_button_parses():
    user = User(user_id="1")
    markups = [main_menu_keyboard(), settings_keyboard(user), time_keyboard(), timezone_keyboard(), type_keyboard()]
    for markup in markups:
        for data in _callback_data(markup):
            assert parse_callback(data) is not None, data


def test_picker_layouts():
    time_rows = time_keyboard().inline_keyboard
    assert all(len(row) <= 3 for row in time_rows)
    assert len(time_rows) == len(TIME_SLOTS) // 3 + 1
    assert time_rows[-1][0].callback_data == "back_to_settings"

    city_rows = timezone_keyboard().inline_keyboard
    assert all(len(row) <= 2 for row in city_rows)
    assert sum(len(row) for row in city_rows[:-1]) == len(TIMEZONE_OFFSETS)
    assert "tz_Нижний_Новгород" in _callback_data(timezone_keyboard())


def test_settings_keyboard_reflects_state():
    off = _callback_data(settings_keyboard(User(user_id="1", enabled=False)))
    assert off[0] == "toggle_notifications"

    on_markup = settings_keyboard(User(user_id="1", enabled=True, time="07:00"))
    labels = [button.text for row in on_markup.inline_keyboard for button in row]
    assert "🔔 Выключить уведомления" in labels
    assert "⏰ Время: 07:00" in labels


def test_parse_command():
    assert parse_command("/notify 08:15") == (Command.NOTIFY, ["08:15"])
    assert parse_command("/start@RazvivaykaBot") == (Command.START, [])
    assert parse_command("/unknown") == (None, [])
    assert parse_command("hello") == (None, [])
