"""
razvivayka/flow/handlers/settings.py

Handles: settings menu and everything reachable from it

- Toggle reminders on/off
- Time, city and reminder-type pickers and their setters
- Test notification
- Short confirmations expire on their own
"""

from typing import Dict, Any

from razvivayka.flow.handlers.common import require_user
from razvivayka.models.user import User
from razvivayka.schemas.events import InboundEvent
from razvivayka.services.menu_service import show_menu, send_ephemeral
from razvivayka.services.user_service import update_user, toggle_notifications
from razvivayka.utils.constants import (
    SETTINGS_MESSAGE,
    TIME_MENU_MESSAGE,
    TIMEZONE_MENU_MESSAGE,
    TYPE_MENU_MESSAGE,
    TOGGLED_ON_MESSAGE,
    TOGGLED_OFF_MESSAGE,
    TIME_SET_MESSAGE,
    TIMEZONE_SET_MESSAGE,
    TYPE_SET_MESSAGE,
    TEST_NOTIFICATION_MESSAGE,
)
from razvivayka.utils.message_utils import pick_message, type_label
from razvivayka.utils.telegram_utils import settings_keyboard, time_keyboard, timezone_keyboard, type_keyboard
from razvivayka.utils.time_utils import get_offset
from razvivayka.core.logging import get_logger, LogContext

logger = get_logger(__name__)


def render_settings(user: User) -> str:
    return SETTINGS_MESSAGE.format(
        status_icon="🟢" if user.enabled else "🔴",
        status_text="Включены" if user.enabled else "Выключены",
        time=user.time,
        timezone=user.timezone,
        offset=get_offset(user.timezone),
        type_label=type_label(user.reminder_type),
    )


async def _render_settings_for(ctx, event: InboundEvent, user: User):
    await show_menu(ctx, event.chat_id, event.user_id, render_settings(user), settings_keyboard(user))


async def show_settings(ctx, event: InboundEvent) -> Dict[str, Any]:
    user = await require_user(ctx, event)
    if user is None:
        return {"status": "not_found"}
    await _render_settings_for(ctx, event, user)
    return {"status": "success"}


async def show_time_menu(ctx, event: InboundEvent) -> Dict[str, Any]:
    await show_menu(ctx, event.chat_id, event.user_id, TIME_MENU_MESSAGE, time_keyboard())
    return {"status": "success"}


async def show_timezone_menu(ctx, event: InboundEvent) -> Dict[str, Any]:
    await show_menu(ctx, event.chat_id, event.user_id, TIMEZONE_MENU_MESSAGE, timezone_keyboard())
    return {"status": "success"}


async def show_type_menu(ctx, event: InboundEvent) -> Dict[str, Any]:
    await show_menu(ctx, event.chat_id, event.user_id, TYPE_MENU_MESSAGE, type_keyboard())
    return {"status": "success"}


async def _after_change(ctx, event: InboundEvent, user: User, confirmation: str) -> Dict[str, Any]:
    await send_ephemeral(ctx, event.chat_id, confirmation, ctx.settings.EPHEMERAL_TTL_SECONDS)
    await _render_settings_for(ctx, event, user)
    return {"status": "success"}


async def handle_toggle(ctx, event: InboundEvent) -> Dict[str, Any]:
    with LogContext(user_id=event.user_id, action="toggle_notifications"):
        user = await toggle_notifications(ctx.store, event.user_id)
        if user is None:
            return {"status": "not_found"}
        logger.info(f"Notifications {'enabled' if user.enabled else 'disabled'}")
        confirmation = TOGGLED_ON_MESSAGE if user.enabled else TOGGLED_OFF_MESSAGE
        return await _after_change(ctx, event, user, confirmation)


async def handle_set_time(ctx, event: InboundEvent, time: str) -> Dict[str, Any]:
    with LogContext(user_id=event.user_id, action="set_time"):
        user = await update_user(ctx.store, event.user_id, time=time)
        if user is None:
            return {"status": "not_found"}
        return await _after_change(ctx, event, user, TIME_SET_MESSAGE.format(time=user.time))


async def handle_set_timezone(ctx, event: InboundEvent, city: str) -> Dict[str, Any]:
    with LogContext(user_id=event.user_id, action="set_timezone"):
        user = await update_user(ctx.store, event.user_id, timezone=city)
        if user is None:
            return {"status": "not_found"}
        return await _after_change(ctx, event, user, TIMEZONE_SET_MESSAGE.format(timezone=city))


async def handle_set_type(ctx, event: InboundEvent, reminder_type: str) -> Dict[str, Any]:
    with LogContext(user_id=event.user_id, action="set_type"):
        user = await update_user(ctx.store, event.user_id, reminder_type=reminder_type)
        if user is None:
            return {"status": "not_found"}
        confirmation = TYPE_SET_MESSAGE.format(type_label=type_label(reminder_type))
        return await _after_change(ctx, event, user, confirmation)


async def handle_test_notification(ctx, event: InboundEvent) -> Dict[str, Any]:
    """
    Sends one sample reminder of the user's type; it disappears after a while.
    """
    user = await require_user(ctx, event)
    if user is None:
        return {"status": "not_found"}

    text = TEST_NOTIFICATION_MESSAGE.format(message=pick_message(user.reminder_type))
    await send_ephemeral(ctx, event.chat_id, text, ctx.settings.TEST_NOTIFICATION_TTL_SECONDS)
    return {"status": "success"}
