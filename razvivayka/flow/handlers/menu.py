"""
razvivayka/flow/handlers/menu.py

Handles: /start, main menu, /status, /help

- Completes the chat handshake and creates the user record
- Renders the top-level menus as the user's live menu message
"""

from typing import Dict, Any

from razvivayka.flow.handlers.common import require_user
from razvivayka.schemas.events import InboundEvent
from razvivayka.services.menu_service import show_menu
from razvivayka.services.user_service import register_chat_user
from razvivayka.utils.constants import (
    WELCOME_MESSAGE,
    MAIN_MENU_MESSAGE,
    STATUS_MESSAGE,
    HELP_MESSAGE,
    STATUS_ENABLED,
    STATUS_DISABLED,
    NEXT_NOTIFICATION,
    NOTIFICATIONS_OFF,
)
from razvivayka.utils.message_utils import type_label
from razvivayka.utils.telegram_utils import main_menu_keyboard, status_keyboard, help_keyboard
from razvivayka.core.logging import get_logger, LogContext

logger = get_logger(__name__)


async def handle_start(ctx, event: InboundEvent) -> Dict[str, Any]:
    """
    Registers the sender (or re-marks them as started) and shows the welcome menu.

    Args:
        ctx: Application context
        event: /start command event

    Returns:
        Result dict
    """
    with LogContext(user_id=event.user_id, action="start"):
        user, created = await register_chat_user(
            ctx.store,
            event.user_id,
            chat_id=event.chat_id,
            username=event.username,
            first_name=event.first_name,
        )
        logger.info(f"👋 /start ({'new' if created else 'returning'} user)")

        await show_menu(ctx, event.chat_id, event.user_id, WELCOME_MESSAGE, main_menu_keyboard())
        return {"status": "success", "created": created}


async def show_main_menu(ctx, event: InboundEvent) -> Dict[str, Any]:
    await show_menu(ctx, event.chat_id, event.user_id, MAIN_MENU_MESSAGE, main_menu_keyboard())
    return {"status": "success"}


async def show_help(ctx, event: InboundEvent) -> Dict[str, Any]:
    await show_menu(ctx, event.chat_id, event.user_id, HELP_MESSAGE, help_keyboard())
    return {"status": "success"}


async def show_status(ctx, event: InboundEvent) -> Dict[str, Any]:
    """
    Shows whether reminders are on, when the next one fires, city and type.
    """
    user = await require_user(ctx, event)
    if user is None:
        return {"status": "not_found"}

    if user.enabled:
        next_notification = NEXT_NOTIFICATION.format(time=user.time, timezone=user.timezone)
    else:
        next_notification = NOTIFICATIONS_OFF

    text = STATUS_MESSAGE.format(
        status=STATUS_ENABLED if user.enabled else STATUS_DISABLED,
        next_notification=next_notification,
        timezone=user.timezone,
        type_label=type_label(user.reminder_type),
    )
    await show_menu(ctx, event.chat_id, event.user_id, text, status_keyboard())
    return {"status": "success"}
