"""
razvivayka/flow/dispatcher.py

Purpose: Central command and button dispatcher

- Receives normalized events from the Telegram adapter
- Parses commands and callback_data once, at the boundary
- Routes each variant to exactly one handler
- Reports handler failures to the user without crashing the bot
"""

from typing import Dict, Any, List

from telegram.error import TelegramError

from razvivayka.flow.actions import ActionKind, CallbackAction, Command, parse_callback, parse_command
from razvivayka.flow.handlers.commands import handle_notify, handle_time, handle_app
from razvivayka.flow.handlers.menu import handle_start, show_main_menu, show_help, show_status
from razvivayka.flow.handlers.settings import (
    show_settings,
    show_time_menu,
    show_timezone_menu,
    show_type_menu,
    handle_toggle,
    handle_set_time,
    handle_set_timezone,
    handle_set_type,
    handle_test_notification,
)
from razvivayka.schemas.events import InboundEvent
from razvivayka.services.menu_service import delete_trigger
from razvivayka.utils.constants import GENERIC_ERROR_MESSAGE, CALLBACK_ERROR_TOAST
from razvivayka.core.logging import get_logger

logger = get_logger(__name__)

# Commands that render a menu; their trigger message is removed first
MENU_COMMANDS = {Command.START, Command.SETTINGS, Command.STATUS, Command.HELP}


async def dispatch_event(ctx, event: InboundEvent) -> Dict[str, Any]:
    """
    Main dispatcher for inbound chat events.

    Args:
        ctx: Application context
        event: Normalized event

    Returns:
        Result dict from the handler
    """
    if event.is_callback:
        return await dispatch_callback(ctx, event)
    return await dispatch_command(ctx, event)


async def dispatch_command(ctx, event: InboundEvent) -> Dict[str, Any]:
    command, args = parse_command(event.text)
    if command is None:
        return {"status": "ignored"}

    logger.info(f"📨 /{command.value} from {event.user_id}")

    try:
        return await route_command(ctx, event, command, args)
    except Exception as e:
        logger.error(f"❌ Command /{command.value} failed: {e}", exc_info=True)
        try:
            await ctx.transport.send_message(event.chat_id, GENERIC_ERROR_MESSAGE)
        except TelegramError:
            logger.warning("Could not report the error to the user")
        return {"status": "error", "error": str(e)}


async def route_command(ctx, event: InboundEvent, command: Command, args: List[str]) -> Dict[str, Any]:
    """
    Routes a parsed command to its handler.
    """
    if command in MENU_COMMANDS:
        await delete_trigger(ctx, event.chat_id, event.message_id)

    if command == Command.START:
        return await handle_start(ctx, event)
    elif command == Command.SETTINGS:
        return await show_settings(ctx, event)
    elif command == Command.STATUS:
        return await show_status(ctx, event)
    elif command == Command.HELP:
        return await show_help(ctx, event)
    elif command == Command.NOTIFY:
        return await handle_notify(ctx, event, args)
    elif command == Command.TIME:
        return await handle_time(ctx, event)
    elif command == Command.APP:
        return await handle_app(ctx, event)

    raise ValueError(f"Unhandled command: {command}")


async def dispatch_callback(ctx, event: InboundEvent) -> Dict[str, Any]:
    action = parse_callback(event.callback_data)

    if action is None:
        logger.debug(f"Ignoring callback data: {event.callback_data!r}")
        await ctx.transport.answer_callback(event.callback_query_id)
        return {"status": "ignored"}

    logger.info(f"🔘 {action.kind.value} from {event.user_id}")

    try:
        response = await route_callback(ctx, event, action)
    except Exception as e:
        logger.error(f"❌ Callback {action.kind.value} failed: {e}", exc_info=True)
        await ctx.transport.answer_callback(event.callback_query_id, CALLBACK_ERROR_TOAST)
        return {"status": "error", "error": str(e)}

    await ctx.transport.answer_callback(event.callback_query_id)
    return response


async def route_callback(ctx, event: InboundEvent, action: CallbackAction) -> Dict[str, Any]:
    """
    Routes a parsed button action to its handler.
    """
    kind = action.kind

    if kind == ActionKind.MAIN_MENU:
        return await show_main_menu(ctx, event)
    elif kind in (ActionKind.SETTINGS, ActionKind.BACK_TO_SETTINGS):
        return await show_settings(ctx, event)
    elif kind == ActionKind.STATUS:
        return await show_status(ctx, event)
    elif kind == ActionKind.HELP:
        return await show_help(ctx, event)
    elif kind == ActionKind.TOGGLE_NOTIFICATIONS:
        return await handle_toggle(ctx, event)
    elif kind == ActionKind.CHANGE_TIME:
        return await show_time_menu(ctx, event)
    elif kind == ActionKind.CHANGE_TIMEZONE:
        return await show_timezone_menu(ctx, event)
    elif kind == ActionKind.CHANGE_TYPE:
        return await show_type_menu(ctx, event)
    elif kind == ActionKind.TEST_NOTIFICATION:
        return await handle_test_notification(ctx, event)
    elif kind == ActionKind.SET_TIME:
        return await handle_set_time(ctx, event, action.payload)
    elif kind == ActionKind.SET_TIMEZONE:
        return await handle_set_timezone(ctx, event, action.payload)
    elif kind == ActionKind.SET_TYPE:
        return await handle_set_type(ctx, event, action.payload)

    raise ValueError(f"Unhandled action: {kind}")
