"""
razvivayka/services/menu_service.py

Purpose: Live menu message lifecycle

- Tracks the single interactive menu message per user
- Edits that message in place on every navigation
- Falls back to a fresh message when the old one cannot be edited
- Best-effort removal of the user's triggering command
"""

from typing import Dict, Optional

from telegram import InlineKeyboardMarkup
from telegram.error import TelegramError

from razvivayka.core.logging import get_logger

logger = get_logger(__name__)


class MenuSessionTracker:
    """
    Process-local map of user_id → message_id of the live menu.
    Not persisted; a restart costs at most one extra message per user.
    """

    def __init__(self):
        self._menus: Dict[str, int] = {}

    def record_menu(self, user_id, message_id: int):
        self._menus[str(user_id)] = message_id

    def get_menu(self, user_id) -> Optional[int]:
        return self._menus.get(str(user_id))

    def forget(self, user_id):
        self._menus.pop(str(user_id), None)

    def __len__(self) -> int:
        return len(self._menus)


async def show_menu(
    ctx,
    chat_id: int,
    user_id,
    text: str,
    keyboard: Optional[InlineKeyboardMarkup] = None,
) -> int:
    """
    Renders a menu as the user's live menu message.

    Edits the tracked message when there is one; otherwise, or when the edit
    fails, sends a new message and tracks it.

    Args:
        ctx: Application context (transport + menu tracker)
        chat_id: Chat to render in
        user_id: Owner of the menu
        text: Menu text
        keyboard: Inline keyboard

    Returns:
        message_id of the live menu
    """
    tracked = ctx.menus.get_menu(user_id)

    if tracked is not None:
        try:
            await ctx.transport.edit_message(chat_id, tracked, text, keyboard)
            return tracked
        except TelegramError as e:
            logger.info(f"Could not edit menu {tracked}, sending a new one: {e}")
            ctx.menus.forget(user_id)

    message_id = await ctx.transport.send_message(chat_id, text, keyboard)
    ctx.menus.record_menu(user_id, message_id)
    return message_id


async def delete_trigger(ctx, chat_id: int, message_id: Optional[int]):
    """
    Removes the command message that triggered a menu. Failures are ignored.
    """
    if message_id is None:
        return
    await ctx.transport.delete_message(chat_id, message_id)


async def send_ephemeral(ctx, chat_id: int, text: str, ttl_seconds: float) -> Optional[int]:
    """
    Sends a short-lived message and queues it for deletion.

    Returns:
        message_id, or None if sending failed
    """
    try:
        message_id = await ctx.transport.send_message(chat_id, text)
    except TelegramError as e:
        logger.warning(f"Could not send temporary message to chat {chat_id}: {e}")
        return None
    ctx.ephemeral.schedule(chat_id, message_id, ttl_seconds)
    return message_id
