"""
razvivayka/services/telegram_service.py

Purpose: Telegram message transport

- Sends messages with optional inline keyboards
- Edits previously sent messages in place
- Best-effort deletes and callback answers
"""

from typing import Optional

from telegram import Bot, InlineKeyboardMarkup
from telegram.constants import ParseMode
from telegram.error import BadRequest, TelegramError

from razvivayka.core.logging import get_logger

logger = get_logger(__name__)

# Marker for "use the service default parse mode"
DEFAULT_PARSE_MODE = object()


class TelegramService:
    """Thin wrapper around telegram.Bot used by handlers and the scheduler"""

    def __init__(self, bot: Bot, parse_mode: Optional[str] = ParseMode.MARKDOWN):
        self.bot = bot
        self.parse_mode = parse_mode

    async def send_message(
        self,
        chat_id: int,
        text: str,
        keyboard: Optional[InlineKeyboardMarkup] = None,
        parse_mode=DEFAULT_PARSE_MODE,
    ) -> int:
        """
        Sends a text message.

        Args:
            chat_id: Destination chat
            text: Message text (Telegram Markdown)
            keyboard: Optional inline keyboard
            parse_mode: Override for this message; None sends plain text

        Returns:
            Telegram message_id of the sent message

        Raises:
            TelegramError: If Telegram rejects the message
        """
        message = await self.bot.send_message(
            chat_id=chat_id,
            text=text,
            parse_mode=self.parse_mode if parse_mode is DEFAULT_PARSE_MODE else parse_mode,
            reply_markup=keyboard,
        )
        logger.debug(f"📤 Sent message {message.message_id} to chat {chat_id}")
        return message.message_id

    async def edit_message(
        self,
        chat_id: int,
        message_id: int,
        text: str,
        keyboard: Optional[InlineKeyboardMarkup] = None,
    ):
        """
        Replaces the text and keyboard of an existing message.
        An edit that changes nothing is treated as success.

        Raises:
            TelegramError: If the message is gone, too old or not editable
        """
        try:
            await self.bot.edit_message_text(
                text=text,
                chat_id=chat_id,
                message_id=message_id,
                parse_mode=self.parse_mode,
                reply_markup=keyboard,
            )
        except BadRequest as e:
            if "not modified" in str(e).lower():
                return
            raise

    async def delete_message(self, chat_id: int, message_id: int) -> bool:
        """
        Deletes a message. Failures (already deleted, no rights) are ignored.

        Returns:
            True if Telegram confirmed the deletion
        """
        try:
            return bool(await self.bot.delete_message(chat_id=chat_id, message_id=message_id))
        except TelegramError as e:
            logger.debug(f"Could not delete message {message_id} in chat {chat_id}: {e}")
            return False

    async def answer_callback(self, callback_query_id: Optional[str], text: Optional[str] = None):
        """
        Acknowledges a button press so the client stops its spinner.
        """
        if not callback_query_id:
            return
        try:
            await self.bot.answer_callback_query(callback_query_id=callback_query_id, text=text)
        except TelegramError as e:
            logger.debug(f"Could not answer callback {callback_query_id}: {e}")
