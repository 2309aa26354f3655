"""
razvivayka/schemas/events.py

Purpose: Normalized inbound chat events

- One shape for commands and button presses
- Built from python-telegram-bot Update objects
- Lets the dispatcher and handlers run without Telegram
"""

from typing import Optional

from pydantic import BaseModel, Field
from telegram import Update


class InboundEvent(BaseModel):
    """
    Normalized inbound event for internal processing.
    """
    user_id: str = Field(..., description="Telegram user id of the sender")
    chat_id: int = Field(..., description="Chat the event happened in")
    username: Optional[str] = None
    first_name: Optional[str] = None

    # Command messages
    message_id: Optional[int] = Field(default=None, description="Triggering message (deleted before menus)")
    text: Optional[str] = None

    # Button presses
    callback_data: Optional[str] = None
    callback_query_id: Optional[str] = None

    @property
    def is_callback(self) -> bool:
        return self.callback_query_id is not None


def parse_update(update: Update) -> Optional[InboundEvent]:
    """
    Converts a Telegram update into an InboundEvent.

    Returns:
        InboundEvent, or None for updates without a sender or chat
    """
    user = update.effective_user
    chat = update.effective_chat
    if user is None or chat is None:
        return None

    query = update.callback_query
    if query is not None:
        return InboundEvent(
            user_id=str(user.id),
            chat_id=chat.id,
            username=user.username,
            first_name=user.first_name,
            message_id=query.message.message_id if query.message else None,
            callback_data=query.data,
            callback_query_id=query.id,
        )

    message = update.effective_message
    if message is None:
        return None

    return InboundEvent(
        user_id=str(user.id),
        chat_id=chat.id,
        username=user.username,
        first_name=user.first_name,
        message_id=message.message_id,
        text=message.text,
    )
