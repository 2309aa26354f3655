"""
razvivayka/flow/handlers/common.py

Shared handler helpers: user lookup with /start prompt, plain replies.
"""

from typing import Optional

from razvivayka.models.user import User
from razvivayka.schemas.events import InboundEvent
from razvivayka.services.user_service import get_user
from razvivayka.utils.constants import START_FIRST_MESSAGE


async def reply(ctx, event: InboundEvent, text: str, keyboard=None) -> int:
    return await ctx.transport.send_message(event.chat_id, text, keyboard)


async def require_user(ctx, event: InboundEvent) -> Optional[User]:
    """
    Loads the sender's record, or asks them to /start and returns None.
    """
    user = await get_user(ctx.store, event.user_id)
    if user is None:
        await reply(ctx, event, START_FIRST_MESSAGE)
    return user
