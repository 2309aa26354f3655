"""
razvivayka/flow/handlers/commands.py

Handles: /notify HH:MM, /time, /app

- /notify validates and stores the reminder time
- /time shows server and local time
- /app links to the companion web app
"""

from typing import Dict, Any, List

from razvivayka.flow.handlers.common import reply, require_user
from razvivayka.schemas.events import InboundEvent
from razvivayka.services.user_service import update_user
from razvivayka.utils.constants import (
    NOTIFY_USAGE_MESSAGE,
    NOTIFY_INVALID_MESSAGE,
    NOTIFY_SUCCESS_MESSAGE,
    TIME_INFO_MESSAGE,
    APP_MESSAGE,
    APP_UNAVAILABLE_MESSAGE,
)
from razvivayka.utils.telegram_utils import app_keyboard
from razvivayka.utils.time_utils import utc_now, local_hhmm, get_offset
from razvivayka.utils.validation_utils import validate_time, normalize_time
from razvivayka.core.logging import get_logger, LogContext

logger = get_logger(__name__)


async def handle_notify(ctx, event: InboundEvent, args: List[str]) -> Dict[str, Any]:
    """
    Sets the reminder time from "/notify HH:MM".

    Args:
        ctx: Application context
        event: Command event
        args: Command arguments

    Returns:
        Result dict; invalid input leaves the stored time untouched
    """
    with LogContext(user_id=event.user_id, action="notify"):
        if not args:
            await reply(ctx, event, NOTIFY_USAGE_MESSAGE)
            return {"status": "error", "error": "missing_time"}

        raw = args[0].strip()
        if not validate_time(raw):
            logger.warning(f"Invalid time format: {raw}")
            await reply(ctx, event, NOTIFY_INVALID_MESSAGE)
            return {"status": "error", "error": "invalid_time"}

        user = await require_user(ctx, event)
        if user is None:
            return {"status": "not_found"}

        user = await update_user(ctx.store, event.user_id, time=normalize_time(raw))
        await reply(ctx, event, NOTIFY_SUCCESS_MESSAGE.format(time=user.time))
        logger.info(f"Reminder time set to {user.time}")
        return {"status": "success", "time": user.time}


async def handle_time(ctx, event: InboundEvent) -> Dict[str, Any]:
    user = await require_user(ctx, event)
    if user is None:
        return {"status": "not_found"}

    now = utc_now()
    text = TIME_INFO_MESSAGE.format(
        utc_time=now.strftime("%H:%M"),
        timezone=user.timezone,
        offset=get_offset(user.timezone),
        local_time=local_hhmm(now, user.timezone),
        time=user.time,
    )
    await reply(ctx, event, text)
    return {"status": "success"}


async def handle_app(ctx, event: InboundEvent) -> Dict[str, Any]:
    url = ctx.settings.WEB_APP_URL
    if not url:
        await reply(ctx, event, APP_UNAVAILABLE_MESSAGE)
        return {"status": "error", "error": "web_app_not_configured"}

    await reply(ctx, event, APP_MESSAGE, app_keyboard(url))
    return {"status": "success"}
