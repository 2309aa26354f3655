"""
razvivayka/api/telegram.py

Purpose: Companion web app API

- Status lookup by Telegram user id
- Connect (upsert settings and enable reminders)
- Immediate notification delivery
"""

from fastapi import APIRouter, Depends
from telegram.error import TelegramError

from razvivayka.api.deps import get_app_context
from razvivayka.core.context import AppContext
from razvivayka.core.exceptions import ResourceNotFoundError, NotificationDeliveryError
from razvivayka.core.logging import get_logger, LogContext
from razvivayka.schemas.telegram import (
    ConnectRequest,
    ConnectResponse,
    StatusResponse,
    SendNotificationRequest,
    SendNotificationResponse,
)
from razvivayka.services.user_service import get_user, connect_user

logger = get_logger(__name__)
router = APIRouter()


@router.get("/status/{user_id}", response_model=StatusResponse)
async def get_status(user_id: str, ctx: AppContext = Depends(get_app_context)):
    """
    Returns the user's reminder settings, or defaults for unknown ids.
    """
    user = await get_user(ctx.store, user_id)
    if user is None:
        return StatusResponse()

    return StatusResponse(
        connected=user.has_started,
        enabled=user.enabled,
        time=user.time,
        timezone=user.timezone,
        type=user.reminder_type,
    )


@router.post("/connect", response_model=ConnectResponse)
async def connect(payload: ConnectRequest, ctx: AppContext = Depends(get_app_context)):
    """
    Creates or updates a user from the web app and enables reminders.
    """
    with LogContext(user_id=payload.user_id):
        user, created = await connect_user(
            ctx.store,
            user_id=payload.user_id,
            username=payload.username,
            time=payload.settings.time,
            reminder_type=payload.settings.reminder_type,
            timezone=payload.settings.timezone,
        )

    if user.has_started:
        message = "Настройки сохранены, уведомления включены"
    else:
        message = "Настройки сохранены. Отправьте /start боту, чтобы получать уведомления"

    return ConnectResponse(success=True, message=message)


@router.post("/send-notification", response_model=SendNotificationResponse)
async def send_notification(payload: SendNotificationRequest, ctx: AppContext = Depends(get_app_context)):
    """
    Delivers a message to the user's chat right away.

    Raises:
        ResourceNotFoundError: Unknown user or chat not yet known
        NotificationDeliveryError: Telegram rejected the message
    """
    with LogContext(user_id=payload.user_id):
        user = await get_user(ctx.store, payload.user_id)
        if user is None or user.chat_id is None:
            raise ResourceNotFoundError(
                message="User not found or has not started the bot",
                details={"userId": payload.user_id},
            )

        if ctx.transport is None:
            raise NotificationDeliveryError("Telegram transport is not running")

        try:
            # Free text from the web app is not Markdown
            await ctx.transport.send_message(user.chat_id, payload.message, parse_mode=None)
        except TelegramError as e:
            logger.error(f"❌ Failed to send notification: {e}")
            raise NotificationDeliveryError(details=str(e)) from e

        logger.info("📤 Notification sent on web app request")
        return SendNotificationResponse(success=True)
