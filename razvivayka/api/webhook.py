"""
razvivayka/api/webhook.py

Purpose: Telegram webhook endpoint

- Receives updates when TELEGRAM_MODE=webhook
- Rejects requests whose path token does not match the bot token
- Hands the update to the Telegram application
"""

import hmac

from fastapi import APIRouter, Depends, Request, HTTPException
from telegram import Update

from razvivayka.api.deps import get_app_context
from razvivayka.core.context import AppContext
from razvivayka.core.exceptions import ValidationError
from razvivayka.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter()


@router.post("/webhook/{token}")
async def telegram_webhook(token: str, request: Request, ctx: AppContext = Depends(get_app_context)):
    expected = ctx.settings.TELEGRAM_BOT_TOKEN or ""
    if not expected or not hmac.compare_digest(token.encode(), expected.encode()):
        logger.warning("Webhook call with a bad token")
        raise HTTPException(status_code=403, detail="Bad token")

    if ctx.telegram_app is None:
        raise HTTPException(status_code=503, detail="Bot is not running")

    try:
        payload = await request.json()
    except ValueError as e:
        raise ValidationError("Update body is not valid JSON") from e

    update = Update.de_json(payload, ctx.telegram_app.bot)
    await ctx.telegram_app.process_update(update)
    return {"ok": True}
