"""
razvivayka/bot.py

Purpose: Telegram application wiring

- Builds the python-telegram-bot Application
- Converts updates into InboundEvents for the dispatcher
- Starts/stops polling or webhook delivery with the web app lifecycle
"""

from telegram import Update
from telegram.ext import Application, ApplicationBuilder, CommandHandler, CallbackQueryHandler, ContextTypes, filters

from razvivayka.core.context import AppContext
from razvivayka.core.logging import get_logger
from razvivayka.flow.actions import Command
from razvivayka.flow.dispatcher import dispatch_event
from razvivayka.schemas.events import parse_update
from razvivayka.services.telegram_service import TelegramService

logger = get_logger(__name__)

CTX_KEY = "ctx"


async def on_update(update: Update, context: ContextTypes.DEFAULT_TYPE):
    ctx: AppContext = context.application.bot_data[CTX_KEY]
    event = parse_update(update)
    if event is None:
        return
    await dispatch_event(ctx, event)


async def on_error(update: object, context: ContextTypes.DEFAULT_TYPE):
    logger.error(f"❌ Telegram update failed: {context.error}", exc_info=context.error)


def build_application(ctx: AppContext) -> Application:
    """
    Creates the Telegram application and registers handlers.
    """
    builder = ApplicationBuilder().token(ctx.settings.TELEGRAM_BOT_TOKEN)
    if ctx.settings.TELEGRAM_MODE == "webhook":
        # Updates arrive through the FastAPI webhook route instead
        builder = builder.updater(None)

    application = builder.build()
    application.bot_data[CTX_KEY] = ctx

    # Edited messages would replay old commands
    application.add_handler(CommandHandler(
        [command.value for command in Command],
        on_update,
        filters=filters.UpdateType.MESSAGE,
    ))
    application.add_handler(CallbackQueryHandler(on_update))
    application.add_error_handler(on_error)
    return application


def webhook_url(ctx: AppContext) -> str:
    return f"{ctx.settings.PUBLIC_URL.rstrip('/')}/telegram/webhook/{ctx.settings.TELEGRAM_BOT_TOKEN}"


async def start_bot(ctx: AppContext) -> Application:
    """
    Initializes the Telegram application and begins receiving updates.
    Sets ctx.transport and ctx.telegram_app.
    """
    application = build_application(ctx)
    await application.initialize()
    ctx.telegram_app = application
    ctx.transport = TelegramService(application.bot)

    logger.info(f"🤖 Bot initialized: @{application.bot.username}")

    await application.start()

    if ctx.settings.TELEGRAM_MODE == "webhook":
        await application.bot.set_webhook(url=webhook_url(ctx), drop_pending_updates=True)
        logger.info("Webhook registered")
    else:
        await application.updater.start_polling(drop_pending_updates=True)
        logger.info("Polling started")

    return application


async def stop_bot(ctx: AppContext):
    """
    Stops update delivery and releases the Telegram application.
    """
    application = ctx.telegram_app
    if application is None:
        return

    if application.updater is not None and application.updater.running:
        await application.updater.stop()
    if application.running:
        await application.stop()
    await application.shutdown()
    ctx.telegram_app = None
    logger.info("Telegram application stopped")
