from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from telegram import Chat, Message, Update
from telegram.ext import CallbackQueryHandler, CommandHandler

from razvivayka.bot import CTX_KEY, build_application, on_update, webhook_url


@pytest.fixture
def bot_ctx(ctx):
    ctx.settings.TELEGRAM_BOT_TOKEN = "123:abc"
    ctx.settings.TELEGRAM_MODE = "polling"
    return ctx


def command_message(text="/notify 08:15"):
    return Message(
        message_id=1,
        date=datetime(2024, 1, 1, tzinfo=timezone.utc),
        chat=Chat(id=4200, type=Chat.PRIVATE),
        text=text,
    )


def test_application_registers_handlers(bot_ctx):
    application = build_application(bot_ctx)
    handlers = application.handlers[0]

    assert isinstance(handlers[0], CommandHandler)
    assert {"start", "notify", "settings", "status", "help", "time", "app"} <= handlers[0].commands
    assert isinstance(handlers[1], CallbackQueryHandler)
    assert application.bot_data[CTX_KEY] is bot_ctx


def test_edited_commands_are_not_handled(bot_ctx):
    handler = build_application(bot_ctx).handlers[0][0]

    fresh = Update(update_id=1, message=command_message())
    edited = Update(update_id=2, edited_message=command_message())

    assert handler.filters.check_update(fresh)
    assert not handler.filters.check_update(edited)


def test_webhook_mode_has_no_updater(bot_ctx):
    bot_ctx.settings.TELEGRAM_MODE = "webhook"
    bot_ctx.settings.PUBLIC_URL = "https://bot.example.com/"

    application = build_application(bot_ctx)

    assert application.updater is None
    assert webhook_url(bot_ctx) == "https://bot.example.com/telegram/webhook/123:abc"


@pytest.mark.asyncio
async def test_on_update_dispatches_command(ctx, transport):
    update = SimpleNamespace(
        effective_user=SimpleNamespace(id=42, username="anna", first_name="Анна"),
        effective_chat=SimpleNamespace(id=4200),
        effective_message=SimpleNamespace(message_id=7, text="/start"),
        callback_query=None,
    )
    context = SimpleNamespace(application=SimpleNamespace(bot_data={CTX_KEY: ctx}))

    await on_update(update, context)

    assert ctx.store.load()[0].chat_id == 4200
    assert (4200, 7) in transport.deleted
