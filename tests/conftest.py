import itertools

import pytest
from fastapi.testclient import TestClient
from telegram.error import BadRequest, TelegramError

from razvivayka.api.deps import get_app_context
from razvivayka.core.config import Settings
from razvivayka.core.context import AppContext
from razvivayka.main import app
from razvivayka.schemas.events import InboundEvent
from razvivayka.services.telegram_service import DEFAULT_PARSE_MODE


class FakeTransport:
    """
    Records outbound Telegram calls instead of sending them.
    """

    def __init__(self):
        self._ids = itertools.count(1000)
        self.sent = []
        self.edited = []
        self.deleted = []
        self.answered = []
        self.fail_edits = False
        self.fail_chats = set()

    async def send_message(self, chat_id, text, keyboard=None, parse_mode=DEFAULT_PARSE_MODE):
        if chat_id in self.fail_chats:
            raise TelegramError("Forbidden: bot was blocked by the user")
        message_id = next(self._ids)
        self.sent.append({"chat_id": chat_id, "message_id": message_id, "text": text, "keyboard": keyboard,
                          "parse_mode": parse_mode})
        return message_id

    async def edit_message(self, chat_id, message_id, text, keyboard=None):
        if self.fail_edits:
            raise BadRequest("Message to edit not found")
        self.edited.append({"chat_id": chat_id, "message_id": message_id, "text": text, "keyboard": keyboard})

    async def delete_message(self, chat_id, message_id):
        self.deleted.append((chat_id, message_id))
        return True

    async def answer_callback(self, callback_query_id, text=None):
        self.answered.append((callback_query_id, text))

    @property
    def texts(self):
        return [item["text"] for item in self.sent]


@pytest.fixture
def settings(tmp_path):
    return Settings(
        TELEGRAM_MODE="disabled",
        DATA_FILE=str(tmp_path / "users.json"),
        WEB_APP_URL="https://app.example.com",
    )


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def ctx(settings, transport):
    return AppContext.from_settings(settings, transport=transport)


@pytest.fixture
def api_client(ctx):
    app.dependency_overrides[get_app_context] = lambda: ctx
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def command():
    """Builds a slash-command event."""
    def make(text, user_id="42", chat_id=4200, message_id=1, username="anna", first_name="Анна"):
        return InboundEvent(
            user_id=user_id,
            chat_id=chat_id,
            username=username,
            first_name=first_name,
            message_id=message_id,
            text=text,
        )
    return make


@pytest.fixture
def button():
    """Builds an inline-button event."""
    def make(data, user_id="42", chat_id=4200, query_id="q1"):
        return InboundEvent(
            user_id=user_id,
            chat_id=chat_id,
            callback_data=data,
            callback_query_id=query_id,
        )
    return make
