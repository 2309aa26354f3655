from razvivayka.models.user import User


def test_status_for_unknown_user(api_client):
    response = api_client.get("/api/telegram/status/999")

    assert response.status_code == 200
    assert response.json() == {
        "connected": False,
        "enabled": False,
        "time": "19:00",
        "timezone": "Москва",
        "type": "motivational",
    }


def test_status_for_known_user(api_client, ctx):
    ctx.store.save([User(user_id="42", chat_id=4200, has_started=True, enabled=True,
                         time="07:30", timezone="Омск", reminder_type="streak")])

    data = api_client.get("/api/telegram/status/42").json()

    assert data == {
        "connected": True,
        "enabled": True,
        "time": "07:30",
        "timezone": "Омск",
        "type": "streak",
    }


def test_connect_creates_user(api_client, ctx):
    response = api_client.post("/api/telegram/connect", json={
        "userId": 42,
        "username": "anna",
        "settings": {"time": "8:30", "reminderType": "playful"},
    })

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert "/start" in body["message"]

    user = ctx.store.load()[0]
    assert user.user_id == "42"
    assert user.enabled is True
    assert user.time == "08:30"
    assert user.reminder_type == "playful"

    status = api_client.get("/api/telegram/status/42").json()
    assert status["connected"] is False
    assert status["enabled"] is True


def test_connect_for_started_user(api_client, ctx):
    ctx.store.save([User(user_id="42", chat_id=4200, has_started=True)])

    body = api_client.post("/api/telegram/connect", json={
        "userId": "42",
        "settings": {"time": "20:00", "reminderType": "simple"},
    }).json()

    assert body == {"success": True, "message": "Настройки сохранены, уведомления включены"}
    assert ctx.store.load()[0].chat_id == 4200


def test_connect_rejects_bad_settings(api_client, ctx):
    response = api_client.post("/api/telegram/connect", json={
        "userId": "42",
        "settings": {"time": "25:00", "reminderType": "loud"},
    })

    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert ctx.store.load() == []


def test_send_notification_unknown_user(api_client):
    response = api_client.post("/api/telegram/send-notification", json={"userId": "1", "message": "hi"})

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_send_notification_without_chat(api_client, ctx):
    ctx.store.save([User(user_id="1", enabled=True)])

    response = api_client.post("/api/telegram/send-notification", json={"userId": "1", "message": "hi"})

    assert response.status_code == 404


def test_send_notification_delivers(api_client, ctx, transport):
    ctx.store.save([User(user_id="1", chat_id=100, has_started=True)])

    response = api_client.post("/api/telegram/send-notification", json={"userId": 1, "message": "Пора заниматься"})

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert transport.sent[0]["chat_id"] == 100
    assert transport.sent[0]["text"] == "Пора заниматься"


def test_send_notification_delivery_failure(api_client, ctx, transport):
    ctx.store.save([User(user_id="1", chat_id=100, has_started=True)])
    transport.fail_chats.add(100)

    response = api_client.post("/api/telegram/send-notification", json={"userId": "1", "message": "hi"})

    assert response.status_code == 500
    assert response.json()["code"] == "DELIVERY_FAILED"


def test_send_notification_without_bot(api_client, ctx):
    ctx.store.save([User(user_id="1", chat_id=100, has_started=True)])
    ctx.transport = None

    response = api_client.post("/api/telegram/send-notification", json={"userId": "1", "message": "hi"})

    assert response.status_code == 500
    assert response.json()["code"] == "DELIVERY_FAILED"


def test_root_and_health(api_client, ctx):
    ctx.store.save([User(user_id="1", enabled=True), User(user_id="2")])

    root = api_client.get("/").json()
    assert root["status"] == "running"
    assert root["users"] == 2
    assert root["enabled"] == 1

    health = api_client.get("/health")
    assert health.status_code == 200
    assert health.json()["checks"]["store"] == "healthy"


def test_health_reports_corrupt_store(api_client, ctx):
    ctx.store.path.write_text("{", encoding="utf-8")

    response = api_client.get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"


def test_webhook_rejects_bad_token(api_client, ctx):
    ctx.settings.TELEGRAM_BOT_TOKEN = "123:secret"

    response = api_client.post("/telegram/webhook/wrong", json={"update_id": 1})

    assert response.status_code == 403
    assert response.json()["code"] == "HTTP_ERROR"


def test_webhook_without_running_bot(api_client, ctx):
    ctx.settings.TELEGRAM_BOT_TOKEN = "123:secret"

    response = api_client.post("/telegram/webhook/123:secret", json={"update_id": 1})

    assert response.status_code == 503


class FakeTelegramApp:
    bot = None

    def __init__(self):
        self.updates = []

    async def process_update(self, update):
        self.updates.append(update)


def test_webhook_feeds_update_to_application(api_client, ctx):
    ctx.settings.TELEGRAM_BOT_TOKEN = "123:secret"
    ctx.telegram_app = FakeTelegramApp()

    response = api_client.post("/telegram/webhook/123:secret", json={"update_id": 5})

    assert response.status_code == 200
    assert [update.update_id for update in ctx.telegram_app.updates] == [5]


def test_webhook_rejects_non_json_body(api_client, ctx):
    ctx.settings.TELEGRAM_BOT_TOKEN = "123:secret"
    ctx.telegram_app = FakeTelegramApp()

    response = api_client.post("/telegram/webhook/123:secret", content=b"not json")

    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert ctx.telegram_app.updates == []


def test_send_notification_uses_plain_text(api_client, ctx, transport):
    ctx.store.save([User(user_id="1", chat_id=100, has_started=True)])

    response = api_client.post("/api/telegram/send-notification", json={"userId": "1", "message": "Занятие_1 в 10:00"})

    assert response.status_code == 200
    assert transport.sent[0]["text"] == "Занятие_1 в 10:00"
    assert transport.sent[0]["parse_mode"] is None
