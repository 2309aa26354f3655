import json

import pytest

from razvivayka.core.exceptions import StorageError
from razvivayka.db.store import UserStore, find_user
from razvivayka.models.user import User
from razvivayka.services.user_service import update_user


def test_missing_file_loads_empty(tmp_path):
    store = UserStore(tmp_path / "nope.json")
    assert store.load() == []
    assert store.is_readable()


def test_save_and_load(tmp_path):
    store = UserStore(tmp_path / "users.json")
    users = [
        User(user_id=42, chat_id=4200, username="anna", time="8:15", has_started=True),
        User(user_id="7", timezone="Омск", reminder_type="playful", enabled=True),
    ]
    store.save(users)

    loaded = store.load()
    assert [user.user_id for user in loaded] == ["42", "7"]
    assert loaded[0].time == "08:15"
    assert loaded[0].chat_id == 4200
    assert loaded[1].timezone == "Омск"
    assert loaded[1].reminder_type == "playful"
    assert loaded[1].enabled is True


def test_file_layout_is_camel_case(tmp_path):
    path = tmp_path / "users.json"
    UserStore(path).save([User(user_id="42", chat_id=4200, has_started=True)])

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["notifications"] == []
    record = payload["users"][0]
    assert record["userId"] == "42"
    assert record["chatId"] == 4200
    assert record["hasStarted"] is True
    assert record["reminderType"] == "motivational"
    assert "lastActive" in record
    assert "createdAt" in record


def test_save_leaves_no_temp_files(tmp_path):
    store = UserStore(tmp_path / "users.json")
    store.save([User(user_id="1")])
    store.save([User(user_id="1"), User(user_id="2")])

    assert sorted(p.name for p in tmp_path.iterdir()) == ["users.json"]
    assert len(store.load()) == 2


def test_save_creates_parent_directory(tmp_path):
    store = UserStore(tmp_path / "data" / "users.json")
    store.save([User(user_id="1")])
    assert len(store.load()) == 1


def test_corrupt_file_loads_empty(tmp_path):
    path = tmp_path / "users.json"
    path.write_text("{not json", encoding="utf-8")
    store = UserStore(path)

    assert store.load() == []
    assert not store.is_readable()


def test_unexpected_layout_loads_empty(tmp_path):
    path = tmp_path / "users.json"
    path.write_text(json.dumps({"users": "oops"}), encoding="utf-8")
    assert UserStore(path).load() == []


def test_malformed_record_is_skipped(tmp_path):
    path = tmp_path / "users.json"
    path.write_text(json.dumps({
        "users": [
            {"userId": "1", "time": "99:99"},
            {"userId": "2", "time": "07:30"},
        ],
        "notifications": [{"legacy": True}],
    }), encoding="utf-8")

    users = UserStore(path).load()
    assert [user.user_id for user in users] == ["2"]


def test_legacy_record_gets_defaults(tmp_path):
    path = tmp_path / "users.json"
    path.write_text(json.dumps({"users": [{"userId": "5", "chatId": 500}]}), encoding="utf-8")

    user = UserStore(path).load()[0]
    assert user.enabled is False
    assert user.time == "19:00"
    assert user.timezone == "Москва"
    assert user.reminder_type == "motivational"


def test_save_failure_raises_storage_error(tmp_path):
    target = tmp_path / "users.json"
    target.mkdir()
    store = UserStore(target)

    with pytest.raises(StorageError):
        store.save([User(user_id="1")])

    assert [p.name for p in tmp_path.iterdir()] == ["users.json"]


def test_find_user_accepts_int_ids():
    users = [User(user_id="1"), User(user_id="2")]
    assert find_user(users, 2).user_id == "2"
    assert find_user(users, "3") is None


@pytest.mark.asyncio
async def test_malformed_record_survives_unrelated_update(tmp_path):
    path = tmp_path / "users.json"
    path.write_text(json.dumps({
        "users": [
            {"userId": "1", "time": "09:00"},
            {"userId": "2", "time": "9:5"},
        ],
    }), encoding="utf-8")
    store = UserStore(path)

    await update_user(store, "1", enabled=True)

    records = json.loads(path.read_text(encoding="utf-8"))["users"]
    assert [record["userId"] for record in records] == ["1", "2"]
    assert records[0]["enabled"] is True
    assert records[1] == {"userId": "2", "time": "9:5"}


def test_valid_user_replaces_malformed_record(tmp_path):
    path = tmp_path / "users.json"
    path.write_text(json.dumps({"users": [{"userId": "2", "time": "9:5"}]}), encoding="utf-8")
    store = UserStore(path)

    store.save([User(user_id="2", time="09:05")])

    records = json.loads(path.read_text(encoding="utf-8"))["users"]
    assert len(records) == 1
    assert records[0]["time"] == "09:05"
