"""Tests for user storage and the activity events."""

import contextlib

import pytest

from innovateflow_progress.models.user import UserRecord
from innovateflow_progress.storage import users as user_store

SEED_USERS = [
    {
        "id": 2,
        "name": "Jane Doe",
        "email": "jane.doe@innovateflow.com",
        "favorites": [101, 3],
        "read_article_ids": [101, 2, 3, 4],
        "comment_count": 2,
        "xp": 0,
    },
    {"id": 3, "name": "John Smith", "email": "john.smith@innovateflow.com", "status": "Inactive"},
]


@pytest.fixture(autouse=True)
def patch_store(tmp_path, monkeypatch):
    monkeypatch.setattr(user_store, "get_users_dir", lambda: tmp_path)
    monkeypatch.setattr(user_store, "load_seed_users", lambda: SEED_USERS)


def test_seeding_recomputes_xp():
    jane = user_store.load_user(2)
    assert jane.name == "Jane Doe"
    assert jane.xp == 100


def test_seed_missing_file(monkeypatch):
    def _missing():
        raise FileNotFoundError("users.yaml")

    monkeypatch.setattr(user_store, "load_seed_users", _missing)
    assert user_store.list_users() == []


def test_list_users_sorted():
    assert [u.id for u in user_store.list_users()] == [2, 3]


def test_list_users_skips_corrupt(tmp_path):
    user_store.list_users()
    (tmp_path / "99.json").write_text("{not json")
    assert [u.id for u in user_store.list_users()] == [2, 3]


def test_unknown_user():
    with pytest.raises(user_store.UserNotFoundError):
        user_store.load_user(404)


def test_save_and_load():
    user = UserRecord(id=10, name="New", email="new@example.com", read_article_ids=[1])
    user_store.save_user(user)
    loaded = user_store.load_user(10)
    assert loaded.read_article_ids == [1]
    assert loaded.email == "new@example.com"


def test_track_article_read_is_idempotent():
    user = user_store.track_article_read(2, 5)
    assert user.xp == 110
    assert user.read_article_ids == [101, 2, 3, 4, 5]
    again = user_store.track_article_read(2, 5)
    assert again.xp == 110
    assert user_store.load_user(2).read_article_ids == [101, 2, 3, 4, 5]


def test_increment_comment_count():
    user = user_store.increment_comment_count(3)
    assert user.comment_count == 1
    assert user.xp == 25
    assert user_store.load_user(3).comment_count == 1


def test_toggle_favorite():
    added = user_store.toggle_favorite(2, 6)
    assert added.favorites == [101, 3, 6]
    assert added.xp == 105
    removed = user_store.toggle_favorite(2, 6)
    assert removed.favorites == [101, 3]
    assert removed.xp == 100


def test_update_user_recomputes_xp():
    user = user_store.update_user(3, read_article_ids=[1, 2], xp=5000)
    assert user.xp == 20


def test_events_on_unknown_user():
    with pytest.raises(user_store.UserNotFoundError):
        user_store.increment_comment_count(404)


def test_seeding_runs_under_store_lock(monkeypatch):
    held = []
    seeded_while = []

    @contextlib.contextmanager
    def _recording_lock():
        held.append(True)
        try:
            yield
        finally:
            held.pop()

    monkeypatch.setattr(user_store, "_store_lock", _recording_lock)
    monkeypatch.setattr(user_store, "ensure_seeded", lambda: seeded_while.append(bool(held)))

    user_store.list_users()
    with pytest.raises(user_store.UserNotFoundError):
        user_store.load_user(2)
    assert seeded_while == [True, True]


def test_seeding_keeps_existing_records():
    user_store.increment_comment_count(2)
    user_store.list_users()
    assert user_store.load_user(2).comment_count == 3
