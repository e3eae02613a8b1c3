"""User record persistence (JSON + fcntl.flock + atomic write) and activity events."""

import contextlib
import fcntl
import json
import os
import tempfile
from collections.abc import Iterator
from pathlib import Path

import structlog
from pydantic import ValidationError

from innovateflow_progress.config import get_settings, load_seed_users
from innovateflow_progress.models.user import UserRecord
from innovateflow_progress.progression.xp import compute_activity_xp

logger = structlog.get_logger()

LOCK_FILENAME = ".users.lock"


class UserNotFoundError(LookupError):
    """Raised when no stored record exists for a user id."""

    def __init__(self, user_id: int):
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


def get_users_dir() -> Path:
    return get_settings().users_dir


def get_user_path(user_id: int) -> Path:
    return get_users_dir() / f"{user_id}.json"


@contextlib.contextmanager
def _store_lock() -> Iterator[None]:
    """Exclusive lock around a read-modify-write of the store."""
    lock_path = get_users_dir() / LOCK_FILENAME
    with open(lock_path, "w") as lock_file:
        fcntl.flock(lock_file, fcntl.LOCK_EX)
        try:
            yield
        finally:
            fcntl.flock(lock_file, fcntl.LOCK_UN)


def ensure_seeded() -> None:
    """Write the initial users when the store holds no records yet.

    Callers hold ``_store_lock`` so seeding cannot overwrite a concurrent event.
    """
    users_dir = get_users_dir()
    if any(users_dir.glob("*.json")):
        return
    try:
        seed = load_seed_users()
    except FileNotFoundError as e:
        logger.warning("seed_users_missing", error=str(e))
        return
    for data in seed:
        user = UserRecord(**data)
        user.xp = compute_activity_xp(user.activity())
        save_user(user)
        logger.info("user_seeded", user_id=user.id, xp=user.xp)


def _read_user(user_id: int) -> UserRecord:
    path = get_user_path(user_id)
    if not path.exists():
        raise UserNotFoundError(user_id)
    with open(path) as f:
        fcntl.flock(f, fcntl.LOCK_SH)
        data = json.load(f)
        fcntl.flock(f, fcntl.LOCK_UN)
    return UserRecord(**data)


def load_user(user_id: int) -> UserRecord:
    with _store_lock():
        ensure_seeded()
        return _read_user(user_id)


def save_user(user: UserRecord) -> None:
    path = get_user_path(user.id)
    with tempfile.NamedTemporaryFile("w", dir=path.parent, delete=False, suffix=".tmp") as tmp:
        json.dump(user.model_dump(mode="json"), tmp)
    os.replace(tmp.name, path)


def list_users() -> list[UserRecord]:
    """All stored users ordered by id. Unreadable records are skipped."""
    with _store_lock():
        ensure_seeded()
        paths = list(get_users_dir().glob("*.json"))
    users = []
    for path in paths:
        try:
            users.append(UserRecord(**json.loads(path.read_text())))
        except (json.JSONDecodeError, ValidationError):
            logger.warning("user_parse_error", path=str(path))
    return sorted(users, key=lambda u: u.id)


def _apply(user: UserRecord, **changes) -> UserRecord:
    for key, value in changes.items():
        setattr(user, key, value)
    # Recalculate from the full record on every update
    user.xp = compute_activity_xp(user.activity())
    save_user(user)
    logger.info("user_saved", user_id=user.id, xp=user.xp, fields=sorted(changes))
    return user


def update_user(user_id: int, **kwargs) -> UserRecord:
    with _store_lock():
        ensure_seeded()
        return _apply(_read_user(user_id), **kwargs)


def track_article_read(user_id: int, article_id: int) -> UserRecord:
    """Mark ``article_id`` as read. Reading the same article twice earns nothing."""
    with _store_lock():
        ensure_seeded()
        user = _read_user(user_id)
        read = user.read_article_ids or []
        if article_id in read:
            return user
        logger.info("article_read_tracked", user_id=user_id, article_id=article_id)
        return _apply(user, read_article_ids=[*read, article_id])


def increment_comment_count(user_id: int) -> UserRecord:
    """Count one posted comment or reply."""
    with _store_lock():
        ensure_seeded()
        user = _read_user(user_id)
        return _apply(user, comment_count=(user.comment_count or 0) + 1)


def toggle_favorite(user_id: int, article_id: int) -> UserRecord:
    """Add ``article_id`` to the favorites, or remove it if already there."""
    with _store_lock():
        ensure_seeded()
        user = _read_user(user_id)
        favorites = user.favorites or []
        if article_id in favorites:
            favorites = [fav for fav in favorites if fav != article_id]
        else:
            favorites = [*favorites, article_id]
        logger.info(
            "favorite_toggled",
            user_id=user_id,
            article_id=article_id,
            favorited=article_id in favorites,
        )
        return _apply(user, favorites=favorites)
