"""REST API routes for user progress, levels and activity events."""

import structlog
from fastapi import APIRouter, HTTPException, Path

from innovateflow_progress.models.progress import Challenge, LevelInfo, ProgressReport
from innovateflow_progress.models.user import UserRecord
from innovateflow_progress.progression.challenges import CHALLENGES
from innovateflow_progress.progression.levels import resolve_level
from innovateflow_progress.progression.report import build_progress_report
from innovateflow_progress.storage import users as user_store
from innovateflow_progress.storage.articles import get_article_catalog

logger = structlog.get_logger()
router = APIRouter(prefix="/api")

# Upper bound for /levels; the threshold walk grows with xp
MAX_LEVEL_XP = 10**12


def _report(user: UserRecord) -> ProgressReport:
    return build_progress_report(user, get_article_catalog())


def _load_user(user_id: int) -> UserRecord:
    try:
        return user_store.load_user(user_id)
    except user_store.UserNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")


def validate_article_id(article_id: int) -> int:
    if article_id not in get_article_catalog():
        logger.warning("unknown_article", article_id=article_id)
        raise HTTPException(status_code=404, detail="Article not found")
    return article_id


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/levels/{xp}")
def get_level(xp: int = Path(ge=0, le=MAX_LEVEL_XP)) -> LevelInfo:
    """Resolve the level for an XP total."""
    return resolve_level(xp)


@router.get("/challenges")
async def list_challenges() -> list[Challenge]:
    return CHALLENGES


@router.get("/users")
def list_users() -> list[dict]:
    """List users with their current XP and level."""
    summaries = []
    for user in user_store.list_users():
        report = _report(user)
        summaries.append({
            "id": user.id,
            "name": user.name,
            "role": user.role,
            "status": user.status,
            "xp": report.xp,
            "level": report.level.level,
        })
    return summaries


@router.get("/users/{user_id}/progress")
def get_progress(user_id: int) -> ProgressReport:
    """XP, level, challenge and badge state for one user."""
    return _report(_load_user(user_id))


@router.post("/users/{user_id}/reads/{article_id}")
def track_read(user_id: int, article_id: int) -> ProgressReport:
    article_id = validate_article_id(article_id)
    try:
        user = user_store.track_article_read(user_id, article_id)
    except user_store.UserNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    return _report(user)


@router.post("/users/{user_id}/comments")
def post_comment(user_id: int) -> ProgressReport:
    try:
        user = user_store.increment_comment_count(user_id)
    except user_store.UserNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    return _report(user)


@router.post("/users/{user_id}/favorites/{article_id}")
def toggle_favorite(user_id: int, article_id: int) -> ProgressReport:
    article_id = validate_article_id(article_id)
    try:
        user = user_store.toggle_favorite(user_id, article_id)
    except user_store.UserNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    return _report(user)
