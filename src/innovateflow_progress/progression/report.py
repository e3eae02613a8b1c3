"""Progress report assembly for the achievements page."""

from collections.abc import Mapping

from innovateflow_progress.models.article import Article
from innovateflow_progress.models.progress import ProgressReport
from innovateflow_progress.models.user import UserRecord
from innovateflow_progress.progression.badges import evaluate_badges
from innovateflow_progress.progression.challenges import evaluate_challenges
from innovateflow_progress.progression.levels import resolve_level
from innovateflow_progress.progression.xp import compute_activity_xp


def build_progress_report(user: UserRecord, articles: Mapping[int, Article]) -> ProgressReport:
    """Build XP, level, challenge and badge state for ``user``.

    XP is recomputed from the activity counters; the cached ``xp`` field on
    the record is ignored.
    """
    activity = user.activity()
    xp = compute_activity_xp(activity)
    return ProgressReport(
        user_id=user.id,
        xp=xp,
        level=resolve_level(xp),
        challenges=evaluate_challenges(activity, articles),
        badges=evaluate_badges(activity),
    )
