"""Achievement badges unlocked by engagement counts."""

from collections.abc import Callable

from innovateflow_progress.models.progress import Badge, BadgeCounter, BadgeStatus
from innovateflow_progress.models.user import UserActivity

BADGES: list[Badge] = [
    Badge(id="reader-1", name="Leitor Iniciante", description="Leia seu primeiro artigo.",
          counter=BadgeCounter.READS, minimum=1),
    Badge(id="commenter-1", name="Comentarista", description="Faça seu primeiro comentário.",
          counter=BadgeCounter.COMMENTS, minimum=1),
    Badge(id="favorite-1", name="Curador", description="Salve seu primeiro favorito.",
          counter=BadgeCounter.FAVORITES, minimum=1),
    Badge(id="reader-5", name="Leitor Assíduo", description="Leia 5 artigos.",
          counter=BadgeCounter.READS, minimum=5),
    Badge(id="commenter-5", name="Debatedor", description="Faça 5 comentários.",
          counter=BadgeCounter.COMMENTS, minimum=5),
    Badge(id="reader-10", name="Super Leitor", description="Leia 10 artigos.",
          counter=BadgeCounter.READS, minimum=10),
]

COUNTERS: dict[BadgeCounter, Callable[[UserActivity], int]] = {
    BadgeCounter.READS: lambda activity: activity.read_count,
    BadgeCounter.COMMENTS: lambda activity: activity.comment_count,
    BadgeCounter.FAVORITES: lambda activity: activity.favorite_count,
}


def is_unlocked(badge: Badge, activity: UserActivity) -> bool:
    return COUNTERS[badge.counter](activity) >= badge.minimum


def evaluate_badges(activity: UserActivity, badges: list[Badge] | None = None) -> list[BadgeStatus]:
    """Unlock state of every badge, recomputed from current counts."""
    return [
        BadgeStatus(badge=badge, unlocked=is_unlocked(badge, activity))
        for badge in (badges if badges is not None else BADGES)
    ]
