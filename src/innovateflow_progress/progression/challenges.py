"""Challenge catalog and progress tracking.

Completion is recomputed from the current counts on every call. Nothing here
stores a completed flag or credits the challenge reward to the user's XP;
``reward_xp`` is shown only.
"""

from collections.abc import Callable, Mapping

from innovateflow_progress.models.article import Article
from innovateflow_progress.models.progress import (
    Challenge,
    ChallengeMetric,
    ChallengeProgress,
    ChallengeStatus,
)
from innovateflow_progress.models.user import UserActivity

SCIENCE_CATEGORY = "Ciência"

ProgressSelector = Callable[[UserActivity, Mapping[int, Article]], int]


def compute_challenge_progress(progress: int, goal: int) -> ChallengeProgress:
    """Percentage toward ``goal``, clamped to 100, and whether it is met."""
    return ChallengeProgress(
        percentage=min(progress / goal * 100, 100),
        is_complete=progress >= goal,
    )


def distinct_categories_read(activity: UserActivity, articles: Mapping[int, Article]) -> int:
    return len({
        articles[article_id].category
        for article_id in activity.read_article_ids
        if article_id in articles
    })


def comments_posted(activity: UserActivity, articles: Mapping[int, Article]) -> int:
    return activity.comment_count


def science_favorites(activity: UserActivity, articles: Mapping[int, Article]) -> int:
    return sum(
        1
        for article_id in activity.favorite_article_ids
        if article_id in articles and articles[article_id].category == SCIENCE_CATEGORY
    )


def articles_read(activity: UserActivity, articles: Mapping[int, Article]) -> int:
    return activity.read_count


SELECTORS: dict[ChallengeMetric, ProgressSelector] = {
    ChallengeMetric.DISTINCT_CATEGORIES_READ: distinct_categories_read,
    ChallengeMetric.COMMENTS_POSTED: comments_posted,
    ChallengeMetric.SCIENCE_FAVORITES: science_favorites,
    ChallengeMetric.ARTICLES_READ: articles_read,
}

CHALLENGES: list[Challenge] = [
    Challenge(
        id="versatile-reader",
        name="Leitor Versátil",
        description="Leia artigos de 3 categorias diferentes.",
        goal=3,
        reward_xp=50,
        selector=ChallengeMetric.DISTINCT_CATEGORIES_READ,
    ),
    Challenge(
        id="active-voice",
        name="Voz Ativa",
        description="Deixe 2 comentários construtivos.",
        goal=2,
        reward_xp=75,
        selector=ChallengeMetric.COMMENTS_POSTED,
    ),
    Challenge(
        id="science-curator",
        name="Curador de Ciência",
        description="Salve 2 artigos de 'Ciência' nos seus favoritos.",
        goal=2,
        reward_xp=50,
        selector=ChallengeMetric.SCIENCE_FAVORITES,
    ),
    Challenge(
        id="marathon-reader",
        name="Maratonista",
        description="Leia um total de 5 artigos.",
        goal=5,
        reward_xp=100,
        selector=ChallengeMetric.ARTICLES_READ,
    ),
]


def evaluate_challenges(
    activity: UserActivity,
    articles: Mapping[int, Article],
    challenges: list[Challenge] | None = None,
) -> list[ChallengeStatus]:
    """Run each challenge's selector and tracker against ``activity``.

    Args:
        activity: The user's engagement counters.
        articles: Catalog keyed by article id; read or favorite ids missing
            from it do not count toward category-based challenges.
        challenges: Catalog to evaluate, defaults to ``CHALLENGES``.

    Returns:
        One status per challenge, in catalog order.
    """
    statuses = []
    for challenge in challenges if challenges is not None else CHALLENGES:
        progress = SELECTORS[challenge.selector](activity, articles)
        result = compute_challenge_progress(progress, challenge.goal)
        statuses.append(ChallengeStatus(
            challenge=challenge,
            progress=progress,
            percentage=result.percentage,
            is_complete=result.is_complete,
        ))
    return statuses
