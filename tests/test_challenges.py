"""Tests for challenge tracking, badges and the progress report."""

import pytest

from innovateflow_progress.models.article import Article
from innovateflow_progress.models.progress import BadgeCounter, ChallengeMetric
from innovateflow_progress.models.user import UserActivity, UserRecord
from innovateflow_progress.progression.badges import BADGES, COUNTERS, evaluate_badges
from innovateflow_progress.progression.challenges import (
    CHALLENGES,
    SELECTORS,
    compute_challenge_progress,
    distinct_categories_read,
    evaluate_challenges,
    science_favorites,
)
from innovateflow_progress.progression.report import build_progress_report

ARTICLES = {
    101: Article(id=101, category="Ética em IA", title="O Futuro da IA"),
    2: Article(id=2, category="Computação Quântica", title="Computação Quântica"),
    3: Article(id=3, category="Biohacking", title="Biohacking"),
    4: Article(id=4, category="Web3", title="Metaverso"),
    5: Article(id=5, category="Web3", title="DeFi"),
    6: Article(id=6, category="Ciência", title="Design Generativo"),
    8: Article(id=8, category="Ciência", title="Fusão Nuclear"),
}


class TestComputeChallengeProgress:
    def test_no_progress(self):
        result = compute_challenge_progress(0, 5)
        assert result.percentage == 0
        assert result.is_complete is False

    def test_exact_goal(self):
        result = compute_challenge_progress(5, 5)
        assert result.percentage == 100
        assert result.is_complete is True

    def test_overshoot_clamps(self):
        result = compute_challenge_progress(7, 5)
        assert result.percentage == 100
        assert result.is_complete is True

    def test_partial(self):
        result = compute_challenge_progress(4, 5)
        assert result.percentage == pytest.approx(80.0)
        assert result.is_complete is False


class TestSelectors:
    def test_every_challenge_has_selector(self):
        for challenge in CHALLENGES:
            assert challenge.selector in SELECTORS

    def test_every_metric_has_selector(self):
        assert set(SELECTORS) == set(ChallengeMetric)

    def test_distinct_categories(self):
        activity = UserActivity(read_article_ids=frozenset({4, 5, 6}))
        assert distinct_categories_read(activity, ARTICLES) == 2

    def test_unknown_articles_ignored(self):
        activity = UserActivity(
            read_article_ids=frozenset({999, 101}),
            favorite_article_ids=frozenset({999, 6}),
        )
        assert distinct_categories_read(activity, ARTICLES) == 1
        assert science_favorites(activity, ARTICLES) == 1

    def test_science_favorites(self):
        activity = UserActivity(favorite_article_ids=frozenset({6, 8, 101}))
        assert science_favorites(activity, ARTICLES) == 2


class TestEvaluateChallenges:
    def test_empty_activity(self):
        statuses = evaluate_challenges(UserActivity(), ARTICLES)
        assert [s.challenge.id for s in statuses] == [c.id for c in CHALLENGES]
        assert all(s.progress == 0 and not s.is_complete for s in statuses)

    def test_mixed_progress(self):
        activity = UserActivity(
            read_article_ids=frozenset({101, 2, 3, 4}),
            comment_count=2,
            favorite_article_ids=frozenset({101, 3}),
        )
        by_id = {s.challenge.id: s for s in evaluate_challenges(activity, ARTICLES)}
        assert by_id["versatile-reader"].progress == 4
        assert by_id["versatile-reader"].percentage == 100
        assert by_id["active-voice"].is_complete is True
        assert by_id["science-curator"].progress == 0
        assert by_id["marathon-reader"].percentage == pytest.approx(80.0)
        assert by_id["marathon-reader"].is_complete is False


class TestBadges:
    def test_catalog_size(self):
        assert len(BADGES) == 6

    def test_every_counter_is_evaluated(self):
        assert set(COUNTERS) == set(BadgeCounter)

    def test_nothing_unlocked(self):
        assert not any(s.unlocked for s in evaluate_badges(UserActivity()))

    def test_unlock_thresholds(self):
        activity = UserActivity(
            read_article_ids=frozenset(range(5)),
            comment_count=1,
        )
        unlocked = {s.badge.id for s in evaluate_badges(activity) if s.unlocked}
        assert unlocked == {"reader-1", "commenter-1", "reader-5"}


class TestProgressReport:
    def test_recomputes_stale_xp(self):
        user = UserRecord(
            id=7,
            name="Reader",
            email="reader@example.com",
            read_article_ids=[1, 2, 3, 4, 5],
            comment_count=2,
            favorites=[6],
            xp=9999,
        )
        report = build_progress_report(user, ARTICLES)
        assert report.user_id == 7
        assert report.xp == 105
        assert report.level.level == 2
        assert report.level.xp_into_level == 5
        assert len(report.challenges) == len(CHALLENGES)
        assert len(report.badges) == len(BADGES)

    def test_challenge_reward_not_credited(self):
        user = UserRecord(id=8, name="Talker", email="t@example.com", comment_count=2)
        report = build_progress_report(user, ARTICLES)
        completed = [s for s in report.challenges if s.is_complete]
        assert [s.challenge.id for s in completed] == ["active-voice"]
        assert report.xp == 50
