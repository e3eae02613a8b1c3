"""Derived progression models: levels, challenges, badges."""

from enum import StrEnum

from pydantic import BaseModel, Field, computed_field


class LevelInfo(BaseModel):
    """Level derived from an XP total."""

    level: int = 1
    base_xp: int = 0  # XP at which this level was entered
    xp_into_level: int = 0
    xp_to_next_level: int = 100  # total XP span of the current level
    progress_percentage: float = 0.0

    @computed_field
    @property
    def xp_remaining(self) -> int:
        """XP still needed to enter the next level."""
        return self.xp_to_next_level - self.xp_into_level


class ChallengeProgress(BaseModel):
    """Presentation-ready progress of a single challenge."""

    percentage: float
    is_complete: bool


class ChallengeMetric(StrEnum):
    """What a challenge counts; keys of ``progression.challenges.SELECTORS``."""

    DISTINCT_CATEGORIES_READ = "distinct_categories_read"
    COMMENTS_POSTED = "comments_posted"
    SCIENCE_FAVORITES = "science_favorites"
    ARTICLES_READ = "articles_read"


class BadgeCounter(StrEnum):
    READS = "reads"
    COMMENTS = "comments"
    FAVORITES = "favorites"


class Challenge(BaseModel):
    """A fixed engagement goal.

    ``selector`` picks the function that counts the user's progress toward
    ``goal``.
    """

    id: str
    name: str
    description: str
    goal: int = Field(gt=0)
    reward_xp: int = Field(ge=0)
    selector: ChallengeMetric


class ChallengeStatus(BaseModel):
    challenge: Challenge
    progress: int
    percentage: float
    is_complete: bool


class Badge(BaseModel):
    """An achievement unlocked once ``counter`` reaches ``minimum``."""

    id: str
    name: str
    description: str
    counter: BadgeCounter
    minimum: int = Field(gt=0)


class BadgeStatus(BaseModel):
    badge: Badge
    unlocked: bool


class ProgressReport(BaseModel):
    """Everything the achievements page shows for one user."""

    user_id: int
    xp: int
    level: LevelInfo
    challenges: list[ChallengeStatus] = Field(default_factory=list)
    badges: list[BadgeStatus] = Field(default_factory=list)
