"""User record and the activity projection consumed by the progression core."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class UserRole(StrEnum):
    ADMINISTRATOR = "Administrator"
    READER = "Leitor"


class UserStatus(StrEnum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class UserActivity(BaseModel):
    """Fully-populated, read-only view of a user's engagement counters."""

    model_config = ConfigDict(frozen=True)

    read_article_ids: frozenset[int] = frozenset()
    comment_count: int = Field(default=0, ge=0)
    favorite_article_ids: frozenset[int] = frozenset()
    xp: int = Field(default=0, ge=0)

    @property
    def read_count(self) -> int:
        return len(self.read_article_ids)

    @property
    def favorite_count(self) -> int:
        return len(self.favorite_article_ids)


class UserRecord(BaseModel):
    """A stored user. Engagement fields may be missing on older records."""

    id: int
    name: str
    email: str
    role: UserRole = UserRole.READER
    status: UserStatus = UserStatus.ACTIVE
    avatar_url: str = ""
    phone: str | None = None
    favorites: list[int] | None = None
    read_article_ids: list[int] | None = None
    comment_count: int | None = None
    xp: int | None = None  # cache of compute_xp, rewritten on every mutation

    def activity(self) -> UserActivity:
        """Resolve missing engagement fields to their defaults."""
        return UserActivity(
            read_article_ids=frozenset(self.read_article_ids or ()),
            comment_count=self.comment_count or 0,
            favorite_article_ids=frozenset(self.favorites or ()),
            xp=self.xp or 0,
        )
