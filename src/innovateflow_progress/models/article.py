"""Article catalog model."""

from enum import StrEnum

from pydantic import BaseModel


class ArticleStatus(StrEnum):
    PUBLISHED = "published"
    DRAFT = "draft"
    INACTIVE = "inactive"


class Article(BaseModel):
    id: int
    category: str
    title: str
    status: ArticleStatus = ArticleStatus.PUBLISHED
