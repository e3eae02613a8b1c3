"""Article catalog lookup."""

import functools

from innovateflow_progress.config import load_article_catalog
from innovateflow_progress.models.article import Article


@functools.lru_cache
def get_article_catalog() -> dict[int, Article]:
    """Catalog keyed by article id, loaded once from ``config/articles.yaml``."""
    articles = [Article(**data) for data in load_article_catalog()]
    return {article.id: article for article in articles}


def get_article(article_id: int) -> Article | None:
    return get_article_catalog().get(article_id)
