"""News post database models and operations."""

from src.database.news.models import NewsPost
from src.database.news.operations import (
    create_news_post,
    get_news_post_by_id,
    get_news_post_by_slug,
    list_news_posts,
    slugify,
    update_news_post,
)

__all__ = [
    "NewsPost",
    "create_news_post",
    "get_news_post_by_id",
    "get_news_post_by_slug",
    "list_news_posts",
    "slugify",
    "update_news_post",
]
