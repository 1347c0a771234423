"""Database operations for news posts."""

import logging
import re
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from src.database.news.models import NewsPost

logger = logging.getLogger(__name__)

_SLUG_INVALID_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE_RUN = re.compile(r"\s+")


def slugify(title: str) -> str:
    """Derive a URL slug from a post title.

    Lowercases the title, drops everything except ASCII letters, digits,
    whitespace and hyphens, then joins the remaining words with hyphens.

    :param title: The post title.
    :returns: The slug, e.g. ``"Hello, World!"`` -> ``"hello-world"``.
    """
    cleaned = _SLUG_INVALID_CHARS.sub("", title.lower()).strip()
    return _WHITESPACE_RUN.sub("-", cleaned)


def create_news_post(
    session: Session,
    *,
    title: str,
    content: str,
    image_url: str | None = None,
    published: bool = False,
) -> NewsPost:
    """Create a news post.

    :param session: The database session.
    :param title: Post title; also the source of the slug.
    :param content: Post body.
    :param image_url: Optional header image URL.
    :param published: Whether the post is visible to anonymous readers.
    :returns: The created post with its generated ID.
    """
    now = datetime.now(UTC)
    post = NewsPost(
        title=title,
        content=content,
        image_url=image_url or None,
        published=published,
        slug=slugify(title),
        created_at=now,
        updated_at=now,
    )
    session.add(post)
    session.flush()

    logger.info(f"Created news post: id={post.id}, slug={post.slug!r}, published={published}")
    return post


def get_news_post_by_id(
    session: Session,
    post_id: int,
    *,
    include_unpublished: bool = False,
) -> NewsPost | None:
    """Get a news post by its ID.

    :param session: The database session.
    :param post_id: The post ID.
    :param include_unpublished: If False, unpublished posts are treated as missing.
    :returns: The post, or None if not found.
    """
    query = session.query(NewsPost).filter(NewsPost.id == post_id)
    if not include_unpublished:
        query = query.filter(NewsPost.published.is_(True))
    return query.first()


def get_news_post_by_slug(
    session: Session,
    slug: str,
    *,
    include_unpublished: bool = False,
) -> NewsPost | None:
    """Get a news post by its slug.

    Slugs are not unique; the newest matching post wins.

    :param session: The database session.
    :param slug: The post slug.
    :param include_unpublished: If False, unpublished posts are treated as missing.
    :returns: The post, or None if not found.
    """
    query = session.query(NewsPost).filter(NewsPost.slug == slug)
    if not include_unpublished:
        query = query.filter(NewsPost.published.is_(True))
    return query.order_by(NewsPost.created_at.desc()).first()


def list_news_posts(session: Session, *, include_unpublished: bool = False) -> list[NewsPost]:
    """List news posts, newest first.

    :param session: The database session.
    :param include_unpublished: Include posts that are not published.
    :returns: List of posts ordered by created_at descending.
    """
    query = session.query(NewsPost)
    if not include_unpublished:
        query = query.filter(NewsPost.published.is_(True))
    return query.order_by(NewsPost.created_at.desc()).all()


def update_news_post(  # noqa: PLR0913
    session: Session,
    post_id: int,
    *,
    title: str | None = None,
    content: str | None = None,
    image_url: str | None = None,
    published: bool | None = None,
) -> NewsPost | None:
    """Partially update a news post.

    Fields passed as None keep their stored value. The slug is left untouched
    so that existing links keep working after a title edit.

    :param session: The database session.
    :param post_id: The post ID.
    :param title: New title.
    :param content: New body.
    :param image_url: New header image URL.
    :param published: New visibility flag.
    :returns: The updated post, or None if not found.
    """
    post = session.query(NewsPost).filter(NewsPost.id == post_id).first()
    if post is None:
        return None

    if title is not None:
        post.title = title
    if content is not None:
        post.content = content
    if image_url is not None:
        post.image_url = image_url
    if published is not None:
        post.published = published
    post.updated_at = datetime.now(UTC)

    session.flush()
    logger.info(f"Updated news post: id={post_id}, published={post.published}")
    return post
