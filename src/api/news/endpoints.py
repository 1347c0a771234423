"""API endpoints for reading and editing news posts."""

import logging
import time
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError

from src.api.dependencies import is_admin, json_body, require_admin
from src.api.news.models import CreateNewsPostRequest, NewsPostResponse, UpdateNewsPostRequest
from src.database.connection import get_session
from src.database.news import (
    NewsPost,
    create_news_post,
    get_news_post_by_id,
    get_news_post_by_slug,
    list_news_posts,
    update_news_post,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/news", tags=["News"])


def _post_to_response(post: NewsPost) -> NewsPostResponse:
    """Convert a news post model to response.

    :param post: The database model.
    :returns: API response model.
    """
    return NewsPostResponse(
        id=post.id,
        title=post.title,
        content=post.content,
        image_url=post.image_url,
        published=post.published,
        slug=post.slug,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


def _database_error(action: str, error: SQLAlchemyError) -> HTTPException:
    logger.exception(f"{action} failed: {error}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )


@router.get(
    "",
    response_model=NewsPostResponse | list[NewsPostResponse],
    summary="Get or list news posts",
)
def get_news(
    post_id: int | None = Query(None, alias="id", description="Post ID"),
    slug: str | None = Query(None, description="Post slug"),
    admin: bool = Depends(is_admin),
) -> NewsPostResponse | list[NewsPostResponse]:
    """Get a single post by id or slug, or list all posts newest first.

    Anonymous callers only ever see published posts; an unpublished post
    looked up by id or slug is reported as not found.
    """
    start = time.perf_counter()
    logger.info(f"Get news: id={post_id}, slug={slug!r}, admin={admin}")

    try:
        with get_session() as session:
            if post_id is not None or slug:
                if post_id is not None:
                    post = get_news_post_by_id(session, post_id, include_unpublished=admin)
                else:
                    post = get_news_post_by_slug(session, slug, include_unpublished=admin)
                if post is None:
                    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
                result: NewsPostResponse | list[NewsPostResponse] = _post_to_response(post)
            else:
                posts = list_news_posts(session, include_unpublished=admin)
                result = [_post_to_response(p) for p in posts]
    except SQLAlchemyError as e:
        raise _database_error("Get news", e) from e

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"Get news complete: elapsed={elapsed_ms:.0f}ms")

    return result


@router.post(
    "",
    response_model=NewsPostResponse,
    summary="Create news post",
)
def create_news(
    _: None = Depends(require_admin),
    body: dict[str, Any] = Depends(json_body),
) -> NewsPostResponse:
    """Create a news post. Requires the admin token.

    The slug is derived from the title.
    """
    start = time.perf_counter()
    request = CreateNewsPostRequest.model_validate(body)

    if not request.title or not request.content:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing title or content",
        )

    logger.info(f"Create news post: title={request.title[:50]!r}, published={request.published}")

    try:
        with get_session() as session:
            post = create_news_post(
                session,
                title=request.title,
                content=request.content,
                image_url=request.image_url,
                published=bool(request.published),
            )
            response = _post_to_response(post)
    except SQLAlchemyError as e:
        raise _database_error("Create news post", e) from e

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"Create news post complete: id={response.id}, elapsed={elapsed_ms:.0f}ms")

    return response


@router.put(
    "",
    response_model=NewsPostResponse,
    summary="Update news post",
)
def update_news(
    _: None = Depends(require_admin),
    body: dict[str, Any] = Depends(json_body),
) -> NewsPostResponse:
    """Partially update a news post. Requires the admin token.

    Fields that are omitted or null keep their stored value.
    """
    start = time.perf_counter()
    request = UpdateNewsPostRequest.model_validate(body)

    if request.id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing id")

    logger.info(f"Update news post: id={request.id}")

    try:
        with get_session() as session:
            post = update_news_post(
                session,
                request.id,
                title=request.title,
                content=request.content,
                image_url=request.image_url,
                published=request.published,
            )
            if post is None:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
            response = _post_to_response(post)
    except SQLAlchemyError as e:
        raise _database_error("Update news post", e) from e

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"Update news post complete: id={request.id}, elapsed={elapsed_ms:.0f}ms")

    return response
