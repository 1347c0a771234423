"""API endpoint proxying Brave web search."""

import logging
import time
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import json_body
from src.api.web_search.models import WebSearchRequest, WebSearchResponse
from src.search import BraveSearchClient, SearchClientError, clamp_result_count
from src.utils.config import AppSettings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/web-search", tags=["Search"])


@router.post(
    "",
    response_model=WebSearchResponse,
    summary="Search the web",
)
def web_search(
    body: dict[str, Any] = Depends(json_body),
    settings: AppSettings = Depends(get_settings),
) -> WebSearchResponse:
    """Run a web search and return simplified results."""
    start = time.perf_counter()

    if not settings.brave_api_key:
        logger.error("Web search called without BRAVE_API_KEY")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="BRAVE_API_KEY not set",
        )

    request = WebSearchRequest.model_validate(body)
    if not request.query:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing query")

    count = clamp_result_count(request.limit)
    logger.info(f"Web search: query={request.query[:50]!r}, count={count}")

    client = BraveSearchClient(api_key=settings.brave_api_key, timeout=settings.search_timeout)
    try:
        results = client.search(request.query, count=count)
    except SearchClientError as e:
        logger.error(f"Web search failed: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)) from e

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"Web search complete: results={len(results)}, elapsed={elapsed_ms:.0f}ms")

    return WebSearchResponse(results=results)
