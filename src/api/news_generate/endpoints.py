"""API endpoint for generating Swedish news articles."""

import logging
import time
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import json_body
from src.api.news_generate.models import (
    GenerationMetadata,
    NewsGenerateRequest,
    NewsGenerateResponse,
    SourceLink,
)
from src.generation.articles import (
    ArticleSource,
    build_article_prompt,
    check_article_length,
    format_source_citations,
    split_article,
    validate_topic,
)
from src.generation.exceptions import GenerationClientError, ProviderNotConfiguredError
from src.generation.gemini import GeminiClient
from src.generation.openai_client import (
    ARTICLE_PROMPT_VERSION,
    INCLUDE_REASONING,
    INCLUDE_SEARCH_SOURCES,
    OpenAIResponsesClient,
    extract_sources,
    extract_text,
)
from src.search import BraveSearchClient, SearchClientError
from src.utils.config import AppSettings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/news-generate", tags=["Generation"])

DEFAULT_PROVIDER = "gemini"

# Search results put into the Gemini prompt
ARTICLE_SOURCE_COUNT = 5


def generate_with_openai(topic: str, settings: AppSettings) -> tuple[str, list[SourceLink]]:
    """Generate article text with the stored OpenAI prompt and its web search.

    :param topic: The sanitised topic.
    :param settings: Application settings.
    :returns: The raw article text and the sources the model searched.
    :raises ProviderNotConfiguredError: If OPENAI_API_KEY is not set.
    :raises GenerationClientError: If the call fails or yields no text.
    """
    if not settings.openai_api_key:
        raise ProviderNotConfiguredError("OPENAI_API_KEY")

    client = OpenAIResponsesClient(
        api_key=settings.openai_api_key,
        timeout=settings.openai_timeout,
        max_retries=settings.openai_max_retries,
    )
    response = client.create(
        topic,
        prompt_version=ARTICLE_PROMPT_VERSION,
        include=[INCLUDE_REASONING, INCLUDE_SEARCH_SOURCES],
    )

    text = extract_text(response)
    if not text:
        logger.error("OpenAI prompt returned no text")
        raise GenerationClientError("Ingen text genererades av OpenAI")

    sources = [SourceLink(**source) for source in extract_sources(response)]
    return text, sources


def search_article_sources(topic: str, settings: AppSettings) -> list[ArticleSource]:
    """Look up web sources for a topic, if search is configured.

    A failed search is logged and yields no sources.

    :param topic: The sanitised topic.
    :param settings: Application settings.
    :returns: Sources to cite in the article.
    """
    if not settings.brave_api_key:
        return []

    client = BraveSearchClient(api_key=settings.brave_api_key, timeout=settings.search_timeout)
    try:
        results = client.search(topic, count=ARTICLE_SOURCE_COUNT)
    except SearchClientError as e:
        logger.warning(f"Source search failed, generating without sources: {e}")
        return []

    return [
        ArticleSource(title=result.title or result.url, url=result.url, snippet=result.snippet)
        for result in results
        if result.url
    ]


def generate_with_gemini(topic: str, settings: AppSettings) -> tuple[str, list[SourceLink]]:
    """Generate article text with Gemini, grounded on web search results when available.

    :param topic: The sanitised topic.
    :param settings: Application settings.
    :returns: The raw article text and the sources given to the model.
    :raises ProviderNotConfiguredError: If GEMINI_API_KEY is not set.
    :raises GenerationClientError: If the call fails or yields no text.
    """
    if not settings.gemini_api_key:
        raise ProviderNotConfiguredError("GEMINI_API_KEY")

    sources = search_article_sources(topic, settings)
    logger.info(f"Generating with Gemini: sources={len(sources)}")

    client = GeminiClient(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        timeout=settings.gemini_timeout,
    )
    text = client.generate_content(build_article_prompt(topic, sources))

    if sources:
        title, content = split_article(text)
        text = f"{title}\n{content}{format_source_citations(sources)}"

    return text, [SourceLink(title=source.title, url=source.url) for source in sources]


@router.post(
    "",
    response_model=NewsGenerateResponse,
    summary="Generate news article",
)
def news_generate(
    body: dict[str, Any] = Depends(json_body),
    settings: AppSettings = Depends(get_settings),
) -> NewsGenerateResponse:
    """Generate a Swedish news article about a topic.

    ``openai`` uses the stored Responses prompt; any other provider uses Gemini.
    """
    start = time.perf_counter()
    request = NewsGenerateRequest.model_validate(body)
    provider = (request.provider or DEFAULT_PROVIDER).strip().lower()

    try:
        topic = validate_topic(request.topic)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    logger.info(f"News generate: provider={provider}, topic={topic[:50]!r}")

    try:
        if provider == "openai":
            text, sources = generate_with_openai(topic, settings)
        else:
            text, sources = generate_with_gemini(topic, settings)

        title, content = split_article(text)
        word_count = check_article_length(content)

    except ProviderNotConfiguredError as e:
        logger.error(f"News generate misconfigured: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        ) from e
    except GenerationClientError as e:
        logger.error(f"Article generation failed: provider={provider}, error={e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    except Exception as e:
        logger.exception(f"Article generation failed unexpectedly: provider={provider}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Generation failed",
        ) from e

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        f"News generate complete: provider={provider}, words={word_count}, "
        f"sources={len(sources)}, elapsed={elapsed_ms:.0f}ms"
    )

    return NewsGenerateResponse(
        title=title,
        content=content,
        sources=sources,
        metadata=GenerationMetadata(
            generated_at=datetime.now(UTC),
            source_count=len(sources),
            word_count=word_count,
        ),
    )
