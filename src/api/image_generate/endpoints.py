"""API endpoint for generating article images."""

import logging
import time
from typing import Any
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import json_body
from src.api.image_generate.models import ImageGenerateRequest, ImageGenerateResponse
from src.generation.articles import (
    COMFYUI_PROMPT_TEMPLATE,
    DEFAULT_IMAGE_TOPIC,
    IMAGE_PROMPT_TEMPLATE,
    build_image_prompt,
)
from src.generation.comfyui import ComfyUIClient, LoraSpec
from src.generation.exceptions import GenerationClientError, ProviderNotConfiguredError
from src.generation.openai_client import (
    IMAGE_PROMPT_VERSION,
    OpenAIResponsesClient,
    extract_image,
)
from src.utils.config import AppSettings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/image-generate", tags=["Generation"])

STOCK_IMAGE_URL = "https://source.unsplash.com/featured/?{query}"


def generate_with_openai(topic: str, settings: AppSettings) -> str:
    """Generate an image with the stored OpenAI prompt.

    :param topic: The article topic.
    :param settings: Application settings.
    :returns: Image URL or PNG data URL.
    :raises ProviderNotConfiguredError: If OPENAI_API_KEY is not set.
    :raises GenerationClientError: If the call fails or yields no image.
    """
    if not settings.openai_api_key:
        raise ProviderNotConfiguredError("OPENAI_API_KEY")

    client = OpenAIResponsesClient(
        api_key=settings.openai_api_key,
        timeout=settings.openai_timeout,
        max_retries=settings.openai_max_retries,
    )
    response = client.create(
        build_image_prompt(topic, IMAGE_PROMPT_TEMPLATE),
        prompt_version=IMAGE_PROMPT_VERSION,
    )

    image_url = extract_image(response)
    if not image_url:
        logger.error("OpenAI prompt returned no image payload")
        raise GenerationClientError("Ingen bild genererades av OpenAI")
    return image_url


def generate_with_comfyui(topic: str, loras: list[LoraSpec] | None, settings: AppSettings) -> str:
    """Generate an image on the configured ComfyUI server.

    :param topic: The article topic.
    :param loras: LoRAs to chain into the workflow.
    :param settings: Application settings.
    :returns: Image URL on the ComfyUI server.
    :raises GenerationClientError: If any ComfyUI step fails.
    """
    client = ComfyUIClient(
        settings.comfyui_api_url,
        poll_attempts=settings.comfyui_poll_attempts,
        poll_interval=settings.comfyui_poll_interval,
    )
    return client.generate_image(build_image_prompt(topic, COMFYUI_PROMPT_TEMPLATE), loras)


def stock_image_url(topic: str | None) -> str:
    """Build a stock photo URL for a topic.

    :param topic: The article topic; a generic topic is used when empty.
    :returns: A featured-photo URL for the topic.
    """
    return STOCK_IMAGE_URL.format(query=quote(topic or DEFAULT_IMAGE_TOPIC, safe=""))


@router.post(
    "",
    response_model=ImageGenerateResponse,
    summary="Generate article image",
)
def image_generate(
    body: dict[str, Any] = Depends(json_body),
    settings: AppSettings = Depends(get_settings),
) -> ImageGenerateResponse:
    """Generate or pick an image for an article topic.

    ``openai`` and ``comfyui`` generate a new image; any other provider
    returns a stock photo URL for the topic.
    """
    start = time.perf_counter()
    request = ImageGenerateRequest.model_validate(body)
    provider = (request.provider or "").strip().lower()
    topic = (request.topic or "").strip()

    logger.info(f"Image generate: provider={provider or 'stock'}, topic={topic[:50]!r}")

    try:
        if provider == "openai":
            image_url = generate_with_openai(topic, settings)
        elif provider == "comfyui":
            image_url = generate_with_comfyui(topic, request.loras, settings)
        else:
            image_url = stock_image_url(request.topic)

    except ProviderNotConfiguredError as e:
        logger.error(f"Image generate misconfigured: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        ) from e
    except GenerationClientError as e:
        logger.error(f"Image generation failed: provider={provider}, error={e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    except Exception as e:
        logger.exception(f"Image generation failed unexpectedly: provider={provider}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Image generation failed",
        ) from e

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"Image generate complete: provider={provider or 'stock'}, elapsed={elapsed_ms:.0f}ms")

    return ImageGenerateResponse(image_url=image_url)
