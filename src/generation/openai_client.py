"""OpenAI Responses API wrapper for article and image generation."""

import logging
from typing import Any

from openai import OpenAI, OpenAIError

from src.generation.exceptions import GenerationClientError

logger = logging.getLogger(__name__)

# Stored prompt configured in the OpenAI dashboard
PROMPT_ID = "pmpt_68dd621211e48194a9bcb0f3b88f51c40c83dce5f116999b"
IMAGE_PROMPT_VERSION = "1"
ARTICLE_PROMPT_VERSION = "2"

WEB_SEARCH_TOOL: dict[str, Any] = {
    "type": "web_search",
    "filters": None,
    "search_context_size": "high",
    "user_location": {
        "type": "approximate",
        "city": "stockholm",
        "country": "SE",
        "region": None,
        "timezone": None,
    },
}

IMAGE_GENERATION_TOOL: dict[str, Any] = {
    "type": "image_generation",
    "background": "auto",
    "moderation": "low",
    "output_compression": 100,
    "output_format": "png",
    "quality": "auto",
    "size": "1536x1024",
}

INCLUDE_REASONING = "reasoning.encrypted_content"
INCLUDE_SEARCH_SOURCES = "web_search_call.action.sources"

_TEXT_PART_KEYS = ("output_text", "summary_text", "text")


class OpenAIResponsesClient:
    """Thin wrapper around the OpenAI SDK's Responses endpoint.

    Calls always use the stored newsroom prompt with web search and image
    generation tools enabled; only the prompt version, the user input and the
    extra response fields differ between article and image generation.
    """

    def __init__(self, *, api_key: str, timeout: float = 120.0, max_retries: int = 2) -> None:
        """Initialise the client.

        :param api_key: OpenAI API key.
        :param timeout: Request timeout in seconds.
        :param max_retries: Retries performed by the SDK on transient failures.
        """
        self._client = OpenAI(api_key=api_key, timeout=timeout, max_retries=max_retries)
        logger.debug(f"OpenAIResponsesClient initialised: timeout={timeout}s")

    def create(
        self,
        text: str,
        *,
        prompt_version: str,
        include: list[str] | None = None,
    ) -> dict[str, Any]:
        """Run the stored prompt against a piece of user input.

        :param text: The user input text.
        :param prompt_version: Version of the stored prompt to use.
        :param include: Extra response fields to request.
        :returns: The response as a plain dictionary, with ``output_text`` filled in.
        :raises GenerationClientError: If the SDK call fails.
        """
        logger.debug(f"Creating OpenAI response: prompt_version={prompt_version}")
        try:
            response = self._client.responses.create(
                prompt={"id": PROMPT_ID, "version": prompt_version},
                input=[
                    {
                        "role": "user",
                        "content": [{"type": "input_text", "text": text}],
                    }
                ],
                reasoning={"summary": "auto"},
                tools=[WEB_SEARCH_TOOL, IMAGE_GENERATION_TOOL],
                store=True,
                include=include or [INCLUDE_REASONING],
            )
        except OpenAIError as e:
            message = getattr(e, "message", None) or str(e) or "OpenAI request failed"
            raise GenerationClientError(message) from e

        data = response.model_dump()
        data["output_text"] = response.output_text
        return data


def _iter_content_parts(response: dict[str, Any]) -> list[dict[str, Any]]:
    parts: list[dict[str, Any]] = []
    for item in response.get("output") or []:
        if not isinstance(item, dict):
            continue
        for part in item.get("content") or []:
            if isinstance(part, dict):
                parts.append(part)
    return parts


def extract_image(response: dict[str, Any]) -> str | None:
    """Find the generated image in a Responses payload.

    Looks for a URL first (``image_url``, ``url``, ``image.url``), then for
    base64 data which is returned as a PNG data URL. Image generation tool
    calls carry their base64 payload in ``result``.

    :param response: The response dictionary.
    :returns: An image URL or data URL, or None if the response has no image.
    """
    for part in _iter_content_parts(response):
        image = part.get("image") if isinstance(part.get("image"), dict) else {}
        for candidate in (part.get("image_url"), part.get("url"), image.get("url")):
            if isinstance(candidate, str) and candidate:
                return candidate

        base64_data = part.get("b64_json") or image.get("b64_json") or part.get("image_base64")
        if isinstance(base64_data, str) and base64_data:
            return f"data:image/png;base64,{base64_data}"

    for item in response.get("output") or []:
        if isinstance(item, dict) and item.get("type") == "image_generation_call":
            result = item.get("result")
            if isinstance(result, str) and result:
                return f"data:image/png;base64,{result}"

    return None


def extract_text(response: dict[str, Any]) -> str:
    """Collect the generated text from a Responses payload.

    :param response: The response dictionary.
    :returns: The aggregated text, or an empty string.
    """
    output_text = response.get("output_text")
    if isinstance(output_text, str) and output_text.strip():
        return output_text.strip()

    chunks: list[str] = []
    for part in _iter_content_parts(response):
        value = next(
            (part[key] for key in _TEXT_PART_KEYS if isinstance(part.get(key), str)),
            None,
        )
        if value and value.strip():
            chunks.append(value.strip())
    return "\n".join(chunks).strip()


def extract_sources(response: dict[str, Any]) -> list[dict[str, str]]:
    """Collect the web search sources cited in a Responses payload.

    :param response: The response dictionary.
    :returns: De-duplicated ``{"title", "url"}`` dictionaries in first-seen order.
    """
    seen: set[str] = set()
    results: list[dict[str, str]] = []
    items = [*(response.get("output") or []), *(response.get("included") or [])]

    for item in items:
        if not isinstance(item, dict) or item.get("type") != "web_search_call":
            continue
        sources = (item.get("action") or {}).get("sources")
        if not isinstance(sources, list):
            continue
        for source in sources:
            if not isinstance(source, dict):
                continue
            url = source.get("url")
            if not url or url in seen:
                continue
            seen.add(url)
            results.append({"title": source.get("title") or url, "url": url})

    return results
