"""Gemini REST client for article generation."""

import logging
from typing import Any
from urllib.parse import quote

import requests

from src.generation.exceptions import GenerationClientError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"

# generateContent timeout in seconds
REQUEST_TIMEOUT = 25


class GeminiClient:
    """Client for the Gemini ``generateContent`` REST endpoint."""

    BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

    def __init__(
        self,
        *,
        api_key: str,
        model: str = DEFAULT_MODEL,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        """Initialise the Gemini client.

        :param api_key: Gemini API key.
        :param model: Model name, e.g. ``gemini-2.5-flash``.
        :param timeout: Request timeout in seconds.
        """
        self._api_key = api_key
        self.model = model
        self.timeout = timeout
        logger.debug(f"GeminiClient initialised: model={model}")

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-goog-api-key": self._api_key,
        }

    def generate_content(
        self,
        prompt: str,
        *,
        temperature: float = 0.7,
        max_output_tokens: int = 2048,
    ) -> str:
        """Generate text for a single-turn prompt.

        :param prompt: The prompt text.
        :param temperature: Sampling temperature.
        :param max_output_tokens: Maximum tokens to generate.
        :returns: The generated text with candidate parts joined by newlines.
        :raises GenerationClientError: If the request fails or returns no text.
        """
        url = f"{self.BASE_URL}/models/{quote(self.model)}:generateContent"
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_output_tokens,
            },
        }
        logger.debug(f"Making Gemini generateContent request: model={self.model}")

        try:
            response = requests.post(
                url,
                headers=self._headers,
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()

        except requests.exceptions.Timeout as e:
            raise GenerationClientError(
                f"Gemini request timed out after {self.timeout:g}s"
            ) from e
        except requests.exceptions.HTTPError as e:
            message = self._extract_error_message(e.response)
            logger.error(f"Gemini API error: status={e.response.status_code}, message={message}")
            raise GenerationClientError(message) from e
        except requests.exceptions.RequestException as e:
            raise GenerationClientError(f"Gemini request failed: {e}") from e
        except ValueError as e:
            raise GenerationClientError("Gemini returned an invalid JSON response") from e

        text = self.extract_text(data)
        if not text:
            logger.error("Gemini response missing text payload")
            raise GenerationClientError("Ingen text genererades av Gemini")
        return text

    @staticmethod
    def extract_text(data: dict[str, Any]) -> str:
        """Join the text parts of every candidate in a generateContent response.

        :param data: The decoded response body.
        :returns: The joined text, or an empty string.
        """
        candidates = data.get("candidates") if isinstance(data, dict) else None
        segments: list[str] = []
        for candidate in candidates if isinstance(candidates, list) else []:
            for part in (candidate.get("content") or {}).get("parts") or []:
                text = part.get("text")
                if isinstance(text, str) and text.strip():
                    segments.append(text.strip())
        return "\n".join(segments).strip()

    def _extract_error_message(self, response: requests.Response) -> str:
        """Extract the error message from a Gemini error response.

        :param response: Response object from the failed request.
        :returns: Error message string.
        """
        try:
            body = response.json()
            message = (body.get("error") or {}).get("message")
            if message:
                return message
        except (ValueError, AttributeError):
            pass
        return f"Gemini request failed ({response.status_code})"
