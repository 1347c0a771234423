"""Brave Search API client."""

import json
import logging
from typing import Any

import requests
from pydantic import BaseModel, Field

from src.search.exceptions import SearchClientError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10

DEFAULT_RESULT_COUNT = 5
MAX_RESULT_COUNT = 10


class SearchResult(BaseModel):
    """A single web search hit."""

    title: str = Field("", description="Page title")
    url: str = Field(..., description="Page URL")
    snippet: str = Field("", description="Result description")


def clamp_result_count(limit: Any) -> int:
    """Coerce a caller-supplied limit into a valid result count.

    Anything that is not a positive number falls back to the default; larger
    values are capped at the API maximum.

    :param limit: The requested number of results.
    :returns: A count between 1 and MAX_RESULT_COUNT.
    """
    try:
        count = int(limit)
    except (TypeError, ValueError, OverflowError):
        count = 0
    if count <= 0:
        count = DEFAULT_RESULT_COUNT
    return min(count, MAX_RESULT_COUNT)


class BraveSearchClient:
    """Client for the Brave web search endpoint."""

    BASE_URL = "https://api.search.brave.com/res/v1"

    def __init__(self, *, api_key: str, timeout: float = REQUEST_TIMEOUT) -> None:
        """Initialise the search client.

        :param api_key: Brave Search subscription token.
        :param timeout: Request timeout in seconds.
        """
        self._api_key = api_key
        self.timeout = timeout

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "X-Subscription-Token": self._api_key,
        }

    def search(self, query: str, *, count: int = DEFAULT_RESULT_COUNT) -> list[SearchResult]:
        """Run a web search.

        :param query: The search query.
        :param count: Number of results to request.
        :returns: The web results in ranking order.
        :raises SearchClientError: If the request fails.
        """
        logger.debug(f"Brave search: query={query[:50]!r}, count={count}")

        try:
            response = requests.get(
                f"{self.BASE_URL}/web/search",
                headers=self._headers,
                params={"q": query, "count": count},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()

        except requests.exceptions.Timeout as e:
            raise SearchClientError(f"Search request timed out after {self.timeout:g}s") from e
        except requests.exceptions.HTTPError as e:
            raise SearchClientError(self._extract_error_message(e.response)) from e
        except requests.exceptions.RequestException as e:
            raise SearchClientError(f"Search request failed: {e}") from e
        except ValueError as e:
            raise SearchClientError("Search returned an invalid JSON response") from e

        return self.parse_results(data)

    @staticmethod
    def parse_results(data: dict[str, Any]) -> list[SearchResult]:
        """Reshape a Brave response into search results.

        :param data: The decoded response body.
        :returns: One result per ``web.results`` entry that has a URL.
        """
        raw_results = ((data or {}).get("web") or {}).get("results") or []
        return [
            SearchResult(
                title=item.get("title") or "",
                url=item["url"],
                snippet=item.get("description") or item.get("snippet") or "",
            )
            for item in raw_results
            if isinstance(item, dict) and item.get("url")
        ]

    def _extract_error_message(self, response: requests.Response) -> str:
        """Extract the error message from a Brave error response.

        :param response: Response object from the failed request.
        :returns: The upstream message, or the start of the body.
        """
        try:
            body = response.json()
        except ValueError:
            return response.text[:500] or f"Search failed ({response.status_code})"

        if isinstance(body, dict):
            message = body.get("message") or body.get("error")
            if isinstance(message, str) and message:
                return message
        return json.dumps(body)[:500]
