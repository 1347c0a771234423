"""Brave web search integration."""

from src.search.brave import BraveSearchClient, SearchResult, clamp_result_count
from src.search.exceptions import SearchClientError

__all__ = [
    "BraveSearchClient",
    "SearchClientError",
    "SearchResult",
    "clamp_result_count",
]
