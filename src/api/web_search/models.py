"""Pydantic models for the web search proxy."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.search import SearchResult


class WebSearchRequest(BaseModel):
    """Request model for a web search."""

    model_config = ConfigDict(extra="ignore")

    query: str | None = Field(None, description="Search query")
    limit: Any = Field(None, description="Number of results, at most 10")


class WebSearchResponse(BaseModel):
    """Response model for web search results."""

    results: list[SearchResult] = Field(default_factory=list, description="Results in rank order")
