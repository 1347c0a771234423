"""Pydantic models for the article generation endpoint."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NewsGenerateRequest(BaseModel):
    """Request model for generating an article.

    The topic is validated by the endpoint so that each failure gets its
    own message.
    """

    model_config = ConfigDict(extra="ignore")

    topic: Any = Field(None, description="Article topic")
    provider: str | None = Field(None, description="openai, or anything else for Gemini")


class SourceLink(BaseModel):
    """A source the generated article cites."""

    title: str = Field(..., description="Source title")
    url: str = Field(..., description="Source URL")


class GenerationMetadata(BaseModel):
    """Details about a generated article."""

    model_config = ConfigDict(populate_by_name=True)

    generated_at: datetime = Field(..., alias="generatedAt", description="Generation time")
    source_count: int = Field(..., alias="sourceCount", description="Number of cited sources")
    word_count: int = Field(..., alias="wordCount", description="Words in the article body")


class NewsGenerateResponse(BaseModel):
    """Response model for a generated article."""

    title: str = Field(..., description="Plain-text article title")
    content: str = Field(..., description="Article body")
    sources: list[SourceLink] = Field(default_factory=list, description="Cited sources")
    metadata: GenerationMetadata = Field(..., description="Generation details")
