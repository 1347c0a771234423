"""Pydantic models for news post API endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NewsPostResponse(BaseModel):
    """Response model for news posts."""

    id: int = Field(..., description="Post ID")
    title: str = Field(..., description="Post title")
    content: str = Field(..., description="Post body")
    image_url: str | None = Field(None, description="Header image URL")
    published: bool = Field(..., description="Whether the post is publicly visible")
    slug: str = Field(..., description="URL slug derived from the title")
    created_at: datetime = Field(..., description="When the post was created")
    updated_at: datetime = Field(..., description="When the post was last modified")


class CreateNewsPostRequest(BaseModel):
    """Request model for creating a news post.

    Title and content are checked by the endpoint so that a missing field
    produces a specific error message.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str | None = Field(None, description="Post title")
    content: str | None = Field(None, description="Post body")
    image_url: str | None = Field(None, alias="imageUrl", description="Header image URL")
    published: bool | None = Field(False, description="Publish immediately")


class UpdateNewsPostRequest(BaseModel):
    """Request model for partially updating a news post.

    Omitted or null fields keep their stored value.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int | None = Field(None, description="ID of the post to update")
    title: str | None = Field(None, description="New title")
    content: str | None = Field(None, description="New body")
    image_url: str | None = Field(None, alias="imageUrl", description="New header image URL")
    published: bool | None = Field(None, description="New visibility flag")
