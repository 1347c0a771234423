"""Pydantic models for the image generation endpoint."""

from pydantic import BaseModel, ConfigDict, Field

from src.generation.comfyui import LoraSpec


class ImageGenerateRequest(BaseModel):
    """Request model for generating an article image."""

    model_config = ConfigDict(extra="ignore")

    topic: str | None = Field(None, description="Article topic to illustrate")
    provider: str | None = Field(None, description="openai, comfyui, or anything else for stock")
    loras: list[LoraSpec] | None = Field(None, description="LoRAs for the comfyui provider")


class ImageGenerateResponse(BaseModel):
    """Response model for a generated image."""

    model_config = ConfigDict(populate_by_name=True)

    image_url: str = Field(..., alias="imageUrl", description="Image URL or PNG data URL")
