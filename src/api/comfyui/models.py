"""Pydantic models for the ComfyUI endpoints."""

from pydantic import BaseModel, Field


class LoraListResponse(BaseModel):
    """Response model for the available LoRA files."""

    loras: list[str] = Field(default_factory=list, description="LoRA file names")
