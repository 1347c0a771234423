"""Pydantic models for the newsletter subscription endpoint."""

from pydantic import BaseModel, ConfigDict, Field


class SubscribeRequest(BaseModel):
    """Request model for subscribing to the newsletter."""

    model_config = ConfigDict(extra="ignore")

    email: str | None = Field(None, description="Subscriber email address")


class SubscribeResponse(BaseModel):
    """Response model for a newsletter subscription."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = Field(True, description="Whether the subscription succeeded")
    message: str = Field(..., description="Human-readable result")
    is_new: bool = Field(..., alias="isNew", description="False if the email was already subscribed")
