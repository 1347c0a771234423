"""Pydantic models shared by the API endpoints."""

from pydantic import BaseModel, Field

API_VERSION = "0.1.0"


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error: str = Field(..., description="Error description")
