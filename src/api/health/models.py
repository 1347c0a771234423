"""Pydantic models for the health check endpoint."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness report for load balancers and uptime checks."""

    status: Literal["healthy"] = Field("healthy", description="Service health status")
    version: str = Field(..., description="Deployed API version")
