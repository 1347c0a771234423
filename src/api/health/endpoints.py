"""Liveness endpoint served outside the /api prefix."""

from fastapi import APIRouter

from src.api.health.models import HealthResponse
from src.api.models import API_VERSION

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("", response_model=HealthResponse, summary="Check service health")
def health_check() -> HealthResponse:
    """Report that the process is up.

    Does not touch the database or any provider.
    """
    return HealthResponse(version=API_VERSION)
