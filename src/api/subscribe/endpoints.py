"""API endpoint for newsletter subscriptions."""

import logging
import time
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from src.api.dependencies import json_body
from src.api.subscribe.models import SubscribeRequest, SubscribeResponse
from src.database.connection import get_session
from src.database.subscribers import subscribe_email

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/subscribe", tags=["Newsletter"])


@router.post(
    "",
    response_model=SubscribeResponse,
    summary="Subscribe to the newsletter",
)
def subscribe(body: dict[str, Any] = Depends(json_body)) -> SubscribeResponse:
    """Subscribe an email address to the newsletter.

    Subscribing an address that is already on the list succeeds with
    ``isNew`` set to false.
    """
    start = time.perf_counter()
    request = SubscribeRequest.model_validate(body)

    if not request.email or "@" not in request.email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid email address")

    try:
        with get_session() as session:
            is_new = subscribe_email(session, request.email)
    except SQLAlchemyError as e:
        logger.exception(f"Subscribe failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from e

    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"Subscribe complete: is_new={is_new}, elapsed={elapsed_ms:.0f}ms")

    return SubscribeResponse(success=True, message="Successfully subscribed", is_new=is_new)
