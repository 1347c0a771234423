"""Shared dependencies for API endpoints."""

import logging
import secrets
from typing import Any

from fastapi import Depends, Header, HTTPException, Request, status

from src.utils.config import AppSettings, get_settings

logger = logging.getLogger(__name__)

ADMIN_TOKEN_HEADER = "X-Admin-Token"


def check_admin_token(provided: str | None, expected: str | None) -> bool:
    """Compare a provided admin token against the configured one.

    :param provided: Token sent by the caller.
    :param expected: Configured admin token.
    :returns: True only if both are set and equal.
    """
    if not provided or not expected:
        return False
    return secrets.compare_digest(provided.encode(), expected.encode())


def is_admin(
    x_admin_token: str | None = Header(default=None, alias=ADMIN_TOKEN_HEADER),
    settings: AppSettings = Depends(get_settings),
) -> bool:
    """Report whether the request carries a valid admin token.

    :param x_admin_token: Value of the X-Admin-Token header.
    :param settings: Application settings.
    :returns: True for admin callers.
    """
    return check_admin_token(x_admin_token, settings.admin_token)


def require_admin(admin: bool = Depends(is_admin)) -> None:
    """Reject requests without a valid admin token.

    :param admin: Result of the is_admin dependency.
    :raises HTTPException: 401 if the caller is not an admin.
    """
    if not admin:
        logger.warning("Rejected request with missing or invalid admin token")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


async def json_body(request: Request) -> dict[str, Any]:
    """Read the request body as a JSON object.

    Malformed or non-object bodies are treated as empty so that each handler
    reports its own missing-field error.

    :param request: The incoming request.
    :returns: The decoded JSON object, or an empty dict.
    """
    try:
        payload = await request.json()
    except ValueError:
        logger.debug("Request body is not valid JSON, treating as empty")
        return {}
    return payload if isinstance(payload, dict) else {}
