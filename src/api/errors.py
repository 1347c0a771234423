"""Exception handlers that render every error as ``{"error": message}``."""

import logging
from http import HTTPStatus

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

# Replacements for the router's default reason-phrase details
_ROUTING_MESSAGES = {404: "Not found", 405: "Method not allowed"}


def _describe_validation_error(exc: RequestValidationError | ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "header"))
    message = first.get("msg", "invalid value")
    return f"Invalid {location}: {message}" if location else f"Invalid request: {message}"


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render an HTTPException as a JSON error body."""
    message = str(exc.detail)
    if message == HTTPStatus(exc.status_code).phrase:
        message = _ROUTING_MESSAGES.get(exc.status_code, message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError | ValidationError,
) -> JSONResponse:
    """Render request and body validation failures as 400 errors."""
    message = _describe_validation_error(exc)
    logger.info(f"Validation failed: path={request.url.path}, error={message}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log an unexpected exception and hide its details from the caller."""
    logger.exception(f"Unhandled error: method={request.method}, path={request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )
