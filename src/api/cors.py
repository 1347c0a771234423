"""CORS handling for the public API routes."""

import logging
from collections.abc import Awaitable, Callable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

ALLOW_ORIGIN = "*"
ALLOW_HEADERS = "Content-Type, X-Admin-Token"

# Allowed methods advertised per API route
ROUTE_METHODS: dict[str, str] = {
    "/api/news": "GET,POST,PUT,OPTIONS",
    "/api/subscribe": "POST,OPTIONS",
    "/api/image-generate": "POST,OPTIONS",
    "/api/news-generate": "POST,OPTIONS",
    "/api/web-search": "POST,OPTIONS",
    "/api/comfyui-loras": "GET,OPTIONS",
}


def cors_headers(path: str) -> dict[str, str]:
    """Build the CORS headers for a request path.

    :param path: The request path.
    :returns: Headers to attach to the response.
    """
    headers = {"Access-Control-Allow-Origin": ALLOW_ORIGIN}
    methods = ROUTE_METHODS.get(path.rstrip("/"))
    if methods:
        headers["Access-Control-Allow-Headers"] = ALLOW_HEADERS
        headers["Access-Control-Allow-Methods"] = methods
    return headers


async def cors_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Answer preflight requests and add CORS headers to every response.

    Any OPTIONS request to an API route gets an empty 200 before routing, so
    no handler logic (auth, body parsing, database access) runs for it.
    Exceptions that escape the handlers become a 500 here so the error body
    still carries CORS headers.
    """
    path = request.url.path
    if request.method == "OPTIONS" and path.rstrip("/") in ROUTE_METHODS:
        return Response(
            status_code=status.HTTP_200_OK,
            headers=cors_headers(path),
            media_type="application/json",
        )

    try:
        response = await call_next(request)
    except Exception:
        logger.exception(f"Unhandled error: method={request.method}, path={path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
            headers=cors_headers(path),
        )

    response.headers.update(cors_headers(path))
    return response
