"""FastAPI application configuration."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.comfyui.endpoints import router as comfyui_router
from src.api.cors import cors_middleware
from src.api.errors import (
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from src.api.health.endpoints import router as health_router
from src.api.image_generate.endpoints import router as image_generate_router
from src.api.models import API_VERSION, ErrorResponse
from src.api.news.endpoints import router as news_router
from src.api.news_generate.endpoints import router as news_generate_router
from src.api.subscribe.endpoints import router as subscribe_router
from src.api.web_search.endpoints import router as web_search_router
from src.database.connection import dispose_engine
from src.observability.sentry import init_sentry
from src.utils.logging import configure_logging

configure_logging()
init_sentry()

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    """Release pooled database connections on shutdown."""
    yield
    dispose_engine()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    :returns: Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Newsroom API",
        version=API_VERSION,
        lifespan=lifespan,
        responses={
            400: {"model": ErrorResponse, "description": "Bad request"},
            500: {"model": ErrorResponse, "description": "Internal server error"},
        },
    )

    application.add_exception_handler(StarletteHTTPException, http_exception_handler)
    application.add_exception_handler(RequestValidationError, validation_exception_handler)
    application.add_exception_handler(ValidationError, validation_exception_handler)
    application.add_exception_handler(Exception, unhandled_exception_handler)

    application.middleware("http")(cors_middleware)

    # Register routers
    application.include_router(health_router)
    for router in (
        news_router,
        subscribe_router,
        image_generate_router,
        news_generate_router,
        web_search_router,
        comfyui_router,
    ):
        application.include_router(router, prefix=API_PREFIX)

    logger.info("FastAPI application created")

    return application


# Application instance for uvicorn
app = create_app()
