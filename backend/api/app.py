"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.config import get_settings
from shared.exceptions import OperationNotSupportedError

from .routes import graphql, health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)
    if not settings.jwt_secret:
        logger.warning("JWT_SECRET is not set; login and bearer tokens will not work")
    yield
    # Shutdown
    logger.info("Shutting down %s", settings.app_name)


async def not_found_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown paths and methods get the taxonomy error shape."""
    if exc.status_code not in (404, 405):
        return JSONResponse({"detail": exc.detail}, status_code=exc.status_code)
    error = OperationNotSupportedError(reason="PATH_NOT_FOUND", details={"path": request.url.path})
    return JSONResponse({"errors": [error.to_dict()]}, status_code=exc.status_code)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Social network data API: users, posts and comments over GraphQL",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(StarletteHTTPException, not_found_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(graphql.router, tags=["graphql"])

    return app


# Application instance for uvicorn
app = create_app()
