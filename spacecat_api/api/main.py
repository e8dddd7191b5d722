"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, spacecat_api.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from spacecat_api.api.deps.dependencies import get_service_cache
from spacecat_api.configs import get_settings
from spacecat_api.observability import RequestContextMiddleware, configure_logging

from .routers import (
    consumers_router,
    fixes_router,
    health_router,
    reports_router,
    roles_router,
    sandbox_router,
    scrape_router,
    sentiment_router,
    user_details_router,
)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    settings = get_settings()
    configure_logging(settings.log_level, settings.environment)
    logger = logging.getLogger("uvicorn")

    # Startup
    logger.info("Pre-warming service cache...")
    cache = get_service_cache()
    # Trigger property access to load instances
    _ = cache.s3_client
    _ = cache.sqs_client
    _ = cache.fix_handlers
    logger.info("Service cache pre-warmed")

    yield

    # Shutdown
    await cache.close()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="SpaceCat API",
        description="Site optimization entities, fixes, reports and S2S consumers",
        version="0.1.0",
        lifespan=lifespan,
    )

    settings = get_settings()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["x-error", "Retry-After"],
    )

    app.add_middleware(RequestContextMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(fixes_router, prefix=API_PREFIX)
    app.include_router(roles_router, prefix=API_PREFIX)
    app.include_router(reports_router, prefix=API_PREFIX)
    app.include_router(sandbox_router, prefix=API_PREFIX)
    app.include_router(consumers_router, prefix=API_PREFIX)
    app.include_router(sentiment_router, prefix=API_PREFIX)
    app.include_router(user_details_router, prefix=API_PREFIX)
    app.include_router(scrape_router, prefix=API_PREFIX)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "spacecat_api.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
