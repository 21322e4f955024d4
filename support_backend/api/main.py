"""
FastAPI application with assembled routers.

Initializes FastAPI app with the contact and health routers and
configures the uvicorn server.

Dependencies: fastapi, support_backend.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from support_backend.api.deps.dependencies import get_service_cache
from support_backend.configs import get_settings
from support_backend.observability.logger import configure_logging
from support_backend.observability.middleware import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)
from .routers import contacts_router, health_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("uvicorn")

    if settings.connect.instance_id:
        # Build the Connect client once before the first request
        _ = get_service_cache().contact_orchestrator
        logger.info("Contact orchestrator ready")
    else:
        logger.warning("CONNECT_INSTANCE_ID not set; contact endpoints will fail")

    yield

    get_service_cache().clear()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Multimodal Support API",
        description="Chat and voice contacts with escalation continuity on Amazon Connect",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(contacts_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "support_backend.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
