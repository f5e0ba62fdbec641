"""FastAPI application factory and entrypoint."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from catalog.api.dependencies import close_peer_clients
from catalog.api.routes import api_router, root_router
from catalog.core.config import settings
from catalog.core.db import dispose_engine
from catalog.core.errors import register_exception_handlers
from catalog.core.logging import configure_logging
from catalog.core.metrics import register_metrics_endpoint
from catalog.core.middleware import AccessLogMiddleware, RequestIDMiddleware
from catalog.core.version import APP_VERSION

configure_logging(settings.log_level, service=settings.project_name)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    yield
    await close_peer_clients()
    await dispose_engine()


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""

    application = FastAPI(
        title=settings.project_name,
        debug=settings.debug,
        version=APP_VERSION,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # Last added runs outermost; access records carry the request id.
    application.add_middleware(AccessLogMiddleware)
    application.add_middleware(RequestIDMiddleware)

    register_exception_handlers(application)
    register_metrics_endpoint(application)

    application.include_router(root_router)
    application.include_router(api_router)

    return application


app = create_app()

__all__ = ["app", "create_app"]
