"""FastAPI application factory.

Creates the FastAPI app with lifespan management, exception handlers,
and OpenAPI metadata.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from wyo_alerts.api.errors import register_exception_handlers
from wyo_alerts.core.config import get_settings
from wyo_alerts.core.database import dispose_engine, init_engine
from wyo_alerts.core.logging import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifecycle: init engine on startup, dispose on shutdown."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)
    init_engine(settings.database_url, echo=False, schema=settings.database_schema)

    yield

    await dispose_engine()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Wyoming Vote Alerts",
        description="Wyoming legislative district lookup and vote alert subscriptions",
        version="0.1.0",
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    # Register middleware and routers
    from wyo_alerts.api.router import create_router, setup_middleware

    setup_middleware(app, settings)
    app.include_router(create_router(settings))

    return app
