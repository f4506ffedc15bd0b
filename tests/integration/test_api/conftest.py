"""Fixtures for API tests: a minimal app wired to the in-memory database."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from wyo_alerts.api.errors import register_exception_handlers
from wyo_alerts.api.router import create_router
from wyo_alerts.core.config import get_settings
from wyo_alerts.core.dependencies import get_async_session, get_district_directory


@pytest.fixture
def app(settings, async_session, directory) -> FastAPI:
    """Create a FastAPI app with every v1 router and the error handlers."""
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(create_router(settings))
    app.dependency_overrides[get_async_session] = lambda: async_session
    app.dependency_overrides[get_district_directory] = lambda: directory
    app.dependency_overrides[get_settings] = lambda: settings
    return app


@pytest.fixture
def client(app: FastAPI) -> AsyncClient:
    """Create an async test client."""
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test", follow_redirects=False)
