"""Root API router with /api/v1 prefix and middleware registration."""

from fastapi import APIRouter, FastAPI

from wyo_alerts.api.middleware import RateLimitMiddleware, SecurityHeadersMiddleware, setup_cors
from wyo_alerts.core.config import Settings


def create_router(settings: Settings) -> APIRouter:
    """Create the root API router with all sub-routers included.

    Args:
        settings: Application settings.

    Returns:
        Configured API router.
    """
    from wyo_alerts.api.v1.districts import districts_router
    from wyo_alerts.api.v1.health import health_router
    from wyo_alerts.api.v1.legislators import legislators_router
    from wyo_alerts.api.v1.subscriptions import subscriptions_router

    root_router = APIRouter(prefix=settings.api_v1_prefix)
    root_router.include_router(health_router)
    root_router.include_router(districts_router)
    root_router.include_router(legislators_router)
    root_router.include_router(subscriptions_router)

    return root_router


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register all middleware on the FastAPI app.

    Args:
        app: The FastAPI application.
        settings: Application settings.
    """
    setup_cors(app, settings)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        RateLimitMiddleware,
        requests_per_minute=settings.rate_limit_per_minute,
        trusted_proxy_headers=settings.trusted_proxy_header_list,
    )
