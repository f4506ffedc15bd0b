"""Liveness endpoint."""

from fastapi import APIRouter, Depends

from wyo_alerts.core.config import Settings, get_settings
from wyo_alerts.schemas.common import HealthResponse

health_router = APIRouter(tags=["health"])


@health_router.get("/health", response_model=HealthResponse)
def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(environment=settings.environment)
