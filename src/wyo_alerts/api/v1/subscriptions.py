"""Subscription signup API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from wyo_alerts.core.config import Settings, get_settings
from wyo_alerts.core.dependencies import get_async_session
from wyo_alerts.lib.districts import parse_district_code
from wyo_alerts.schemas.common import ErrorResponse
from wyo_alerts.schemas.subscription import SubscribeRequest, SubscribeResponse
from wyo_alerts.services.subscription_service import subscribe

subscriptions_router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@subscriptions_router.post(
    "",
    response_model=SubscribeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_subscription(
    request: SubscribeRequest,
    session: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> SubscribeResponse:
    """Subscribe an email address and/or Wyoming phone number to vote alerts.

    Email is confirmed immediately; a phone number needs SMS confirmation,
    reported through ``confirmation_needed``.
    """
    selections = [parse_district_code(code) for code in request.selected_districts]
    result = await subscribe(
        session,
        email=str(request.email) if request.email else None,
        phone=request.phone,
        districts=selections,
        mode=request.mode,
        consent=request.consent_checkbox,
        area_code=settings.phone_area_code,
        auto_confirm_email=settings.auto_confirm_email,
        quiet_hours=settings.default_quiet_hours,
    )
    return SubscribeResponse(
        subscriber_id=result.subscriber_id,
        confirmation_needed=result.confirmation_needed,
    )
