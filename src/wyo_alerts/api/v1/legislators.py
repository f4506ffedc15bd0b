"""Legislator directory API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from wyo_alerts.core.dependencies import get_async_session, get_district_directory
from wyo_alerts.lib.districts import BaseDistrictDirectory, Chamber
from wyo_alerts.schemas.common import ErrorResponse
from wyo_alerts.schemas.district import DistrictLookupRequest, DistrictLookupResponse
from wyo_alerts.schemas.legislator import LegislatorImportResponse, LegislatorLookupResponse, LegislatorResponse
from wyo_alerts.services.district_service import lookup_districts
from wyo_alerts.services.legislator_service import import_legislators, legislators_for_districts, list_legislators

legislators_router = APIRouter(prefix="/legislators", tags=["legislators"])


@legislators_router.get("", response_model=list[LegislatorResponse])
async def list_all_legislators(
    chamber: Chamber | None = Query(None, description="Filter by chamber"),
    district: str | None = Query(None, description="Filter by district number", max_length=3),
    search: str | None = Query(None, description="Match name, district, or party", max_length=100),
    session: AsyncSession = Depends(get_async_session),
) -> list[LegislatorResponse]:
    """List active legislators ordered by chamber and district."""
    try:
        legislators = await list_legislators(
            session,
            chamber=chamber.value if chamber else None,
            district_code=district,
            search=search,
        )
    except Exception as e:
        logger.error(f"Unexpected error listing legislators: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load legislators",
        ) from e
    return [LegislatorResponse.model_validate(leg) for leg in legislators]


@legislators_router.post(
    "/lookup",
    response_model=LegislatorLookupResponse,
    responses={400: {"model": ErrorResponse}},
)
async def lookup_legislators(
    request: DistrictLookupRequest,
    session: AsyncSession = Depends(get_async_session),
    directory: BaseDistrictDirectory = Depends(get_district_directory),
) -> LegislatorLookupResponse:
    """Resolve districts for an address or ZIP and return who represents them.

    Legislators are drawn from the exact matches when there are any,
    otherwise from the possible matches.
    """
    resolution = lookup_districts(directory, address=request.address, zip_code=request.zip)
    legislators = await legislators_for_districts(session, resolution.exact or resolution.possible)
    base = DistrictLookupResponse.from_resolution(resolution)
    return LegislatorLookupResponse(
        **base.model_dump(),
        legislators=[LegislatorResponse.model_validate(leg) for leg in legislators],
    )


@legislators_router.post(
    "/import",
    response_model=LegislatorImportResponse,
    responses={500: {"model": ErrorResponse}},
)
async def import_roster(
    session: AsyncSession = Depends(get_async_session),
) -> LegislatorImportResponse:
    """Replace the legislator table with the bundled roster."""
    imported = await import_legislators(session)
    return LegislatorImportResponse(imported=imported)
