"""District lookup API endpoints."""

from fastapi import APIRouter, Depends

from wyo_alerts.core.dependencies import get_district_directory
from wyo_alerts.lib.districts import BaseDistrictDirectory
from wyo_alerts.schemas.common import ErrorResponse
from wyo_alerts.schemas.district import DistrictLookupRequest, DistrictLookupResponse
from wyo_alerts.services.district_service import lookup_districts

districts_router = APIRouter(prefix="/districts", tags=["districts"])


@districts_router.post(
    "/lookup",
    response_model=DistrictLookupResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def lookup(
    request: DistrictLookupRequest,
    directory: BaseDistrictDirectory = Depends(get_district_directory),
) -> DistrictLookupResponse:
    """Resolve a Wyoming address or ZIP code to legislative districts.

    A known ZIP (given directly or inside the address) yields exact
    matches.  An address naming a known city yields possible matches the
    user must confirm.  Unrecognized input returns empty lists and an
    explanation rather than an error.
    """
    resolution = lookup_districts(directory, address=request.address, zip_code=request.zip)
    return DistrictLookupResponse.from_resolution(resolution)
