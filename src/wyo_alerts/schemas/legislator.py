"""Pydantic v2 schemas for legislator operations."""

from pydantic import BaseModel

from wyo_alerts.schemas.district import DistrictLookupResponse


class LegislatorResponse(BaseModel):
    """A sitting legislator."""

    model_config = {"from_attributes": True}

    id: int
    name: str
    email: str | None = None
    party: str | None = None
    district_code: str
    chamber: str
    phone: str | None = None
    profile_url: str | None = None


class LegislatorLookupResponse(DistrictLookupResponse):
    """District resolution plus the legislators holding those seats."""

    legislators: list[LegislatorResponse]


class LegislatorImportResponse(BaseModel):
    """Result of a roster import."""

    success: bool = True
    imported: int
    message: str = "Legislators imported successfully"
