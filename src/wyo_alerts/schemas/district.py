"""Pydantic v2 schemas for district lookup."""

from pydantic import BaseModel, Field

from wyo_alerts.lib.districts import Chamber, District, MatchType, Resolution


class DistrictLookupRequest(BaseModel):
    """Address or ZIP to resolve; at least one must be non-blank."""

    address: str | None = Field(default=None, description="Free-text Wyoming address", max_length=500)
    zip: str | None = Field(default=None, description="Five-digit Wyoming ZIP code", max_length=10)


class DistrictResponse(BaseModel):
    """A single resolved district."""

    model_config = {"from_attributes": True}

    chamber: Chamber
    code: str = Field(description="Zero-padded district number")
    match_type: MatchType

    @classmethod
    def from_district(cls, district: District) -> "DistrictResponse":
        return cls(chamber=district.chamber, code=district.code, match_type=district.match_type)


class DistrictLookupResponse(BaseModel):
    """Exact or possible districts for a lookup, never both."""

    exact: list[DistrictResponse]
    possible: list[DistrictResponse]
    explain: str

    @classmethod
    def from_resolution(cls, resolution: Resolution) -> "DistrictLookupResponse":
        return cls(
            exact=[DistrictResponse.from_district(d) for d in resolution.exact],
            possible=[DistrictResponse.from_district(d) for d in resolution.possible],
            explain=resolution.explain,
        )
