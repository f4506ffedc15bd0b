"""Districts library — address normalization and district resolution.

Public API:
    - Chamber, MatchType, District, DistrictSet: core district types
    - BaseDistrictDirectory: abstract ZIP/city directory interface
    - StaticDistrictDirectory, load_directory: table-driven directory
    - validate_lookup_input, normalize_address: input handling
    - resolve_districts, Resolution: precedence-ordered resolution
    - DistrictSelection, AddedVia, format_district_code, parse_district_code:
      canonical ``H07``/``S04`` codes
"""

from wyo_alerts.lib.districts.base import BaseDistrictDirectory, Chamber, District, DistrictSet, MatchType
from wyo_alerts.lib.districts.codes import (
    AddedVia,
    DistrictSelection,
    dedupe_selections,
    format_district_code,
    parse_district_code,
)
from wyo_alerts.lib.districts.directory import StaticDistrictDirectory, load_directory
from wyo_alerts.lib.districts.normalizer import (
    WYOMING_CITIES,
    LookupInput,
    NormalizedAddress,
    normalize_address,
    validate_lookup_input,
)
from wyo_alerts.lib.districts.resolver import Resolution, resolve_districts

__all__ = [
    "WYOMING_CITIES",
    "AddedVia",
    "BaseDistrictDirectory",
    "Chamber",
    "District",
    "DistrictSelection",
    "DistrictSet",
    "LookupInput",
    "MatchType",
    "NormalizedAddress",
    "Resolution",
    "StaticDistrictDirectory",
    "dedupe_selections",
    "format_district_code",
    "load_directory",
    "normalize_address",
    "parse_district_code",
    "resolve_districts",
    "validate_lookup_input",
]
