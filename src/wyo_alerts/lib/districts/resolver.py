"""District resolution: map a validated lookup to exact or possible districts.

Precedence, highest first:

1. A directly supplied ZIP known to the directory -> exact matches.
2. A directly supplied ZIP unknown to the directory -> nothing, with an
   explanation.
3. An address whose extracted ZIP is known -> exact matches (the ZIP beats
   any city in the same address).
4. An address naming a known city -> possible matches only, since a city
   can span several districts.
5. Anything else -> nothing, with an explanation.

A resolution never carries both exact and possible matches.
"""

from dataclasses import dataclass, field

from wyo_alerts.lib.districts.base import BaseDistrictDirectory, District, MatchType
from wyo_alerts.lib.districts.normalizer import LookupInput, normalize_address

ZIP_NOT_FOUND_EXPLAIN = (
    "ZIP code not found in Wyoming legislative districts. Please verify the ZIP code is correct."
)
NOTHING_RECOGNIZED_EXPLAIN = (
    "Could not determine districts from this address. Please include a Wyoming city name or ZIP code."
)


@dataclass(frozen=True)
class Resolution:
    """Outcome of a district lookup."""

    exact: list[District] = field(default_factory=list)
    possible: list[District] = field(default_factory=list)
    explain: str = ""

    def __post_init__(self) -> None:
        if self.exact and self.possible:
            msg = "A resolution cannot contain both exact and possible districts"
            raise ValueError(msg)


def _city_explain(city: str) -> str:
    return f'Based on the city "{city}". Include your full address with ZIP code for an exact match.'


def resolve_districts(directory: BaseDistrictDirectory, lookup: LookupInput) -> Resolution:
    """Resolve a validated lookup against the district directory.

    Args:
        directory: District directory to consult.
        lookup: Output of ``validate_lookup_input``.

    Returns:
        Exact or possible districts plus a human-readable explanation
        (empty for exact matches).
    """
    if lookup.address is None:
        zip_code = lookup.zip or ""
        districts = directory.lookup_by_zip(zip_code)
        if districts:
            return Resolution(exact=districts.to_districts(MatchType.EXACT))
        return Resolution(explain=ZIP_NOT_FOUND_EXPLAIN)

    parsed = normalize_address(lookup.address, directory.known_cities)

    if parsed.zip is not None:
        districts = directory.lookup_by_zip(parsed.zip)
        if districts:
            return Resolution(exact=districts.to_districts(MatchType.EXACT))

    if parsed.city is not None:
        districts = directory.lookup_by_city(parsed.city)
        if districts:
            return Resolution(
                possible=districts.to_districts(MatchType.POSSIBLE),
                explain=_city_explain(parsed.city),
            )

    return Resolution(explain=NOTHING_RECOGNIZED_EXPLAIN)
