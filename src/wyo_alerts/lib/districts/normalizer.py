"""Lookup-input validation and free-text address normalization.

Validation rejects input that cannot plausibly be a Wyoming location before
it reaches the resolver.  Normalization then pulls a candidate ZIP code and
a recognized city name out of whatever the user typed.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass

from wyo_alerts.core.errors import InvalidRegionError, InvalidRequestError

# Match priority order: earlier cities win when an address names several.
WYOMING_CITIES: tuple[str, ...] = (
    "cheyenne",
    "casper",
    "laramie",
    "gillette",
    "rock springs",
    "sheridan",
    "green river",
    "evanston",
    "riverton",
    "jackson",
    "cody",
    "powell",
    "worland",
    "torrington",
    "douglas",
    "wheatland",
    "newcastle",
    "buffalo",
    "rawlins",
)

# Every Wyoming ZIP code starts with 82.
WYOMING_ZIP_RE = re.compile(r"^82\d{3}$")
# Substring match: "WY", "Wyo." and "WY82001" all qualify.
_WYOMING_TOKEN_RE = re.compile(r"wy", re.IGNORECASE)
# Five digits not embedded in a longer number; letters may touch ("wy82001").
_ZIP_IN_TEXT_RE = re.compile(r"(?<!\d)(\d{5})(?!\d)")
_MIN_ADDRESS_LENGTH = 10


@dataclass(frozen=True)
class NormalizedAddress:
    """City token and candidate ZIP extracted from a free-text address."""

    city: str | None = None
    zip: str | None = None


@dataclass(frozen=True)
class LookupInput:
    """Validated lookup request: exactly one of address or zip is set."""

    address: str | None = None
    zip: str | None = None


def normalize_address(address: str, cities: Sequence[str] = WYOMING_CITIES) -> NormalizedAddress:
    """Extract a ZIP code and a known city from a free-text address.

    The first run of exactly five digits becomes the candidate ZIP; no
    validity check is made beyond its shape.  Cities are scanned in the
    given order and the first whole-word match wins; a state code or ZIP
    run into the name ("cheyennewy", "cheyenne82001") still counts.

    Args:
        address: Raw address text.
        cities: Lower-cased city names in match-priority order.

    Returns:
        The extracted city and ZIP, either of which may be None.
    """
    text = address.lower().strip()

    zip_match = _ZIP_IN_TEXT_RE.search(text)
    zip_code = zip_match.group(1) if zip_match else None

    city = None
    for candidate in cities:
        if re.search(rf"(?<![a-z]){re.escape(candidate.lower())}(?=wy|[^a-z]|$)", text):
            city = candidate.lower()
            break

    return NormalizedAddress(city=city, zip=zip_code)


def validate_lookup_input(address: str | None = None, zip_code: str | None = None) -> LookupInput:
    """Check a lookup request against the Wyoming-only preconditions.

    When both fields are supplied the address is used, since it may carry
    a ZIP as well as a city.

    Args:
        address: Free-text address.
        zip_code: Five-digit ZIP code.

    Returns:
        The cleaned lookup input.

    Raises:
        InvalidRequestError: Neither field has content.
        InvalidRegionError: The input is not a Wyoming ZIP or address.
    """
    address = address.strip() if address else None
    zip_code = zip_code.strip() if zip_code else None

    if address:
        if len(address) <= _MIN_ADDRESS_LENGTH or not _WYOMING_TOKEN_RE.search(address):
            msg = "Please enter a full Wyoming address, including 'WY' or 'Wyoming'"
            raise InvalidRegionError(msg)
        return LookupInput(address=address)

    if zip_code:
        if not WYOMING_ZIP_RE.match(zip_code):
            msg = f"{zip_code!r} is not a Wyoming ZIP code (Wyoming ZIP codes start with 82)"
            raise InvalidRegionError(msg)
        return LookupInput(zip=zip_code)

    msg = "Address or ZIP required"
    raise InvalidRequestError(msg)
