"""Canonical district codes: chamber letter plus two-digit district number.

House district 7 is ``H07``; senate district 4 is ``S04``.  Subscriptions
store and exchange districts in this form.
"""

import re
from dataclasses import dataclass
from enum import StrEnum

from wyo_alerts.core.errors import InvalidRequestError
from wyo_alerts.lib.districts.base import Chamber

_CODE_RE = re.compile(r"^([HS])(\d{1,2})$", re.IGNORECASE)
_PREFIX: dict[Chamber, str] = {Chamber.HOUSE: "H", Chamber.SENATE: "S"}
_CHAMBER_BY_PREFIX: dict[str, Chamber] = {v: k for k, v in _PREFIX.items()}


class AddedVia(StrEnum):
    """How a district ended up in a subscriber's membership set."""

    EXACT = "exact"
    POSSIBLE = "possible"
    MANUAL = "manual"


@dataclass(frozen=True)
class DistrictSelection:
    """A district chosen by a subscriber."""

    chamber: Chamber
    number: str
    added_via: AddedVia = AddedVia.EXACT

    @property
    def code(self) -> str:
        return format_district_code(self.chamber, self.number)


def format_district_code(chamber: Chamber | str, number: str | int) -> str:
    """Format a chamber and district number as a canonical code.

    Raises:
        InvalidRequestError: If the number is not a 1-2 digit integer.
    """
    digits = str(number).strip()
    if not digits.isdigit() or len(digits.lstrip("0") or "0") > 2:
        msg = f"Invalid district number: {number!r}"
        raise InvalidRequestError(msg)
    return f"{_PREFIX[Chamber(chamber)]}{int(digits):02d}"


def parse_district_code(code: str, added_via: AddedVia = AddedVia.EXACT) -> DistrictSelection:
    """Parse a canonical code such as ``H07`` or ``s4``.

    Raises:
        InvalidRequestError: If the code is not a chamber letter followed by
            one or two digits.
    """
    match = _CODE_RE.match(code.strip())
    if not match:
        msg = f"Invalid district code: {code!r} (expected e.g. H07 or S04)"
        raise InvalidRequestError(msg)
    prefix, digits = match.groups()
    return DistrictSelection(
        chamber=_CHAMBER_BY_PREFIX[prefix.upper()],
        number=f"{int(digits):02d}",
        added_via=added_via,
    )


def dedupe_selections(selections: list[DistrictSelection]) -> list[DistrictSelection]:
    """Drop repeated (chamber, number) pairs, keeping the first occurrence."""
    seen: set[tuple[Chamber, str]] = set()
    unique: list[DistrictSelection] = []
    for selection in selections:
        key = (selection.chamber, selection.number)
        if key not in seen:
            seen.add(key)
            unique.append(selection)
    return unique
