"""Core district types and the abstract district-directory interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum


class Chamber(StrEnum):
    """Legislative chamber."""

    HOUSE = "house"
    SENATE = "senate"


class MatchType(StrEnum):
    """Confidence of a district match.

    ``exact`` comes from a ZIP-level lookup; ``possible`` comes from a city
    that may span several districts and needs the user to confirm.
    """

    EXACT = "exact"
    POSSIBLE = "possible"


@dataclass(frozen=True)
class District:
    """A resolved legislative district.

    ``code`` is the zero-padded district number (e.g. ``"07"``), unique
    within its chamber for the active session.
    """

    chamber: Chamber
    code: str
    match_type: MatchType


@dataclass(frozen=True)
class DistrictSet:
    """House and senate district codes covering one locality (ZIP or city)."""

    house: tuple[str, ...] = ()
    senate: tuple[str, ...] = ()

    def to_districts(self, match_type: MatchType) -> list[District]:
        """Expand into District records, house districts first."""
        return [District(Chamber.HOUSE, code, match_type) for code in self.house] + [
            District(Chamber.SENATE, code, match_type) for code in self.senate
        ]

    def __bool__(self) -> bool:
        return bool(self.house or self.senate)


class BaseDistrictDirectory(ABC):
    """Read-only mapping from ZIP codes and city names to district sets.

    The bundled implementation is table-driven; a geocoding or
    polygon-intersection backend can replace it without touching the
    resolver, which depends only on this interface.

    A missing key is an expected outcome meaning "no data for this
    locality" and is reported as ``None``, never raised.
    """

    @abstractmethod
    def lookup_by_zip(self, zip_code: str) -> DistrictSet | None:
        """Return the districts for a 5-digit ZIP code, or None."""

    @abstractmethod
    def lookup_by_city(self, city: str) -> DistrictSet | None:
        """Return the districts for a lower-cased city name, or None."""

    @property
    @abstractmethod
    def known_cities(self) -> tuple[str, ...]:
        """City names recognized by this directory, in match-priority order."""
