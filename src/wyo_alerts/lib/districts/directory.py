"""Table-driven district directory backed by ZIP and city lookup tables.

The tables are a coarse stand-in for real geocoding: one ZIP maps to the
districts that cover it, one city maps to every district it touches.  They
are loaded once at process start from JSON (bundled with the package or
supplied via ``DISTRICT_DATA_PATH``) and never mutated afterwards.
"""

import json
from collections.abc import Mapping
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any

from loguru import logger

from wyo_alerts.lib.districts.base import BaseDistrictDirectory, DistrictSet

_BUNDLED_DATA = "districts.json"


class StaticDistrictDirectory(BaseDistrictDirectory):
    """In-memory directory over immutable ZIP and city tables."""

    def __init__(
        self,
        zips: Mapping[str, DistrictSet],
        cities: Mapping[str, DistrictSet],
    ) -> None:
        self._zips: Mapping[str, DistrictSet] = MappingProxyType(dict(zips))
        self._cities: Mapping[str, DistrictSet] = MappingProxyType({k.lower(): v for k, v in cities.items()})

    def lookup_by_zip(self, zip_code: str) -> DistrictSet | None:
        return self._zips.get(zip_code)

    def lookup_by_city(self, city: str) -> DistrictSet | None:
        return self._cities.get(city.lower())

    @property
    def known_cities(self) -> tuple[str, ...]:
        return tuple(self._cities)

    @property
    def known_zips(self) -> tuple[str, ...]:
        return tuple(self._zips)

    @property
    def zip_count(self) -> int:
        return len(self._zips)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StaticDistrictDirectory":
        """Build a directory from the ``{"zips": {...}, "cities": {...}}`` layout.

        Each entry is ``{"house": [codes], "senate": [codes]}``; extra keys
        (such as ``locality``) are ignored.  Codes are zero-padded to two
        digits and de-duplicated preserving order.

        Raises:
            ValueError: If either table is missing or an entry is malformed.
        """
        try:
            zips = {str(k): _parse_entry(v) for k, v in data["zips"].items()}
            cities = {str(k): _parse_entry(v) for k, v in data["cities"].items()}
        except (KeyError, TypeError, AttributeError) as e:
            msg = f"Malformed district data: {e}"
            raise ValueError(msg) from e
        return cls(zips, cities)


def _parse_entry(entry: Mapping[str, Any]) -> DistrictSet:
    return DistrictSet(
        house=_normalize_codes(entry.get("house", [])),
        senate=_normalize_codes(entry.get("senate", [])),
    )


def _normalize_codes(codes: list[Any]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for code in codes:
        seen.setdefault(str(code).strip().zfill(2), None)
    return tuple(seen)


def load_directory(path: str | Path | None = None) -> StaticDistrictDirectory:
    """Load the district directory from a JSON file.

    Args:
        path: JSON file to read.  When None, the tables bundled with the
            package are used.

    Returns:
        A populated, read-only directory.
    """
    if path is None:
        raw = resources.files("wyo_alerts.data").joinpath(_BUNDLED_DATA).read_text(encoding="utf-8")
        source = f"bundled {_BUNDLED_DATA}"
    else:
        raw = Path(path).read_text(encoding="utf-8")
        source = str(path)

    directory = StaticDistrictDirectory.from_dict(json.loads(raw))
    logger.info(
        "Loaded district directory from {} ({} ZIP codes, {} cities)",
        source,
        directory.zip_count,
        len(directory.known_cities),
    )
    return directory
