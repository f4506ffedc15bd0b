"""District lookup service — validate input, then resolve against the directory."""

from loguru import logger

from wyo_alerts.lib.districts import BaseDistrictDirectory, Resolution, resolve_districts, validate_lookup_input


def lookup_districts(
    directory: BaseDistrictDirectory,
    *,
    address: str | None = None,
    zip_code: str | None = None,
) -> Resolution:
    """Resolve an address or ZIP code to legislative districts.

    Args:
        directory: District directory to consult.
        address: Free-text Wyoming address.
        zip_code: Five-digit Wyoming ZIP code.

    Returns:
        The resolution (exact or possible districts plus explanation).

    Raises:
        InvalidRequestError: Neither address nor ZIP supplied.
        InvalidRegionError: Input is not a Wyoming address or ZIP.
    """
    lookup = validate_lookup_input(address, zip_code)
    resolution = resolve_districts(directory, lookup)
    logger.info(
        f"District lookup ({'address' if lookup.address else 'zip'}): "
        f"{len(resolution.exact)} exact, {len(resolution.possible)} possible"
    )
    return resolution
