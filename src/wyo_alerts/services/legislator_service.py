"""Legislator service — roster import and district-based lookups."""

import json
from collections.abc import Iterable
from importlib import resources
from typing import Any

from loguru import logger
from sqlalchemy import and_, delete, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wyo_alerts.core.errors import LegislatorImportError
from wyo_alerts.lib.districts import Chamber, District
from wyo_alerts.models.legislator import Legislator

_ROSTER_FILE = "legislators.json"
_ROSTER_FIELDS = ("name", "email", "party", "district_code", "chamber", "phone", "profile_url")


def load_roster() -> list[dict[str, Any]]:
    """Load the bundled roster of sitting legislators.

    Returns:
        One dict per legislator with the fields in ``_ROSTER_FIELDS``.
    """
    raw = resources.files("wyo_alerts.data").joinpath(_ROSTER_FILE).read_text(encoding="utf-8")
    return json.loads(raw)


async def import_legislators(session: AsyncSession, roster: list[dict[str, Any]] | None = None) -> int:
    """Replace every legislator row with the given roster.

    Delete and insert happen in one transaction, so a failed import leaves
    the previous roster in place.  Running the import twice yields the same
    table.

    Args:
        session: Database session.
        roster: Records to import (defaults to the bundled roster).

    Returns:
        Number of legislators imported.

    Raises:
        LegislatorImportError: If the replacement could not be committed.
    """
    records = roster if roster is not None else load_roster()
    logger.info(f"Importing {len(records)} legislators")
    try:
        await session.execute(delete(Legislator))
        session.add_all(
            Legislator(
                **{name: record.get(name) for name in _ROSTER_FIELDS},
                active=True,
            )
            for record in records
        )
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Error importing legislators: {e}")
        msg = "Failed to import legislators"
        raise LegislatorImportError(msg) from e
    logger.info(f"Successfully imported {len(records)} legislators")
    return len(records)


async def list_legislators(
    session: AsyncSession,
    *,
    chamber: str | None = None,
    district_code: str | None = None,
    search: str | None = None,
) -> list[Legislator]:
    """List active legislators ordered by chamber then district.

    Args:
        session: Database session.
        chamber: Only this chamber (``house`` or ``senate``).
        district_code: Only this district number (``7`` and ``07`` both work).
        search: Case-insensitive match against name, district, or party.

    Returns:
        Matching legislators.
    """
    query = select(Legislator).where(Legislator.active.is_(True))
    if chamber:
        query = query.where(Legislator.chamber == chamber)
    if district_code:
        query = query.where(Legislator.district_code == district_code.strip().zfill(2))
    if search:
        pattern = f"%{search.strip()}%"
        query = query.where(
            or_(
                Legislator.name.ilike(pattern),
                Legislator.district_code.ilike(pattern),
                Legislator.party.ilike(pattern),
            )
        )
    result = await session.execute(query.order_by(Legislator.chamber, Legislator.district_code))
    return list(result.scalars().all())


async def legislators_for_districts(session: AsyncSession, districts: Iterable[District]) -> list[Legislator]:
    """Return the active legislators holding any of the given seats."""
    seats = {(d.chamber, d.code) for d in districts}
    if not seats:
        return []
    conditions = [
        and_(Legislator.chamber == Chamber(chamber).value, Legislator.district_code == code)
        for chamber, code in sorted(seats)
    ]
    result = await session.execute(
        select(Legislator)
        .where(Legislator.active.is_(True), or_(*conditions))
        .order_by(Legislator.chamber, Legislator.district_code)
    )
    return list(result.scalars().all())
