"""FastAPI dependency injection for database sessions and the district directory."""

from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from wyo_alerts.core.config import Settings, get_settings
from wyo_alerts.core.database import get_session_factory
from wyo_alerts.lib.districts import BaseDistrictDirectory, load_directory


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Yield an async database session with per-request lifecycle."""
    factory = get_session_factory()
    async with factory() as session:
        yield session


@lru_cache(maxsize=4)
def _cached_directory(path: str | None) -> BaseDistrictDirectory:
    return load_directory(path)


def get_district_directory(
    settings: Annotated[Settings, Depends(get_settings)],
) -> BaseDistrictDirectory:
    """Return the process-wide district directory.

    Loaded once per data path and shared read-only across requests; tests
    override this dependency with fixture tables.
    """
    return _cached_directory(settings.district_data_path)
