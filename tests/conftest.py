"""Shared test fixtures for async database, sessions, settings, and district tables."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from wyo_alerts.core.config import Settings
from wyo_alerts.core.database import enable_sqlite_foreign_keys
from wyo_alerts.lib.districts import DistrictSet, StaticDistrictDirectory
from wyo_alerts.models.base import Base
from wyo_alerts.models.subscriber import Subscriber, SubscriberDistrict


@pytest.fixture
def settings() -> Settings:
    """Test application settings."""
    return Settings(database_url="sqlite+aiosqlite:///:memory:")


@pytest.fixture
def directory() -> StaticDistrictDirectory:
    """A small district directory: two Cheyenne ZIPs plus two cities."""
    return StaticDistrictDirectory(
        zips={
            "82001": DistrictSet(house=("07",), senate=("04",)),
            "82009": DistrictSet(house=("11",), senate=("06",)),
        },
        cities={
            "cheyenne": DistrictSet(house=("04", "05", "07"), senate=("02", "04")),
            "casper": DistrictSet(house=("28",), senate=("26",)),
        },
    )


@pytest.fixture
async def async_engine(settings: Settings) -> AsyncGenerator[AsyncEngine]:
    """Create an in-memory async SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def async_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create a per-test async session."""
    session_factory = async_sessionmaker(async_engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
async def sample_subscriber(async_session: AsyncSession) -> Subscriber:
    """A confirmed email-and-SMS subscriber following H07 and S04."""
    now = datetime.now(UTC)
    subscriber = Subscriber(
        email="resident@example.com",
        phone_e164="+13075551234",
        consent_checkbox_at=now,
        email_confirmed_at=now,
        sms_confirmed_at=now,
    )
    async_session.add(subscriber)
    await async_session.flush()
    async_session.add_all(
        [
            SubscriberDistrict(subscriber_id=subscriber.id, chamber="house", district_code="H07", added_via="exact"),
            SubscriberDistrict(subscriber_id=subscriber.id, chamber="senate", district_code="S04", added_via="exact"),
        ]
    )
    await async_session.commit()
    return subscriber
