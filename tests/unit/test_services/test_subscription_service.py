"""Unit tests for the subscription service."""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from wyo_alerts.core.errors import (
    ConsentRequiredError,
    InvalidRequestError,
    MissingContactError,
    NoDistrictsSelectedError,
    SubscriptionFailedError,
    UnsupportedRegionError,
)
from wyo_alerts.lib.districts import AddedVia, Chamber, DistrictSelection, parse_district_code
from wyo_alerts.models.subscriber import NotificationPreference, Subscriber, SubscriberDistrict
from wyo_alerts.services.subscription_service import count_subscribers, get_subscriber, subscribe

H07 = DistrictSelection(Chamber.HOUSE, "07")
S04 = DistrictSelection(Chamber.SENATE, "04")


async def _count(session, model) -> int:
    return (await session.execute(select(func.count()).select_from(model))).scalar_one()


class TestSubscribeValidation:
    """Validation failures never touch the database."""

    @pytest.mark.asyncio
    async def test_missing_contact(self, async_session) -> None:
        with pytest.raises(MissingContactError):
            await subscribe(async_session, email=None, phone=None, districts=[H07], mode="realtime", consent=True)
        assert await count_subscribers(async_session) == 0

    @pytest.mark.asyncio
    async def test_non_wyoming_phone(self, async_session) -> None:
        with pytest.raises(UnsupportedRegionError, match="Phone number must be a Wyoming number"):
            await subscribe(
                async_session, email=None, phone="555-123-4567", districts=[H07], mode="realtime", consent=True
            )
        assert await count_subscribers(async_session) == 0

    @pytest.mark.asyncio
    async def test_consent_required(self, async_session) -> None:
        with pytest.raises(ConsentRequiredError, match="Consent required"):
            await subscribe(
                async_session, email="a@example.com", phone=None, districts=[H07], mode="realtime", consent=False
            )
        assert await count_subscribers(async_session) == 0

    @pytest.mark.asyncio
    async def test_districts_required(self, async_session) -> None:
        with pytest.raises(NoDistrictsSelectedError, match="At least one district required"):
            await subscribe(async_session, email="a@example.com", phone=None, districts=[], mode="daily", consent=True)
        assert await count_subscribers(async_session) == 0

    @pytest.mark.asyncio
    async def test_invalid_mode(self, async_session) -> None:
        with pytest.raises(InvalidRequestError, match="Invalid delivery mode"):
            await subscribe(
                async_session, email="a@example.com", phone=None, districts=[H07], mode="hourly", consent=True
            )
        assert await count_subscribers(async_session) == 0

    @pytest.mark.asyncio
    async def test_contact_checked_before_consent(self, async_session) -> None:
        with pytest.raises(MissingContactError):
            await subscribe(async_session, email=None, phone=None, districts=[], mode="hourly", consent=False)


class TestSubscribe:
    """Tests for successful signups."""

    @pytest.mark.asyncio
    async def test_email_only_needs_no_confirmation(self, async_session) -> None:
        result = await subscribe(
            async_session, email="a@example.com", phone=None, districts=[H07, S04], mode="realtime", consent=True
        )
        assert result.confirmation_needed is False
        assert result.preference_saved is True

        subscriber = await get_subscriber(async_session, result.subscriber_id)
        assert subscriber is not None
        assert subscriber.email == "a@example.com"
        assert subscriber.phone_e164 is None
        assert subscriber.email_confirmed_at is not None
        assert subscriber.consent_checkbox_at is not None
        assert {(d.chamber, d.district_code) for d in subscriber.districts} == {("house", "H07"), ("senate", "S04")}

    @pytest.mark.asyncio
    async def test_phone_needs_confirmation(self, async_session) -> None:
        result = await subscribe(
            async_session, email=None, phone="307-555-1234", districts=[H07], mode="realtime", consent=True
        )
        assert result.confirmation_needed is True

        subscriber = await get_subscriber(async_session, result.subscriber_id)
        assert subscriber.phone_e164 == "+13075551234"
        assert subscriber.sms_confirmed_at is None
        assert subscriber.email_confirmed_at is None

    @pytest.mark.asyncio
    async def test_auto_confirm_can_be_disabled(self, async_session) -> None:
        result = await subscribe(
            async_session,
            email="a@example.com",
            phone=None,
            districts=[H07],
            mode="realtime",
            consent=True,
            auto_confirm_email=False,
        )
        subscriber = await get_subscriber(async_session, result.subscriber_id)
        assert subscriber.email_confirmed_at is None

    @pytest.mark.asyncio
    async def test_preference_row_stores_mode_and_quiet_hours(self, async_session) -> None:
        quiet = {"start": "22:00", "end": "07:00", "tz": "America/Denver"}
        result = await subscribe(
            async_session,
            email="a@example.com",
            phone=None,
            districts=[H07],
            mode="daily",
            consent=True,
            quiet_hours=quiet,
        )
        preference = await async_session.get(NotificationPreference, result.subscriber_id)
        assert preference.mode == "daily"
        assert preference.quiet_hours == quiet

    @pytest.mark.asyncio
    async def test_duplicate_districts_collapsed(self, async_session) -> None:
        result = await subscribe(
            async_session,
            email="a@example.com",
            phone=None,
            districts=[parse_district_code("H07"), parse_district_code("h7"), S04],
            mode="realtime",
            consent=True,
        )
        memberships = (
            (
                await async_session.execute(
                    select(SubscriberDistrict).where(SubscriberDistrict.subscriber_id == result.subscriber_id)
                )
            )
            .scalars()
            .all()
        )
        assert sorted(m.district_code for m in memberships) == ["H07", "S04"]
        assert all(m.added_via == AddedVia.EXACT for m in memberships)


class TestSubscribeFailures:
    """Persistence failures and partial-write behaviour."""

    @pytest.mark.asyncio
    async def test_membership_failure_leaves_no_subscriber(self, async_session) -> None:
        with (
            patch(
                "wyo_alerts.services.subscription_service._add_memberships",
                new_callable=AsyncMock,
                side_effect=OperationalError("INSERT", {}, Exception("disk full")),
            ),
            pytest.raises(SubscriptionFailedError, match="Failed to create district subscriptions"),
        ):
            await subscribe(
                async_session, email="a@example.com", phone=None, districts=[H07], mode="realtime", consent=True
            )

        assert await _count(async_session, Subscriber) == 0
        assert await _count(async_session, SubscriberDistrict) == 0

    @pytest.mark.asyncio
    async def test_subscriber_insert_failure(self, async_session) -> None:
        with (
            patch.object(async_session, "flush", new_callable=AsyncMock, side_effect=SQLAlchemyError("down")),
            pytest.raises(SubscriptionFailedError, match="Failed to create subscription"),
        ):
            await subscribe(
                async_session, email="a@example.com", phone=None, districts=[H07], mode="realtime", consent=True
            )
        assert await _count(async_session, Subscriber) == 0

    @pytest.mark.asyncio
    async def test_preference_failure_still_succeeds(self, async_session) -> None:
        with patch(
            "wyo_alerts.services.subscription_service._create_preference",
            new_callable=AsyncMock,
            return_value=False,
        ):
            result = await subscribe(
                async_session, email="a@example.com", phone=None, districts=[H07], mode="daily", consent=True
            )

        assert result.preference_saved is False
        assert await _count(async_session, Subscriber) == 1
        assert await _count(async_session, SubscriberDistrict) == 1
        assert await _count(async_session, NotificationPreference) == 0
