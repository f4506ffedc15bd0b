"""Integration tests for POST /subscriptions."""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from wyo_alerts.models.subscriber import Subscriber, SubscriberDistrict

URL = "/api/v1/subscriptions"


def _payload(**overrides) -> dict:
    payload = {
        "email": "resident@example.com",
        "phone": "",
        "selectedDistricts": ["H07", "S04"],
        "mode": "realtime",
        "consentCheckbox": True,
    }
    payload.update(overrides)
    return payload


async def _subscriber_count(session) -> int:
    return (await session.execute(select(func.count()).select_from(Subscriber))).scalar_one()


class TestCreateSubscription:
    """Tests for POST /api/v1/subscriptions."""

    @pytest.mark.asyncio
    async def test_email_signup(self, client, async_session) -> None:
        resp = await client.post(URL, json=_payload())
        assert resp.status_code == 200
        data = resp.json()
        assert data["success"] is True
        assert data["confirmation_needed"] is False
        assert isinstance(data["subscriber_id"], int)

        codes = (
            (await async_session.execute(select(SubscriberDistrict.district_code).order_by("district_code")))
            .scalars()
            .all()
        )
        assert codes == ["H07", "S04"]

    @pytest.mark.asyncio
    async def test_phone_signup_needs_confirmation(self, client, async_session) -> None:
        resp = await client.post(URL, json=_payload(email=None, phone="(307) 555-1234"))
        assert resp.status_code == 200
        assert resp.json()["confirmation_needed"] is True

        subscriber = await async_session.get(Subscriber, resp.json()["subscriber_id"])
        assert subscriber.phone_e164 == "+13075551234"

    @pytest.mark.asyncio
    async def test_out_of_state_phone_is_400(self, client, async_session) -> None:
        resp = await client.post(URL, json=_payload(email="", phone="555-123-4567"))
        assert resp.status_code == 400
        assert resp.json() == {"error": "Phone number must be a Wyoming number (307 area code)"}
        assert await _subscriber_count(async_session) == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("overrides", "message"),
        [
            ({"email": "", "phone": ""}, "Email or phone required"),
            ({"consentCheckbox": False}, "Consent required"),
            ({"selectedDistricts": []}, "At least one district required"),
        ],
    )
    async def test_business_rule_failures(self, client, async_session, overrides: dict, message: str) -> None:
        resp = await client.post(URL, json=_payload(**overrides))
        assert resp.status_code == 400
        assert resp.json() == {"error": message}
        assert await _subscriber_count(async_session) == 0

    @pytest.mark.asyncio
    async def test_bad_district_code_is_400(self, client) -> None:
        resp = await client.post(URL, json=_payload(selectedDistricts=["House 7"]))
        assert resp.status_code == 400
        assert "Invalid district code" in resp.json()["error"]

    @pytest.mark.asyncio
    async def test_bad_mode_is_400(self, client) -> None:
        resp = await client.post(URL, json=_payload(mode="weekly"))
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_invalid_email_is_400(self, client) -> None:
        resp = await client.post(URL, json=_payload(email="not-an-email"))
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_membership_failure_is_500_and_rolled_back(self, client, async_session) -> None:
        with patch(
            "wyo_alerts.services.subscription_service._add_memberships",
            new_callable=AsyncMock,
            side_effect=OperationalError("INSERT", {}, Exception("disk full")),
        ):
            resp = await client.post(URL, json=_payload())

        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to create district subscriptions"}
        assert await _subscriber_count(async_session) == 0
