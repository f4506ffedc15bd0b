"""Subscription service — validate a signup and persist subscriber state.

A signup moves through these stages::

    received -> subscriber_created -> memberships_created -> preferences_created -> complete

The subscriber and its district memberships are written in a single
transaction, so a failure at either step leaves nothing behind and the
caller gets :class:`SubscriptionFailedError`.  The notification preference
is written afterwards in its own transaction; if that write fails it is
logged and the signup still completes (dispatch treats a subscriber with no
preference row as ``realtime``).
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wyo_alerts.core.errors import (
    ConsentRequiredError,
    InvalidRequestError,
    NoDistrictsSelectedError,
    SubscriptionFailedError,
)
from wyo_alerts.lib.contact import DeliveryMode, validate_contact
from wyo_alerts.lib.districts import DistrictSelection, dedupe_selections
from wyo_alerts.models.subscriber import NotificationPreference, Subscriber, SubscriberDistrict


class SubscriptionStage(StrEnum):
    """Progress of a single signup attempt."""

    RECEIVED = "received"
    SUBSCRIBER_CREATED = "subscriber_created"
    MEMBERSHIPS_CREATED = "memberships_created"
    PREFERENCES_CREATED = "preferences_created"
    COMPLETE = "complete"
    FAILED = "failed"


@dataclass(frozen=True)
class SubscriptionResult:
    """Outcome of a successful signup."""

    subscriber_id: int
    confirmation_needed: bool
    preference_saved: bool


def _parse_mode(mode: str) -> DeliveryMode:
    try:
        return DeliveryMode(mode)
    except ValueError as e:
        msg = f"Invalid delivery mode {mode!r}: expected 'realtime' or 'daily'"
        raise InvalidRequestError(msg) from e


async def _add_memberships(
    session: AsyncSession,
    subscriber_id: int,
    selections: list[DistrictSelection],
) -> None:
    session.add_all(
        SubscriberDistrict(
            subscriber_id=subscriber_id,
            chamber=selection.chamber.value,
            district_code=selection.code,
            added_via=selection.added_via.value,
        )
        for selection in selections
    )
    await session.flush()


async def _create_preference(
    session: AsyncSession,
    subscriber_id: int,
    mode: DeliveryMode,
    quiet_hours: dict[str, str] | None,
) -> bool:
    """Write the preference row; report failure instead of raising."""
    try:
        session.add(
            NotificationPreference(
                subscriber_id=subscriber_id,
                mode=mode.value,
                quiet_hours=quiet_hours,
            )
        )
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Error creating preferences for subscriber {subscriber_id}: {e}")
        return False
    return True


async def subscribe(
    session: AsyncSession,
    *,
    email: str | None,
    phone: str | None,
    districts: list[DistrictSelection],
    mode: str,
    consent: bool,
    area_code: str = "307",
    auto_confirm_email: bool = True,
    quiet_hours: dict[str, str] | None = None,
) -> SubscriptionResult:
    """Create a subscriber with its district memberships and preferences.

    All validation happens before anything is written.

    Args:
        session: Database session.
        email: Email address, optional if phone is given.
        phone: Phone number in any punctuation, optional if email is given.
        districts: Districts to follow; duplicates are collapsed.
        mode: ``realtime`` or ``daily``.
        consent: Whether the subscriber ticked the consent box.
        area_code: Area code a phone number must belong to.
        auto_confirm_email: Mark the email confirmed immediately.
        quiet_hours: Quiet-hours window stored on the preference row.

    Returns:
        The new subscriber's id and whether phone confirmation is pending.

    Raises:
        MissingContactError: Neither email nor phone supplied.
        UnsupportedRegionError: Phone number outside the area code.
        ConsentRequiredError: Consent not given.
        NoDistrictsSelectedError: Empty district list.
        InvalidRequestError: Unknown delivery mode.
        SubscriptionFailedError: Subscriber or memberships could not be saved.
    """
    contact = validate_contact(email, phone, area_code)
    if not consent:
        msg = "Consent required"
        raise ConsentRequiredError(msg)
    if not districts:
        msg = "At least one district required"
        raise NoDistrictsSelectedError(msg)
    delivery_mode = _parse_mode(mode)
    selections = dedupe_selections(districts)

    stage = SubscriptionStage.RECEIVED
    now = datetime.now(UTC)
    subscriber = Subscriber(
        email=contact.email,
        phone_e164=contact.phone_e164,
        consent_checkbox_at=now,
        email_confirmed_at=now if contact.email and auto_confirm_email else None,
        sms_confirmed_at=None,
    )
    try:
        session.add(subscriber)
        await session.flush()
        stage = SubscriptionStage.SUBSCRIBER_CREATED
        subscriber_id = subscriber.id

        await _add_memberships(session, subscriber_id, selections)
        stage = SubscriptionStage.MEMBERSHIPS_CREATED
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Subscription {SubscriptionStage.FAILED} after stage {stage}; rolled back: {e}")
        msg = (
            "Failed to create subscription"
            if stage is SubscriptionStage.RECEIVED
            else "Failed to create district subscriptions"
        )
        raise SubscriptionFailedError(msg) from e

    preference_saved = await _create_preference(session, subscriber_id, delivery_mode, quiet_hours)
    if preference_saved:
        stage = SubscriptionStage.PREFERENCES_CREATED
    else:
        logger.warning(f"Subscriber {subscriber_id} has no preference row (stopped after {stage}); defaults apply")
    stage = SubscriptionStage.COMPLETE

    confirmation_needed = contact.phone_e164 is not None
    if confirmation_needed:
        # Delivery of the confirmation text belongs to the SMS provider integration.
        logger.info(f"SMS confirmation pending for subscriber {subscriber_id}")

    logger.info(
        f"Subscriber {subscriber_id} {stage}: "
        f"{len(selections)} districts, mode={delivery_mode}"
    )
    return SubscriptionResult(
        subscriber_id=subscriber_id,
        confirmation_needed=confirmation_needed,
        preference_saved=preference_saved,
    )


async def get_subscriber(session: AsyncSession, subscriber_id: int) -> Subscriber | None:
    """Get a subscriber by ID (with memberships and preference eager-loaded)."""
    result = await session.execute(
        select(Subscriber).where(Subscriber.id == subscriber_id).execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def count_subscribers(session: AsyncSession) -> int:
    """Return the number of subscriber rows."""
    return (await session.execute(select(func.count(Subscriber.id)))).scalar_one()
