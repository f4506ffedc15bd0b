"""Notification targeting — who should hear about a recorded vote, and how.

The dispatcher that actually sends email and SMS lives outside this
service.  It asks :func:`plan_vote_notifications` for targets, delivers,
and then calls ``dedup_service.record_sent`` for each channel it used.
"""

from dataclasses import dataclass, field

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wyo_alerts.lib.contact import Channel, DeliveryMode, QuietHours
from wyo_alerts.models.subscriber import NotificationPreference, Subscriber, SubscriberDistrict
from wyo_alerts.models.vote import Vote
from wyo_alerts.services.dedup_service import should_send


@dataclass
class NotificationTarget:
    """A subscriber to notify about one vote."""

    subscriber_id: int
    email: str | None
    phone_e164: str | None
    mode: DeliveryMode
    quiet_hours: QuietHours | None
    channels: list[Channel] = field(default_factory=list)
    districts: list[str] = field(default_factory=list)


def effective_mode(preference: NotificationPreference | None) -> DeliveryMode:
    """Delivery mode for a subscriber; no preference row means realtime."""
    if preference is None or not preference.mode:
        return DeliveryMode.REALTIME
    try:
        return DeliveryMode(preference.mode)
    except ValueError:
        logger.warning(f"Unknown delivery mode {preference.mode!r}; using realtime")
        return DeliveryMode.REALTIME


def confirmed_channels(subscriber: Subscriber) -> list[Channel]:
    """Channels the subscriber has confirmed and can be reached on."""
    channels: list[Channel] = []
    if subscriber.email and subscriber.email_confirmed_at is not None:
        channels.append(Channel.EMAIL)
    if subscriber.phone_e164 and subscriber.sms_confirmed_at is not None:
        channels.append(Channel.SMS)
    return channels


async def plan_vote_notifications(session: AsyncSession, vote_id: int) -> list[NotificationTarget]:
    """Work out which subscribers to notify about a vote.

    A subscriber is targeted when one of their districts had a member
    voting.  Only confirmed channels not yet recorded in the dedup table
    are returned; subscribers left with no channel are skipped.

    Args:
        session: Database session.
        vote_id: Vote to plan for.

    Returns:
        Targets ordered by subscriber id (empty if the vote is unknown).
    """
    vote = await session.get(Vote, vote_id, populate_existing=True)
    if vote is None:
        logger.warning(f"Vote {vote_id} not found; nothing to notify")
        return []

    voted_districts = {mv.legislator_district for mv in vote.member_votes}
    if not voted_districts:
        return []

    # Canonical codes carry the chamber letter, so the code alone identifies the seat.
    memberships = (
        (await session.execute(select(SubscriberDistrict).where(SubscriberDistrict.district_code.in_(voted_districts))))
        .scalars()
        .all()
    )

    districts_by_subscriber: dict[int, list[str]] = {}
    for membership in memberships:
        districts_by_subscriber.setdefault(membership.subscriber_id, []).append(membership.district_code)
    if not districts_by_subscriber:
        return []

    subscribers = (
        (
            await session.execute(
                select(Subscriber)
                .where(Subscriber.id.in_(districts_by_subscriber))
                .order_by(Subscriber.id)
                .execution_options(populate_existing=True)
            )
        )
        .scalars()
        .all()
    )

    targets: list[NotificationTarget] = []
    for subscriber in subscribers:
        channels = [
            channel
            for channel in confirmed_channels(subscriber)
            if await should_send(session, subscriber.id, vote_id, channel)
        ]
        if not channels:
            continue
        preference = subscriber.preference
        quiet_hours = QuietHours.from_dict(preference.quiet_hours) if preference and preference.quiet_hours else None
        targets.append(
            NotificationTarget(
                subscriber_id=subscriber.id,
                email=subscriber.email,
                phone_e164=subscriber.phone_e164,
                mode=effective_mode(preference),
                quiet_hours=quiet_hours,
                channels=channels,
                districts=sorted(districts_by_subscriber[subscriber.id]),
            )
        )

    logger.info(f"Vote {vote_id}: {len(targets)} subscribers to notify")
    return targets
