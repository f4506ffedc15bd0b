"""Outbound dedup guard — at most one notification per subscriber, vote, and channel.

Dispatchers call :func:`should_send` before delivering and
:func:`record_sent` afterwards.  The check is only an optimisation: the
composite primary key on ``outbound_dedup`` is what actually prevents double
delivery when several workers race on the same triple, and a duplicate
insert is reported as "already sent" rather than raised.
"""

from datetime import UTC, datetime

from loguru import logger
from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from wyo_alerts.core.errors import InvalidRequestError
from wyo_alerts.lib.contact import Channel
from wyo_alerts.models.outbound_dedup import OutboundDedup


def _parse_channel(channel: str) -> Channel:
    try:
        return Channel(channel)
    except ValueError as e:
        msg = f"Invalid channel {channel!r}: expected 'email' or 'sms'"
        raise InvalidRequestError(msg) from e


async def should_send(session: AsyncSession, subscriber_id: int, vote_id: int, channel: str) -> bool:
    """Return True if no notification has been recorded for this triple."""
    ch = _parse_channel(channel)
    result = await session.execute(
        select(OutboundDedup.subscriber_id).where(
            OutboundDedup.subscriber_id == subscriber_id,
            OutboundDedup.vote_id == vote_id,
            OutboundDedup.channel == ch.value,
        )
    )
    return result.first() is None


async def record_sent(
    session: AsyncSession,
    subscriber_id: int,
    vote_id: int,
    channel: str,
    *,
    sent_at: datetime | None = None,
) -> bool:
    """Record a delivery for the triple.

    Args:
        session: Database session; committed on success, rolled back on a
            duplicate.
        subscriber_id: Recipient.
        vote_id: Vote the notification was about.
        channel: ``email`` or ``sms``.
        sent_at: Delivery time (defaults to now).

    Returns:
        True if this call recorded the delivery, False if another caller
        already had.

    Raises:
        IntegrityError: The insert violated a constraint other than the
            dedup key, such as an unknown subscriber.
    """
    ch = _parse_channel(channel)
    try:
        await session.execute(
            insert(OutboundDedup).values(
                subscriber_id=subscriber_id,
                vote_id=vote_id,
                channel=ch.value,
                sent_at=sent_at or datetime.now(UTC),
            )
        )
        await session.commit()
    except IntegrityError:
        await session.rollback()
        if await should_send(session, subscriber_id, vote_id, ch):
            # Not a duplicate (e.g. unknown subscriber); let the caller see it.
            raise
        logger.info(f"Notification already recorded: subscriber={subscriber_id} vote={vote_id} channel={ch}")
        return False
    logger.debug(f"Recorded notification: subscriber={subscriber_id} vote={vote_id} channel={ch}")
    return True
