"""OutboundDedup model — append-only record of notifications already sent."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from wyo_alerts.models.base import Base


class OutboundDedup(Base):
    """Marks that a subscriber was notified about a vote on a channel.

    The composite primary key is the authoritative guard against double
    delivery: concurrent dispatchers racing on the same triple collide on
    the constraint and exactly one insert wins.  Rows are never updated or
    deleted.
    """

    __tablename__ = "outbound_dedup"

    subscriber_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("subscribers.id", ondelete="CASCADE"), primary_key=True
    )
    vote_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    channel: Mapped[str] = mapped_column(String(10), primary_key=True)
    sent_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())
