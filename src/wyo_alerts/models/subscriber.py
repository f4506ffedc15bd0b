"""Subscriber, district-membership, and notification-preference models.

A subscriber is created together with its memberships; the memberships are
the fan-out set used to target vote alerts.  The preference row is
best-effort: when it is missing, dispatch treats the subscriber as
``realtime``.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wyo_alerts.models.base import Base, CreatedAtMixin, IntIdMixin, JSONType


class Subscriber(Base, IntIdMixin, CreatedAtMixin):
    """A person registered for vote alerts by email, SMS, or both."""

    __tablename__ = "subscribers"

    email: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    phone_e164: Mapped[str | None] = mapped_column(String(20), nullable=True, index=True)
    consent_checkbox_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    email_confirmed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    sms_confirmed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    districts: Mapped[list["SubscriberDistrict"]] = relationship(
        back_populates="subscriber", cascade="all, delete-orphan", passive_deletes=True, lazy="selectin"
    )
    preference: Mapped["NotificationPreference | None"] = relationship(
        back_populates="subscriber", cascade="all, delete-orphan", passive_deletes=True, lazy="selectin"
    )

    __table_args__ = (
        CheckConstraint("email IS NOT NULL OR phone_e164 IS NOT NULL", name="ck_subscribers_contact"),
    )


class SubscriberDistrict(Base):
    """One district a subscriber follows.

    ``district_code`` is canonical (``H07``/``S04``).
    """

    __tablename__ = "subscriber_districts"

    subscriber_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("subscribers.id", ondelete="CASCADE"), primary_key=True
    )
    chamber: Mapped[str] = mapped_column(String(10), primary_key=True)
    district_code: Mapped[str] = mapped_column(String(10), primary_key=True)
    added_via: Mapped[str] = mapped_column(String(20), nullable=False, default="exact")

    subscriber: Mapped[Subscriber] = relationship(back_populates="districts")

    __table_args__ = (Index("ix_subscriber_districts_district", "chamber", "district_code"),)


class NotificationPreference(Base):
    """Delivery mode and quiet hours; one row per subscriber."""

    __tablename__ = "notification_preferences"

    subscriber_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("subscribers.id", ondelete="CASCADE"), primary_key=True
    )
    mode: Mapped[str] = mapped_column(String(20), nullable=False, default="realtime")
    quiet_hours: Mapped[dict | None] = mapped_column(JSONType, nullable=True)

    subscriber: Mapped[Subscriber] = relationship(back_populates="preference")
