"""Legislator model — reference roster of sitting Wyoming legislators."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, String, Text, func, true
from sqlalchemy.orm import Mapped, mapped_column

from wyo_alerts.models.base import Base, CreatedAtMixin, IntIdMixin


class Legislator(Base, IntIdMixin, CreatedAtMixin):
    """A member of the Wyoming House or Senate for the active session.

    ``district_code`` is the bare zero-padded number (``"07"``); combined
    with ``chamber`` it identifies the seat.  The whole table is replaced
    by each roster import.
    """

    __tablename__ = "legislators"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str | None] = mapped_column(String(200), nullable=True)
    party: Mapped[str | None] = mapped_column(String(10), nullable=True)
    district_code: Mapped[str] = mapped_column(String(10), nullable=False)
    chamber: Mapped[str] = mapped_column(String(10), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    profile_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (Index("ix_legislators_chamber_district", "chamber", "district_code"),)
