"""Bill, Vote, and MemberVote models — recorded floor votes.

Populated by the vote ingestion process; the alert side only reads them to
work out which subscribers a vote concerns.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wyo_alerts.models.base import Base, CreatedAtMixin, IntIdMixin


class Bill(Base, CreatedAtMixin):
    """A bill as published by the legislature (id is the LSO identifier)."""

    __tablename__ = "bills"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    session: Mapped[str | None] = mapped_column(String(20), nullable=True)
    short_code: Mapped[str | None] = mapped_column(String(50), nullable=True)
    title: Mapped[str | None] = mapped_column(Text, nullable=True)
    url: Mapped[str | None] = mapped_column(Text, nullable=True)
    last_seen_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class Vote(Base, IntIdMixin, CreatedAtMixin):
    """A recorded roll-call vote in one chamber."""

    __tablename__ = "votes"

    bill_id: Mapped[str | None] = mapped_column(String(50), ForeignKey("bills.id"), nullable=True, index=True)
    chamber: Mapped[str | None] = mapped_column(String(10), nullable=True)
    external_key: Mapped[str | None] = mapped_column(String(200), nullable=True, unique=True)
    action_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    result: Mapped[str | None] = mapped_column(String(50), nullable=True)
    yeas: Mapped[int | None] = mapped_column(Integer, nullable=True)
    nays: Mapped[int | None] = mapped_column(Integer, nullable=True)
    absent: Mapped[int | None] = mapped_column(Integer, nullable=True)
    excused: Mapped[int | None] = mapped_column(Integer, nullable=True)
    source_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    taken_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    member_votes: Mapped[list["MemberVote"]] = relationship(
        back_populates="vote", cascade="all, delete-orphan", lazy="selectin"
    )


class MemberVote(Base):
    """How the legislator for one district voted.

    ``legislator_district`` is the canonical district code (``H07``).
    """

    __tablename__ = "member_votes"

    vote_id: Mapped[int] = mapped_column(Integer, ForeignKey("votes.id", ondelete="CASCADE"), primary_key=True)
    legislator_district: Mapped[str] = mapped_column(String(10), primary_key=True)
    legislator_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    decision: Mapped[str | None] = mapped_column(String(20), nullable=True)

    vote: Mapped[Vote] = relationship(back_populates="member_votes")

