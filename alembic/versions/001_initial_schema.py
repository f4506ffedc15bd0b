"""initial schema: legislators, subscribers, votes, dedup

Revision ID: 001
Revises:
Create Date: 2026-10-19

Creates every table the service uses:
  - legislators: roster replaced on each import
  - subscribers, subscriber_districts, notification_preferences: alert signups
  - bills, votes, member_votes: recorded floor votes
  - outbound_dedup: one row per (subscriber, vote, channel) already notified
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_JSON = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def _created_at() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())


def upgrade() -> None:
    op.create_table(
        "legislators",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(200), nullable=True),
        sa.Column("party", sa.String(10), nullable=True),
        sa.Column("district_code", sa.String(10), nullable=False),
        sa.Column("chamber", sa.String(10), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("profile_url", sa.Text, nullable=True),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
        _created_at(),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_legislators_chamber_district", "legislators", ["chamber", "district_code"])

    op.create_table(
        "subscribers",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone_e164", sa.String(20), nullable=True),
        sa.Column("consent_checkbox_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("email_confirmed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("sms_confirmed_at", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.CheckConstraint("email IS NOT NULL OR phone_e164 IS NOT NULL", name="ck_subscribers_contact"),
    )
    op.create_index("ix_subscribers_email", "subscribers", ["email"])
    op.create_index("ix_subscribers_phone_e164", "subscribers", ["phone_e164"])

    op.create_table(
        "subscriber_districts",
        sa.Column(
            "subscriber_id",
            sa.Integer,
            sa.ForeignKey("subscribers.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("chamber", sa.String(10), primary_key=True),
        sa.Column("district_code", sa.String(10), primary_key=True),
        sa.Column("added_via", sa.String(20), nullable=False),
    )
    op.create_index("ix_subscriber_districts_district", "subscriber_districts", ["chamber", "district_code"])

    op.create_table(
        "notification_preferences",
        sa.Column(
            "subscriber_id",
            sa.Integer,
            sa.ForeignKey("subscribers.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("mode", sa.String(20), nullable=False),
        sa.Column("quiet_hours", _JSON, nullable=True),
    )

    op.create_table(
        "bills",
        sa.Column("id", sa.String(50), primary_key=True),
        sa.Column("session", sa.String(20), nullable=True),
        sa.Column("short_code", sa.String(50), nullable=True),
        sa.Column("title", sa.Text, nullable=True),
        sa.Column("url", sa.Text, nullable=True),
        sa.Column("last_seen_at", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
    )

    op.create_table(
        "votes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("bill_id", sa.String(50), sa.ForeignKey("bills.id"), nullable=True),
        sa.Column("chamber", sa.String(10), nullable=True),
        sa.Column("external_key", sa.String(200), nullable=True, unique=True),
        sa.Column("action_text", sa.Text, nullable=True),
        sa.Column("result", sa.String(50), nullable=True),
        sa.Column("yeas", sa.Integer, nullable=True),
        sa.Column("nays", sa.Integer, nullable=True),
        sa.Column("absent", sa.Integer, nullable=True),
        sa.Column("excused", sa.Integer, nullable=True),
        sa.Column("source_url", sa.Text, nullable=True),
        sa.Column("taken_at", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
    )
    op.create_index("ix_votes_bill_id", "votes", ["bill_id"])

    op.create_table(
        "member_votes",
        sa.Column("vote_id", sa.Integer, sa.ForeignKey("votes.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("legislator_district", sa.String(10), primary_key=True),
        sa.Column("legislator_name", sa.String(200), nullable=True),
        sa.Column("decision", sa.String(20), nullable=True),
    )

    op.create_table(
        "outbound_dedup",
        sa.Column(
            "subscriber_id",
            sa.Integer,
            sa.ForeignKey("subscribers.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("vote_id", sa.Integer, primary_key=True),
        sa.Column("channel", sa.String(10), primary_key=True),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("outbound_dedup")
    op.drop_table("member_votes")
    op.drop_index("ix_votes_bill_id", table_name="votes")
    op.drop_table("votes")
    op.drop_table("bills")
    op.drop_table("notification_preferences")
    op.drop_index("ix_subscriber_districts_district", table_name="subscriber_districts")
    op.drop_table("subscriber_districts")
    op.drop_index("ix_subscribers_phone_e164", table_name="subscribers")
    op.drop_index("ix_subscribers_email", table_name="subscribers")
    op.drop_table("subscribers")
    op.drop_index("ix_legislators_chamber_district", table_name="legislators")
    op.drop_table("legislators")
