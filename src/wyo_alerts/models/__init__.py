"""ORM model registry — import all models so Alembic autogenerate discovers them."""

from wyo_alerts.models.legislator import Legislator
from wyo_alerts.models.outbound_dedup import OutboundDedup
from wyo_alerts.models.subscriber import NotificationPreference, Subscriber, SubscriberDistrict
from wyo_alerts.models.vote import Bill, MemberVote, Vote

__all__ = [
    "Bill",
    "Legislator",
    "MemberVote",
    "NotificationPreference",
    "OutboundDedup",
    "Subscriber",
    "SubscriberDistrict",
    "Vote",
]
