"""Delivery enums shared by subscriptions and dispatch."""

from enum import StrEnum


class DeliveryMode(StrEnum):
    """When a subscriber wants alerts: as votes land, or batched daily."""

    REALTIME = "realtime"
    DAILY = "daily"


class Channel(StrEnum):
    """Outbound notification channel."""

    EMAIL = "email"
    SMS = "sms"
