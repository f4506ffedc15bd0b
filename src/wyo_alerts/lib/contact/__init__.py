"""Contact library — subscriber contact validation, delivery enums, and quiet hours."""

from wyo_alerts.lib.contact.quiet_hours import QuietHours, in_quiet_hours
from wyo_alerts.lib.contact.types import Channel, DeliveryMode
from wyo_alerts.lib.contact.validators import Contact, normalize_phone, phone_digits, validate_contact

__all__ = [
    "Channel",
    "Contact",
    "DeliveryMode",
    "QuietHours",
    "in_quiet_hours",
    "normalize_phone",
    "phone_digits",
    "validate_contact",
]
