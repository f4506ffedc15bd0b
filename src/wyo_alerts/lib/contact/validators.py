"""Contact-detail validation for subscription signups.

Pure functions: no I/O, safe to call before anything is persisted.
"""

import re
from dataclasses import dataclass

from wyo_alerts.core.errors import MissingContactError, UnsupportedRegionError

_NON_DIGITS_RE = re.compile(r"\D")


@dataclass(frozen=True)
class Contact:
    """Validated contact details; at least one field is set."""

    email: str | None = None
    phone_e164: str | None = None


def phone_digits(phone: str) -> str:
    """Strip everything but digits from a phone number."""
    return _NON_DIGITS_RE.sub("", phone)


def normalize_phone(phone: str, area_code: str = "307") -> str:
    """Normalize a local phone number to ``+1`` followed by 10 digits.

    Args:
        phone: Phone number in any punctuation (``307-555-1234``,
            ``(307) 555 1234``...).
        area_code: Required three-digit area code.

    Returns:
        The E.164 form, e.g. ``+13075551234``.

    Raises:
        UnsupportedRegionError: If the number is not exactly 10 digits in
            the required area code.
    """
    digits = phone_digits(phone)
    if len(digits) != 10 or not digits.startswith(area_code):
        msg = f"Phone number must be a Wyoming number ({area_code} area code)"
        raise UnsupportedRegionError(msg)
    return f"+1{digits}"


def validate_contact(email: str | None, phone: str | None, area_code: str = "307") -> Contact:
    """Validate and normalize subscriber contact details.

    Blank strings count as absent.

    Raises:
        MissingContactError: Neither email nor phone was supplied.
        UnsupportedRegionError: The phone number is outside the area code.
    """
    email = email.strip() if email and email.strip() else None
    phone = phone.strip() if phone and phone.strip() else None

    if email is None and phone is None:
        msg = "Email or phone required"
        raise MissingContactError(msg)

    return Contact(
        email=email,
        phone_e164=normalize_phone(phone, area_code) if phone else None,
    )
