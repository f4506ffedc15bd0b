"""Pydantic v2 schemas for subscription signup.

Field names follow the signup form's camelCase payload; business rules
(contact present, consent, non-empty districts) are enforced by the service
so each failure maps to its own error.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class SubscribeRequest(BaseModel):
    """Signup form payload."""

    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=32)
    selected_districts: list[str] = Field(
        default_factory=list,
        alias="selectedDistricts",
        description="Canonical district codes, e.g. ['H07', 'S04']",
    )
    mode: str = Field(default="realtime", description="'realtime' or 'daily'")
    consent_checkbox: bool = Field(default=False, alias="consentCheckbox")

    @field_validator("email", "phone", mode="before")
    @classmethod
    def blank_to_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class SubscribeResponse(BaseModel):
    """Successful signup."""

    success: bool = True
    subscriber_id: int
    confirmation_needed: bool
