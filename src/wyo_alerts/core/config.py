"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor principles.
"""

import re
from zoneinfo import available_timezones

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_HHMM_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        description="SQLAlchemy async connection string (asyncpg or aiosqlite)",
    )
    database_schema: str | None = Field(
        default=None,
        description="PostgreSQL schema for isolated environments (e.g., pr_42)",
    )

    @field_validator("database_schema")
    @classmethod
    def validate_database_schema(cls, v: str | None) -> str | None:
        if v is None:
            return None
        if not re.match(r"^[a-z_][a-z0-9_]{0,62}$", v):
            msg = "Invalid database_schema: must match ^[a-z_][a-z0-9_]{0,62}$"
            raise ValueError(msg)
        return v

    # District directory
    district_data_path: str | None = Field(
        default=None,
        description="JSON file with ZIP and city district tables (defaults to the bundled tables)",
    )

    # Subscriptions
    phone_area_code: str = Field(
        default="307",
        pattern=r"^\d{3}$",
        description="Only phone numbers in this area code may subscribe",
    )
    auto_confirm_email: bool = Field(
        default=True,
        description="Mark email addresses confirmed at signup time",
    )
    quiet_hours_start: str = Field(
        default="22:00",
        description="Default start of the quiet-hours window (HH:MM)",
    )
    quiet_hours_end: str = Field(
        default="07:00",
        description="Default end of the quiet-hours window (HH:MM)",
    )
    quiet_hours_timezone: str = Field(
        default="America/Denver",
        description="IANA timezone the quiet-hours window is expressed in",
    )

    @field_validator("quiet_hours_start", "quiet_hours_end")
    @classmethod
    def validate_quiet_hours(cls, v: str) -> str:
        if not _HHMM_RE.match(v):
            msg = f"Invalid quiet-hours time {v!r}: expected HH:MM"
            raise ValueError(msg)
        return v

    @field_validator("quiet_hours_timezone")
    @classmethod
    def validate_quiet_hours_timezone(cls, v: str) -> str:
        if v not in available_timezones():
            msg = f"Unknown timezone {v!r}"
            raise ValueError(msg)
        return v

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )

    # CORS
    cors_origins: str = Field(
        default="",
        description="Comma-separated list of allowed CORS origins (must be explicitly configured)",
    )
    cors_origin_regex: str = Field(
        default="",
        description="Regex pattern for allowed CORS origins",
    )

    # Environment
    environment: str = Field(
        default="production",
        description="Deployment environment name (e.g. production, dev, staging)",
    )

    # API
    api_v1_prefix: str = Field(
        default="/api/v1",
        description="API version prefix",
    )
    rate_limit_per_minute: int = Field(
        default=200,
        description="Maximum API requests per minute per IP address",
        gt=0,
    )
    trusted_proxy_headers: str = Field(
        default="CF-Connecting-IP,X-Forwarded-For,X-Real-IP",
        description="Comma-separated list of HTTP headers to check for real client IP, in priority order",
    )

    @property
    def trusted_proxy_header_list(self) -> list[str]:
        """Parse trusted proxy headers string into a list."""
        if not self.trusted_proxy_headers.strip():
            return []
        return [h.strip() for h in self.trusted_proxy_headers.split(",") if h.strip()]

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        if not self.cors_origins.strip():
            return []
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def default_quiet_hours(self) -> dict[str, str]:
        """Quiet-hours window stored on new notification preferences."""
        return {
            "start": self.quiet_hours_start,
            "end": self.quiet_hours_end,
            "tz": self.quiet_hours_timezone,
        }


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()  # type: ignore[call-arg]
