"""Common Pydantic v2 schemas shared across the API."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str = Field(description="Short human-readable error message")


class HealthResponse(BaseModel):
    """Liveness probe response."""

    status: str = "ok"
    environment: str
