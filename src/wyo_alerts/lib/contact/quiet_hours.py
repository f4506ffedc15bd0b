"""Quiet-hours windows for notification dispatch."""

from dataclasses import dataclass
from datetime import datetime, time
from typing import Any
from zoneinfo import ZoneInfo


@dataclass(frozen=True)
class QuietHours:
    """A daily window, in a local timezone, during which alerts are held.

    ``start`` may be later than ``end``, in which case the window wraps
    past midnight (the usual ``22:00``-``07:00`` case).
    """

    start: time
    end: time
    timezone: str = "America/Denver"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuietHours":
        """Build from the stored ``{"start": "HH:MM", "end": "HH:MM", "tz": ...}`` form."""
        return cls(
            start=time.fromisoformat(data["start"]),
            end=time.fromisoformat(data["end"]),
            timezone=data.get("tz") or data.get("timezone") or "America/Denver",
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "start": self.start.strftime("%H:%M"),
            "end": self.end.strftime("%H:%M"),
            "tz": self.timezone,
        }

    def contains(self, at: datetime) -> bool:
        """Return True if the aware datetime ``at`` falls inside the window."""
        local = at.astimezone(ZoneInfo(self.timezone)).time()
        if self.start == self.end:
            return False
        if self.start < self.end:
            return self.start <= local < self.end
        return local >= self.start or local < self.end


def in_quiet_hours(quiet_hours: QuietHours | dict[str, Any] | None, at: datetime) -> bool:
    """Return True if a notification due at ``at`` should be held.

    Accepts either a :class:`QuietHours` or the stored dict form; ``None``
    means no window.
    """
    if quiet_hours is None:
        return False
    if isinstance(quiet_hours, dict):
        quiet_hours = QuietHours.from_dict(quiet_hours)
    return quiet_hours.contains(at)
