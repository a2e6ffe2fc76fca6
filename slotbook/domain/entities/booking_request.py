from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class BookingRequest:
    event_type_id: str
    guest_name: str
    guest_email: str
    guest_timezone: str  # IANA id
    scheduled_at: datetime  # aware, guest-local
    end_time: datetime  # aware, guest-local
    description: str = ""

    def to_payload(self) -> dict[str, Any]:
        """Wire body for the booking-creation endpoint (camelCase, UTC instants)."""
        return {
            "eventTypeId": self.event_type_id,
            "guestName": self.guest_name,
            "guestEmail": self.guest_email,
            "guestTimezone": self.guest_timezone,
            "scheduledAt": _utc_iso(self.scheduled_at),
            "endTime": _utc_iso(self.end_time),
            "description": self.description,
        }


def _utc_iso(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
