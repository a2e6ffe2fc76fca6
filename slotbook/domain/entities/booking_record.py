from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class BookingRecord:
    id: str
    event_type_id: str
    guest_name: str
    guest_email: str
    guest_timezone: str
    scheduled_at: datetime
    end_time: datetime
    description: str
    meeting_link: str
    meeting_id: str | None
    status: str = "confirmed"  # "confirmed", "cancelled"
    created_at: datetime | None = None
