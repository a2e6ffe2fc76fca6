from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BookingConfirmed:
    meeting_link: str
    guest_email: str


@dataclass(frozen=True)
class BookingRejected:
    message: str


BookingOutcome = BookingConfirmed | BookingRejected
