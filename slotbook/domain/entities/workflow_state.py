from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from slotbook.domain.entities.event_type import EventType
from slotbook.domain.entities.selection import GuestDetails, Selection


@dataclass(frozen=True)
class Loading:
    slug: str


@dataclass(frozen=True)
class LoadFailed:
    message: str


@dataclass(frozen=True)
class CalendarStep:
    event: EventType
    month: date  # first day of the viewed month
    selection: Selection = field(default_factory=Selection)
    details: GuestDetails = field(default_factory=GuestDetails)


@dataclass(frozen=True)
class FormStep:
    event: EventType
    month: date
    selection: Selection
    details: GuestDetails = field(default_factory=GuestDetails)
    submitting: bool = False


@dataclass(frozen=True)
class BookingSucceeded:
    event: EventType
    month: date
    meeting_link: str
    guest_email: str


@dataclass(frozen=True)
class BookingFailed:
    event: EventType
    month: date
    message: str
    selection: Selection
    details: GuestDetails


WorkflowState = Loading | LoadFailed | CalendarStep | FormStep | BookingSucceeded | BookingFailed
