from __future__ import annotations

from dataclasses import replace

from slotbook.application.ports.booking_store import BookingStorePort
from slotbook.domain.entities.booking_record import BookingRecord
from slotbook.domain.entities.event_type import EventType


class MemoryBookingStore(BookingStorePort):
    def __init__(self, event_types: list[EventType] | None = None) -> None:
        self._event_types: dict[str, EventType] = {}
        self._bookings: dict[str, BookingRecord] = {}
        for event_type in event_types or []:
            self.add_event_type(event_type)

    def get_event_type(self, slug: str) -> EventType | None:
        return self._event_types.get(slug.lower().strip())

    def get_event_type_by_id(self, event_type_id: str) -> EventType | None:
        for event_type in self._event_types.values():
            if event_type.id == event_type_id:
                return event_type
        return None

    def add_event_type(self, event_type: EventType) -> None:
        self._event_types[event_type.slug.lower()] = event_type

    def add_booking(self, record: BookingRecord) -> BookingRecord:
        self._bookings[record.id] = record
        return record

    def get_booking(self, booking_id: str) -> BookingRecord | None:
        return self._bookings.get(booking_id)

    def list_bookings(self, event_type_id: str | None = None) -> list[BookingRecord]:
        records = list(self._bookings.values())
        if event_type_id is not None:
            records = [r for r in records if r.event_type_id == event_type_id]
        return sorted(records, key=lambda r: r.scheduled_at)

    def cancel_booking(self, booking_id: str) -> bool:
        record = self._bookings.get(booking_id)
        if record is None:
            return False
        self._bookings[booking_id] = replace(record, status="cancelled")
        return True
