from __future__ import annotations

from abc import ABC, abstractmethod

from slotbook.domain.entities.booking_record import BookingRecord
from slotbook.domain.entities.event_type import EventType


class BookingStorePort(ABC):
    @abstractmethod
    def get_event_type(self, slug: str) -> EventType | None:
        raise NotImplementedError

    @abstractmethod
    def get_event_type_by_id(self, event_type_id: str) -> EventType | None:
        raise NotImplementedError

    @abstractmethod
    def add_event_type(self, event_type: EventType) -> None:
        raise NotImplementedError

    @abstractmethod
    def add_booking(self, record: BookingRecord) -> BookingRecord:
        raise NotImplementedError

    @abstractmethod
    def get_booking(self, booking_id: str) -> BookingRecord | None:
        raise NotImplementedError

    @abstractmethod
    def list_bookings(self, event_type_id: str | None = None) -> list[BookingRecord]:
        raise NotImplementedError

    @abstractmethod
    def cancel_booking(self, booking_id: str) -> bool:
        """Mark a booking cancelled. Returns False if it does not exist."""
        raise NotImplementedError
