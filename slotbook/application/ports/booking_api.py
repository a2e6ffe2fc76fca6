from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from slotbook.domain.entities.booking_request import BookingRequest
from slotbook.domain.entities.event_type import EventType


class BookingApiPort(ABC):
    @abstractmethod
    async def fetch_event_type(self, slug: str) -> EventType:
        """Look up the bookable event by slug. Raises EventLookupError."""
        raise NotImplementedError

    @abstractmethod
    async def create_booking(self, request: BookingRequest) -> dict[str, Any]:
        """Create a booking. Returns the stored booking record.

        Raises BookingSubmissionError on transport failure or non-2xx.
        """
        raise NotImplementedError
