"""Shared fixtures for booking engine tests."""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

import pytest

from slotbook.application.exceptions import EventLookupError
from slotbook.application.ports.booking_api import BookingApiPort
from slotbook.application.ports.calendar_provider import CalendarProviderPort
from slotbook.domain.entities.booking_request import BookingRequest
from slotbook.domain.entities.event_type import EventType

GUEST_TZ = "America/New_York"


class FakeBookingApi(BookingApiPort):
    def __init__(
        self,
        event: EventType | None = None,
        lookup_error: Exception | None = None,
        booking: dict[str, Any] | None = None,
        submit_error: Exception | None = None,
        gate: asyncio.Event | None = None,
    ) -> None:
        self._event = event
        self._lookup_error = lookup_error
        self._booking = booking
        self._submit_error = submit_error
        self._gate = gate
        self.slugs: list[str] = []
        self.requests: list[BookingRequest] = []

    async def fetch_event_type(self, slug: str) -> EventType:
        self.slugs.append(slug)
        if self._lookup_error:
            raise self._lookup_error
        if self._event is None:
            raise EventLookupError("Event not found")
        return self._event

    async def create_booking(self, request: BookingRequest) -> dict[str, Any]:
        self.requests.append(request)
        if self._gate is not None:
            await self._gate.wait()
        if self._submit_error:
            raise self._submit_error
        if self._booking is not None:
            return self._booking
        return {"id": "bk_1", "googleMeetLink": "https://meet.google.com/abc-def-ghi"}


class FakeCalendarProvider(CalendarProviderPort):
    def __init__(
        self,
        auth_error: Exception | None = None,
        create_error: Exception | None = None,
        event_resource: dict[str, Any] | None = None,
    ) -> None:
        self._auth_error = auth_error
        self._create_error = create_error
        self._event_resource = event_resource
        self.created: list[tuple[str, dict[str, Any]]] = []

    async def get_access_token(self) -> str:
        if self._auth_error:
            raise self._auth_error
        return "token-123"

    async def create_event(self, access_token: str, event: dict[str, Any]) -> dict[str, Any]:
        self.created.append((access_token, event))
        if self._create_error:
            raise self._create_error
        if self._event_resource is not None:
            return self._event_resource
        return {"id": "gcal_evt_1", "hangoutLink": "https://meet.google.com/real-link-xyz"}


@pytest.fixture
def event_type() -> EventType:
    return EventType(
        id="evt_1",
        name="Consultation",
        description="Thirty minute intro call",
        duration_minutes=30,
        slug="consultation",
    )


@pytest.fixture
def guest_tz() -> ZoneInfo:
    return ZoneInfo(GUEST_TZ)


@pytest.fixture
def fixed_now(guest_tz: ZoneInfo) -> datetime:
    """Tuesday 2025-06-10 12:00 in the guest's timezone."""
    return datetime(2025, 6, 10, 12, 0, tzinfo=guest_tz)


@pytest.fixture
def clock(fixed_now: datetime):
    return lambda: fixed_now
