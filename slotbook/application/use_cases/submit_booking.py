from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from slotbook.application.exceptions import BookingEngineError
from slotbook.application.ports.booking_api import BookingApiPort
from slotbook.application.utils.guest_details import validate_guest_details
from slotbook.application.utils.slots import parse_slot
from slotbook.application.utils.timezones import local_timezone_name, safe_timezone
from slotbook.domain.entities.booking_outcome import BookingConfirmed, BookingOutcome, BookingRejected
from slotbook.domain.entities.booking_request import BookingRequest
from slotbook.domain.entities.event_type import EventType
from slotbook.domain.entities.selection import GuestDetails, Selection

DEFAULT_MEETING_LINK = "https://meet.google.com"


class BookingSubmitter:
    """Builds one BookingRequest and performs exactly one booking-creation call."""

    def __init__(
        self,
        api: BookingApiPort,
        timezone_resolver: Callable[[], str] = local_timezone_name,
        default_meeting_link: str = DEFAULT_MEETING_LINK,
    ) -> None:
        self._api = api
        self._timezone_resolver = timezone_resolver
        self._default_meeting_link = default_meeting_link
        self._logger = logging.getLogger(__name__)

    def build_request(
        self,
        selection: Selection,
        details: GuestDetails,
        event: EventType,
        timezone_name: str,
    ) -> BookingRequest:
        if selection.date is None or selection.slot is None:
            raise BookingEngineError("Please select a date and time")
        guest = validate_guest_details(details)

        hour, minute = parse_slot(selection.slot)
        tz = safe_timezone(timezone_name)
        day = selection.date
        scheduled_at = datetime(day.year, day.month, day.day, hour, minute, tzinfo=tz)
        # add the duration on the absolute timeline so DST changes do not skew it
        end_time = (
            scheduled_at.astimezone(timezone.utc) + timedelta(minutes=event.duration_minutes)
        ).astimezone(tz)

        return BookingRequest(
            event_type_id=event.id,
            guest_name=guest.name,
            guest_email=guest.email,
            guest_timezone=tz.key,
            scheduled_at=scheduled_at,
            end_time=end_time,
            description=guest.reason,
        )

    async def submit(self, selection: Selection, details: GuestDetails, event: EventType) -> BookingOutcome:
        """Submit the booking. Failures come back as BookingRejected, never retried."""
        try:
            request = self.build_request(selection, details, event, self._timezone_resolver())
            record = await self._api.create_booking(request)
        except (BookingEngineError, ValueError) as e:
            message = getattr(e, "message", None) or str(e) or "Booking failed"
            self._logger.warning("Booking submission failed", extra={"slug": event.slug, "error": message})
            return BookingRejected(message=message)

        meeting_link = record.get("googleMeetLink") or self._default_meeting_link
        self._logger.info(
            "Booking submitted",
            extra={"slug": event.slug, "guest_email": request.guest_email, "meeting_id": record.get("meetingId")},
        )
        return BookingConfirmed(meeting_link=meeting_link, guest_email=request.guest_email)
