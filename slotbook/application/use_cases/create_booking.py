from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable
from uuid import uuid4

from slotbook.application.exceptions import BookingSubmissionError, GuestDetailsError
from slotbook.application.ports.booking_store import BookingStorePort
from slotbook.application.use_cases.provision_meeting import MeetingProvisioner
from slotbook.application.utils.guest_details import validate_guest_details
from slotbook.domain.entities.booking_record import BookingRecord
from slotbook.domain.entities.booking_request import BookingRequest
from slotbook.domain.entities.selection import GuestDetails


class CreateBookingUseCase:
    """Server side of booking creation: validate, provision a meeting, store the record."""

    def __init__(
        self,
        store: BookingStorePort,
        provisioner: MeetingProvisioner,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._provisioner = provisioner
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._logger = logging.getLogger(__name__)

    async def execute(self, request: BookingRequest) -> BookingRecord:
        event_type = self._store.get_event_type_by_id(request.event_type_id)
        if event_type is None:
            raise BookingSubmissionError("Event type not found", status_code=404)

        try:
            validate_guest_details(
                GuestDetails(name=request.guest_name, email=request.guest_email, reason=request.description)
            )
        except GuestDetailsError as e:
            raise BookingSubmissionError(str(e), status_code=400) from e

        now = self._clock()
        if request.scheduled_at < now:
            raise BookingSubmissionError("Selected time is in the past", status_code=400)

        # the stored end is always derived from the event duration
        end_time = request.scheduled_at + timedelta(minutes=event_type.duration_minutes)
        if end_time != request.end_time:
            self._logger.warning(
                "Client end time ignored",
                extra={"slug": event_type.slug, "guest_email": request.guest_email},
            )
        normalized = BookingRequest(
            event_type_id=request.event_type_id,
            guest_name=request.guest_name.strip(),
            guest_email=request.guest_email.strip(),
            guest_timezone=request.guest_timezone,
            scheduled_at=request.scheduled_at,
            end_time=end_time,
            description=request.description,
        )

        result = await self._provisioner.provision(normalized, event_name=event_type.name)
        if not result.success or not result.meeting_link:
            raise BookingSubmissionError(result.message or "Could not create meeting", status_code=502)

        record = BookingRecord(
            id=uuid4().hex,
            event_type_id=event_type.id,
            guest_name=normalized.guest_name,
            guest_email=normalized.guest_email,
            guest_timezone=normalized.guest_timezone,
            scheduled_at=normalized.scheduled_at,
            end_time=normalized.end_time,
            description=normalized.description,
            meeting_link=result.meeting_link,
            meeting_id=result.meeting_id,
            created_at=now,
        )
        self._store.add_booking(record)
        self._logger.info(
            "Booking stored",
            extra={
                "slug": event_type.slug,
                "meeting_id": result.meeting_id,
                "fallback": result.is_fallback,
            },
        )
        return record
