from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from slotbook.api.v1.schemas import (
    BookingCreateSchema,
    BookingListResponseSchema,
    BookingResponseSchema,
    BookingSchema,
)
from slotbook.application.exceptions import BookingSubmissionError
from slotbook.application.ports.booking_store import BookingStorePort
from slotbook.application.use_cases.create_booking import CreateBookingUseCase
from slotbook.domain.entities.booking_record import BookingRecord
from slotbook.domain.entities.booking_request import BookingRequest
from slotbook.wiring.dependencies import get_booking_store, get_create_booking_use_case

router = APIRouter()


def _to_schema(record: BookingRecord) -> BookingSchema:
    return BookingSchema(
        id=record.id,
        event_type_id=record.event_type_id,
        guest_name=record.guest_name,
        guest_email=record.guest_email,
        guest_timezone=record.guest_timezone,
        scheduled_at=record.scheduled_at,
        end_time=record.end_time,
        description=record.description,
        google_meet_link=record.meeting_link,
        meeting_id=record.meeting_id,
        status=record.status,
        created_at=record.created_at,
    )


@router.post("/bookings", response_model=BookingResponseSchema, status_code=201)
async def create_booking(
    req: BookingCreateSchema,
    uc: CreateBookingUseCase = Depends(get_create_booking_use_case),
):
    record = await uc.execute(
        BookingRequest(
            event_type_id=req.event_type_id,
            guest_name=req.guest_name,
            guest_email=req.guest_email,
            guest_timezone=req.guest_timezone,
            scheduled_at=req.scheduled_at,
            end_time=req.end_time,
            description=req.description,
        )
    )
    return BookingResponseSchema(booking=_to_schema(record))


@router.get("/bookings", response_model=BookingListResponseSchema)
def list_bookings(
    event_type_id: str | None = Query(None, alias="eventTypeId"),
    store: BookingStorePort = Depends(get_booking_store),
):
    return BookingListResponseSchema(bookings=[_to_schema(r) for r in store.list_bookings(event_type_id)])


@router.get("/bookings/{booking_id}", response_model=BookingResponseSchema)
def get_booking(booking_id: str, store: BookingStorePort = Depends(get_booking_store)):
    record = store.get_booking(booking_id)
    if record is None:
        raise BookingSubmissionError("Booking not found", status_code=404)
    return BookingResponseSchema(booking=_to_schema(record))


@router.post("/bookings/{booking_id}/cancel", response_model=BookingResponseSchema)
def cancel_booking(booking_id: str, store: BookingStorePort = Depends(get_booking_store)):
    if not store.cancel_booking(booking_id):
        raise BookingSubmissionError("Booking not found", status_code=404)
    return BookingResponseSchema(booking=_to_schema(store.get_booking(booking_id)))
