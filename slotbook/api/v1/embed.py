from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, Query

from slotbook.api.v1.schemas import EventLookupResponseSchema, EventTypeSchema, SlotsResponseSchema, TimeSlotSchema
from slotbook.application.exceptions import EventLookupError
from slotbook.application.ports.booking_store import BookingStorePort
from slotbook.application.utils.availability import time_slots
from slotbook.application.utils.slugs import normalize_slug
from slotbook.application.utils.timezones import now_in, safe_timezone
from slotbook.core.config import settings
from slotbook.domain.entities.event_type import EventType
from slotbook.wiring.dependencies import get_booking_store

router = APIRouter()
logger = logging.getLogger(__name__)


def _lookup(store: BookingStorePort, raw_slug: str) -> EventType:
    slug = normalize_slug(raw_slug)
    event_type = store.get_event_type(slug) if slug else None
    if event_type is None:
        logger.info("Unknown event slug", extra={"slug": raw_slug})
        raise EventLookupError("Event not found")
    return event_type


@router.get("/embed/{slug}", response_model=EventLookupResponseSchema)
def get_event(slug: str, store: BookingStorePort = Depends(get_booking_store)):
    event_type = _lookup(store, slug)
    return EventLookupResponseSchema(
        event=EventTypeSchema(
            id=event_type.id,
            name=event_type.name,
            description=event_type.description,
            duration_minutes=event_type.duration_minutes,
            slug=event_type.slug,
        )
    )


@router.get("/embed/{slug}/slots", response_model=SlotsResponseSchema)
def get_slots(
    slug: str,
    day: date = Query(..., alias="date"),
    tz: str | None = Query(None),
    store: BookingStorePort = Depends(get_booking_store),
):
    _lookup(store, slug)
    zone = safe_timezone(tz, settings.DEFAULT_TIMEZONE)
    slots = time_slots(
        day,
        now_in(zone.key),
        settings.SLOT_START_HOUR,
        settings.SLOT_END_HOUR,
        settings.SLOT_STEP_MINUTES,
    )
    return SlotsResponseSchema(
        day=day,
        timezone=zone.key,
        slots=[TimeSlotSchema(start=s.start, available=s.available) for s in slots],
    )
