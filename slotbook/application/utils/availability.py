from __future__ import annotations

from datetime import date, datetime

from slotbook.application.utils.slots import generate_slots, parse_slot
from slotbook.domain.entities.time_slot import TimeSlot


def is_day_selectable(day: date, today: date) -> bool:
    """Today and later days are selectable; earlier calendar days are not."""
    return day >= today


def is_slot_open(day: date, slot: str, now: datetime) -> bool:
    """A slot is open when its day is selectable and its start is not before now.

    ``now`` is read as wall-clock time in the viewer's timezone.
    """
    today = now.date()
    if not is_day_selectable(day, today):
        return False
    if day > today:
        return True
    hour, minute = parse_slot(slot)
    start = datetime(day.year, day.month, day.day, hour, minute, tzinfo=now.tzinfo)
    return start >= now


def time_slots(
    day: date,
    now: datetime,
    start_hour: int = 9,
    end_hour: int = 17,
    step_minutes: int = 30,
) -> list[TimeSlot]:
    return [
        TimeSlot(day=day, start=slot, available=is_slot_open(day, slot, now))
        for slot in generate_slots(day, start_hour, end_hour, step_minutes)
    ]


def available_slots(
    day: date,
    now: datetime,
    start_hour: int = 9,
    end_hour: int = 17,
    step_minutes: int = 30,
) -> list[str]:
    """Slots offered to the guest: past slots on today are hidden."""
    return [
        slot.start
        for slot in time_slots(day, now, start_hour, end_hour, step_minutes)
        if slot.available
    ]
