from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta

_SLOT_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def generate_slots(
    day: date,
    start_hour: int = 9,
    end_hour: int = 17,
    step_minutes: int = 30,
) -> list[str]:
    """Candidate start times ("HH:MM") for a day's working window.

    The grid does not depend on the event duration. A start is offered while it
    is before ``end_hour`` and its step does not run past midnight.
    """
    if step_minutes <= 0:
        raise ValueError("step_minutes must be positive")
    if not 0 <= start_hour <= 23 or not 0 <= end_hour <= 24:
        raise ValueError("hours must be within a single day")

    current = datetime.combine(day, time(hour=start_hour))
    window_end = datetime.combine(day, time()) + timedelta(hours=end_hour)
    midnight = datetime.combine(day + timedelta(days=1), time())

    slots: list[str] = []
    while current < window_end and current + timedelta(minutes=step_minutes) <= midnight:
        slots.append(current.strftime("%H:%M"))
        current += timedelta(minutes=step_minutes)
    return slots


def parse_slot(slot: str) -> tuple[int, int]:
    """Parse "HH:MM" (or "H:MM") into (hour, minute)."""
    match = _SLOT_RE.match(slot.strip())
    if not match:
        raise ValueError(f"Invalid time slot: {slot!r}")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"Invalid time slot: {slot!r}")
    return hour, minute
