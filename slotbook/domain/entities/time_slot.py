from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class TimeSlot:
    day: date
    start: str  # "HH:MM", viewer-local wall clock
    available: bool = True


@dataclass(frozen=True)
class CalendarDay:
    day: date
    in_month: bool
    is_today: bool
    selectable: bool
