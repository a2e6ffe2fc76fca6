from __future__ import annotations

from datetime import date, timedelta

from slotbook.application.utils.availability import is_day_selectable
from slotbook.domain.entities.time_slot import CalendarDay


def first_of_month(day: date) -> date:
    return day.replace(day=1)


def shift_month(month: date, delta: int) -> date:
    index = month.year * 12 + (month.month - 1) + delta
    return date(index // 12, index % 12 + 1, 1)


def month_grid(month: date, today: date) -> list[CalendarDay]:
    """Days shown for a month view, padded to whole Sunday-first weeks."""
    start_of_month = first_of_month(month)
    end_of_month = shift_month(start_of_month, 1) - timedelta(days=1)

    # date.weekday(): Monday=0 ... Sunday=6
    grid_start = start_of_month - timedelta(days=(start_of_month.weekday() + 1) % 7)
    grid_end = end_of_month + timedelta(days=(5 - end_of_month.weekday()) % 7)

    days: list[CalendarDay] = []
    current = grid_start
    while current <= grid_end:
        days.append(
            CalendarDay(
                day=current,
                in_month=current.month == start_of_month.month,
                is_today=current == today,
                selectable=is_day_selectable(current, today),
            )
        )
        current += timedelta(days=1)
    return days
