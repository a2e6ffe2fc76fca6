#!/usr/bin/env python3
"""
Interactive local booking harness.

Usage:
  uvicorn slotbook.main:app --port 8000   (in another terminal)
  python3 scripts/book_local.py consultation

What it does:
- Drives one BookingWorkflow session against BOOKING_API_BASE_URL
- Prints the current state and accepts commands for each step
"""

from __future__ import annotations

import asyncio
import sys
from datetime import date
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from slotbook.application.exceptions import InvalidTransitionError
from slotbook.application.use_cases.booking_workflow import BookingWorkflow
from slotbook.domain.entities.workflow_state import (
    BookingFailed,
    BookingSucceeded,
    CalendarStep,
    FormStep,
    LoadFailed,
)
from slotbook.wiring.dependencies import get_booking_api, get_booking_workflow

HELP = """Commands:
  calendar:  day YYYY-MM-DD | slot HH:MM | next-month | prev-month | next
  form:      name <text> | email <text> | reason <text> | back | submit
  result:    again | another
  any:       help | quit"""


def _print_state(workflow: BookingWorkflow) -> None:
    state = workflow.state
    print("-" * 60)
    if isinstance(state, CalendarStep):
        print(f"{state.event.name} ({state.event.duration_minutes} min), month {state.month:%B %Y}")
        selectable = [d.day.day for d in workflow.calendar_days() if d.in_month and d.selectable]
        print(f"selectable days: {selectable}")
        print(f"selected: {state.selection.date} {state.selection.slot or ''}")
        if state.selection.date:
            print(f"slots: {' '.join(workflow.offered_slots())}")
    elif isinstance(state, FormStep):
        print(f"booking {state.selection.date} at {state.selection.slot}")
        print(f"name={state.details.name!r} email={state.details.email!r} reason={state.details.reason!r}")
    elif isinstance(state, BookingSucceeded):
        print(f"Booked! Link: {state.meeting_link} (sent to {state.guest_email})")
    elif isinstance(state, BookingFailed):
        print(f"Booking failed: {state.message}")
    elif isinstance(state, LoadFailed):
        print(f"Could not load event: {state.message}")
    print("-" * 60)


async def _handle(workflow: BookingWorkflow, command: str, arg: str) -> None:
    if command == "day":
        workflow.select_day(date.fromisoformat(arg))
    elif command == "slot":
        workflow.select_slot(arg)
    elif command == "next-month":
        workflow.next_month()
    elif command == "prev-month":
        workflow.previous_month()
    elif command == "next":
        workflow.proceed()
    elif command in {"name", "email", "reason"}:
        workflow.update_details(**{command: arg})
    elif command == "back":
        workflow.back()
    elif command == "submit":
        await workflow.submit()
    elif command == "again":
        workflow.try_again()
    elif command == "another":
        workflow.book_another()
    else:
        print(HELP)


async def main(slug: str) -> None:
    api = get_booking_api()
    try:
        await _run(get_booking_workflow(slug, api))
    finally:
        await api.aclose()


async def _run(workflow: BookingWorkflow) -> None:
    await workflow.start()
    _print_state(workflow)
    if isinstance(workflow.state, LoadFailed):
        return

    print(HELP)
    while True:
        try:
            line = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            break
        if not line:
            continue
        command, _, arg = line.partition(" ")
        if command == "quit":
            break
        try:
            await _handle(workflow, command, arg.strip())
        except (InvalidTransitionError, ValueError) as e:
            print(f"! {e}")
        _print_state(workflow)


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1] if len(sys.argv) > 1 else "consultation"))
