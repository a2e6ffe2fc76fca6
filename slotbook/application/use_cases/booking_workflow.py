from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, TypeVar

from slotbook.application.exceptions import EventLookupError, InvalidTransitionError
from slotbook.application.ports.booking_api import BookingApiPort
from slotbook.application.use_cases.submit_booking import BookingSubmitter
from slotbook.application.utils.availability import available_slots, is_day_selectable
from slotbook.application.utils.calendar_grid import first_of_month, month_grid, shift_month
from slotbook.application.utils.slugs import normalize_slug
from slotbook.application.utils.timezones import local_timezone_name, now_in
from slotbook.domain.entities.booking_outcome import BookingConfirmed, BookingOutcome, BookingRejected
from slotbook.domain.entities.selection import GuestDetails, Selection
from slotbook.domain.entities.time_slot import CalendarDay
from slotbook.domain.entities.workflow_state import (
    BookingFailed,
    BookingSucceeded,
    CalendarStep,
    FormStep,
    Loading,
    LoadFailed,
    WorkflowState,
)

S = TypeVar("S")


class BookingWorkflow:
    """Guest-facing booking state machine for one session.

    Loading -> CalendarStep -> FormStep -> BookingSucceeded | BookingFailed.
    LoadFailed is a hard stop. BookingFailed returns to FormStep through
    ``try_again`` and BookingSucceeded returns to CalendarStep through
    ``book_another``; the machine has no other terminal state.
    """

    def __init__(
        self,
        slug: str,
        api: BookingApiPort,
        submitter: BookingSubmitter | None = None,
        clock: Callable[[], datetime] | None = None,
        timezone_resolver: Callable[[], str] = local_timezone_name,
        start_hour: int = 9,
        end_hour: int = 17,
        step_minutes: int = 30,
    ) -> None:
        self._api = api
        self._timezone_resolver = timezone_resolver
        self._submitter = submitter or BookingSubmitter(api, timezone_resolver=timezone_resolver)
        self._clock = clock
        self._start_hour = start_hour
        self._end_hour = end_hour
        self._step_minutes = step_minutes
        self._state: WorkflowState = Loading(slug=slug)
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> WorkflowState:
        return self._state

    # Loading

    async def start(self) -> WorkflowState:
        loading = self._expect(Loading)
        slug = normalize_slug(loading.slug)
        if not slug:
            return self._set(LoadFailed(message="Username not found"))
        try:
            event = await self._api.fetch_event_type(slug)
        except EventLookupError as e:
            self._logger.warning("Event lookup failed", extra={"slug": slug, "error": str(e)})
            return self._set(LoadFailed(message=str(e) or "Could not load event details"))
        self._logger.info("Event loaded", extra={"slug": slug})
        return self._set(CalendarStep(event=event, month=first_of_month(self._today())))

    # Calendar

    def calendar_days(self) -> list[CalendarDay]:
        step = self._expect(CalendarStep)
        return month_grid(step.month, self._today())

    def offered_slots(self) -> list[str]:
        """Slots for the selected day that pass the availability filter."""
        step = self._expect(CalendarStep)
        if step.selection.date is None:
            return []
        return self._slots_for(step.selection.date)

    def next_month(self) -> WorkflowState:
        step = self._expect(CalendarStep)
        return self._set(replace(step, month=shift_month(step.month, 1)))

    def previous_month(self) -> WorkflowState:
        step = self._expect(CalendarStep)
        return self._set(replace(step, month=shift_month(step.month, -1)))

    def select_day(self, day: date) -> WorkflowState:
        step = self._expect(CalendarStep)
        if not is_day_selectable(day, self._today()):
            return step
        if step.selection.date == day:
            return step
        return self._set(replace(step, selection=Selection(date=day)))

    def select_slot(self, slot: str) -> WorkflowState:
        step = self._expect(CalendarStep)
        if step.selection.date is None:
            raise InvalidTransitionError("Select a day before choosing a time")
        if slot not in self._slots_for(step.selection.date):
            raise InvalidTransitionError(f"Time slot {slot} is not available")
        return self._set(replace(step, selection=Selection(date=step.selection.date, slot=slot)))

    def proceed(self) -> WorkflowState:
        step = self._expect(CalendarStep)
        if not step.selection.is_complete:
            raise InvalidTransitionError("Select a day and a time first")
        if not self._still_offered(step.selection):
            return self._set(replace(step, selection=Selection(date=step.selection.date)))
        return self._set(
            FormStep(event=step.event, month=step.month, selection=step.selection, details=step.details)
        )

    # Form

    def update_details(
        self,
        name: str | None = None,
        email: str | None = None,
        reason: str | None = None,
    ) -> WorkflowState:
        step = self._expect_idle_form()
        details = GuestDetails(
            name=step.details.name if name is None else name,
            email=step.details.email if email is None else email,
            reason=step.details.reason if reason is None else reason,
        )
        return self._set(replace(step, details=details))

    def back(self) -> WorkflowState:
        step = self._expect_idle_form()
        return self._set(
            CalendarStep(event=step.event, month=step.month, selection=step.selection, details=step.details)
        )

    async def submit(self) -> WorkflowState:
        step = self._expect(FormStep)
        if step.submitting:
            self._logger.warning("Submission already in flight", extra={"slug": step.event.slug})
            return step
        if not self._still_offered(step.selection):
            return self._set(
                CalendarStep(
                    event=step.event,
                    month=step.month,
                    selection=Selection(date=step.selection.date),
                    details=step.details,
                )
            )

        self._set(replace(step, submitting=True))
        try:
            outcome: BookingOutcome = await self._submitter.submit(step.selection, step.details, step.event)
        except asyncio.CancelledError:
            self._set(step)
            raise
        except Exception as e:
            self._logger.exception("Unexpected error during submission", extra={"error": str(e)})
            outcome = BookingRejected(message="An error occurred")

        if isinstance(outcome, BookingConfirmed):
            return self._set(
                BookingSucceeded(
                    event=step.event,
                    month=step.month,
                    meeting_link=outcome.meeting_link,
                    guest_email=outcome.guest_email,
                )
            )
        return self._set(
            BookingFailed(
                event=step.event,
                month=step.month,
                message=outcome.message,
                selection=step.selection,
                details=step.details,
            )
        )

    # Results

    def try_again(self) -> WorkflowState:
        failed = self._expect(BookingFailed)
        return self._set(
            FormStep(event=failed.event, month=failed.month, selection=failed.selection, details=failed.details)
        )

    def book_another(self) -> WorkflowState:
        done = self._expect(BookingSucceeded)
        return self._set(CalendarStep(event=done.event, month=done.month))

    # Helpers

    def _now(self) -> datetime:
        if self._clock is not None:
            return self._clock()
        return now_in(self._timezone_resolver())

    def _today(self) -> date:
        return self._now().date()

    def _slots_for(self, day: date) -> list[str]:
        return available_slots(day, self._now(), self._start_hour, self._end_hour, self._step_minutes)

    def _still_offered(self, selection: Selection) -> bool:
        # the clock may have passed the chosen start since it was picked
        if selection.slot in self._slots_for(selection.date):
            return True
        self._logger.warning("Selected time %s %s is no longer available", selection.date, selection.slot)
        return False

    def _expect(self, state_type: type[S]) -> S:
        if not isinstance(self._state, state_type):
            raise InvalidTransitionError(
                f"Action requires {state_type.__name__}, workflow is in {type(self._state).__name__}"
            )
        return self._state

    def _expect_idle_form(self) -> FormStep:
        step = self._expect(FormStep)
        if step.submitting:
            raise InvalidTransitionError("Form is locked while a submission is in flight")
        return step

    def _set(self, state: WorkflowState) -> WorkflowState:
        self._logger.debug("Workflow transition", extra={"state": type(state).__name__})
        self._state = state
        return state
