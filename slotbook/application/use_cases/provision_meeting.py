from __future__ import annotations

import logging
from typing import Any
from uuid import uuid4

from slotbook.application.exceptions import ProviderApiError
from slotbook.application.policies.fallback import FallbackPolicy
from slotbook.application.ports.calendar_provider import CalendarProviderPort
from slotbook.application.utils.meet_links import fallback_meeting_id, generate_placeholder_link
from slotbook.domain.entities.booking_request import BookingRequest
from slotbook.domain.entities.meeting_result import MeetingResult

RECOVERABLE_STATUS_CODES = frozenset({400, 401, 403})
RECOVERABLE_MESSAGE_MARKERS = (
    "Google Calendar API has not been used",
    "disabled",
)

FALLBACK_MESSAGE = "Meeting scheduled successfully."


def is_recoverable_provider_error(error: ProviderApiError) -> bool:
    """Disabled API, bad request and unauthorized answers are expected misconfigurations."""
    if error.status_code in RECOVERABLE_STATUS_CODES:
        return True
    return any(marker in error.message for marker in RECOVERABLE_MESSAGE_MARKERS)


class MeetingProvisioner:
    """Turns a BookingRequest into a MeetingResult through the calendar provider.

    Three layers can fail: credential exchange, the create-event call and
    anything unexpected around them. Each layer consults the FallbackPolicy;
    with the default guest-friendly policy the result is always successful and
    carries a meeting link, real or placeholder. Placeholder results are
    recognisable by their ``fallback_<layer>_`` meeting id.
    """

    def __init__(
        self,
        provider: CalendarProviderPort,
        policy: FallbackPolicy | None = None,
        provider_domain: str = "google.com",
        app_name: str = "Slotbook",
    ) -> None:
        self._provider = provider
        self._policy = policy or FallbackPolicy.guest_friendly()
        self._provider_domain = provider_domain
        self._app_name = app_name
        self._logger = logging.getLogger(__name__)

    @property
    def policy(self) -> FallbackPolicy:
        return self._policy

    async def provision(self, request: BookingRequest, event_name: str | None = None) -> MeetingResult:
        try:
            try:
                access_token = await self._provider.get_access_token()
            except Exception as e:
                self._logger.warning(
                    "Provider authentication failed",
                    extra={"fallback": "auth", "error": str(e)},
                )
                return self._fallback(
                    "auth",
                    enabled=self._policy.on_auth_failure,
                    reason="Could not authenticate with the calendar provider",
                )

            event = self.build_event(request, event_name)
            try:
                data = await self._provider.create_event(access_token, event)
            except ProviderApiError as e:
                if not is_recoverable_provider_error(e):
                    raise
                self._logger.warning(
                    "Provider rejected event creation",
                    extra={"fallback": "api", "status": e.status_code, "error": e.message},
                )
                return self._fallback("api", enabled=self._policy.on_provider_error, reason=e.message)

            meeting_link = (
                data.get("hangoutLink")
                or data.get("htmlLink")
                or generate_placeholder_link(self._provider_domain)
            )
            meeting_id = data.get("id")
            self._logger.info(
                "Meeting provisioned",
                extra={"meeting_id": meeting_id, "guest_email": request.guest_email},
            )
            return MeetingResult(
                success=True,
                meeting_link=meeting_link,
                meeting_id=meeting_id,
                message="Event scheduled successfully on Google Calendar",
            )
        except Exception as e:
            self._logger.exception("Meeting provisioning failed", extra={"fallback": "sys", "error": str(e)})
            return self._fallback(
                "sys",
                enabled=self._policy.on_unexpected_error,
                reason=str(e) or "Meeting provisioning failed",
            )

    def build_event(self, request: BookingRequest, event_name: str | None = None) -> dict[str, Any]:
        title = event_name or "Consultation"
        description = f"Reason: {request.description}" if request.description else "Reason: -"
        return {
            "summary": f"{title}: {request.guest_name}",
            "description": f"{description}\n\nBooked via {self._app_name}",
            "start": {
                "dateTime": request.scheduled_at.isoformat(),
                "timeZone": request.guest_timezone,
            },
            "end": {
                "dateTime": request.end_time.isoformat(),
                "timeZone": request.guest_timezone,
            },
            "attendees": [{"email": request.guest_email}],
            "conferenceData": {
                "createRequest": {
                    "requestId": uuid4().hex,
                    "conferenceSolutionKey": {"type": "hangoutsMeet"},
                }
            },
        }

    def _fallback(self, tag: str, enabled: bool, reason: str) -> MeetingResult:
        if not enabled:
            return MeetingResult(success=False, message=reason)
        return MeetingResult(
            success=True,
            meeting_link=generate_placeholder_link(self._provider_domain),
            meeting_id=fallback_meeting_id(tag),
            message=FALLBACK_MESSAGE,
        )
