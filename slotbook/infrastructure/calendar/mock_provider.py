from __future__ import annotations

import logging
from typing import Any

from slotbook.application.ports.calendar_provider import CalendarProviderPort
from slotbook.application.utils.meet_links import generate_placeholder_link


class MockCalendarProvider(CalendarProviderPort):
    def __init__(self, provider_domain: str = "google.com") -> None:
        self._events: dict[str, dict[str, Any]] = {}
        self._provider_domain = provider_domain
        self._logger = logging.getLogger(__name__)

    async def get_access_token(self) -> str:
        return "mock-access-token"

    async def create_event(self, access_token: str, event: dict[str, Any]) -> dict[str, Any]:
        event_id = f"mock_event_{len(self._events) + 1}"
        resource = {
            **event,
            "id": event_id,
            "hangoutLink": generate_placeholder_link(self._provider_domain),
        }
        self._events[event_id] = resource
        self._logger.info(
            "Mock calendar event created",
            extra={"meeting_id": event_id, "guest_email": event.get("attendees", [{}])[0].get("email")},
        )
        return resource
