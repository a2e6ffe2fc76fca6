from __future__ import annotations

import logging
from typing import Any

import httpx

from slotbook.application.exceptions import BookingSubmissionError, EventLookupError
from slotbook.application.ports.booking_api import BookingApiPort
from slotbook.core.config import settings
from slotbook.domain.entities.booking_request import BookingRequest
from slotbook.domain.entities.event_type import EventType


class HttpBookingApi(BookingApiPort):
    def __init__(
        self,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        self._base_url = (base_url or settings.BOOKING_API_BASE_URL).rstrip("/")
        self._client = client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.BOOKING_API_TIMEOUT_SECONDS
        )
        self._logger = logging.getLogger(__name__)

    async def fetch_event_type(self, slug: str) -> EventType:
        url = f"{self._base_url}/embed/{slug}"
        try:
            resp = await self._client.get(url)
        except httpx.HTTPError as e:
            self._logger.error("Event lookup request failed", extra={"slug": slug, "error": str(e)})
            raise EventLookupError("Could not load event details") from e

        if resp.status_code >= 400:
            message = _error_message(resp) or f"Failed to fetch event ({resp.status_code})"
            self._logger.warning("Event lookup rejected", extra={"slug": slug, "status": resp.status_code})
            raise EventLookupError(message)

        data = _json_body(resp)
        event = data.get("event") if isinstance(data, dict) else None
        if not isinstance(event, dict):
            raise EventLookupError("No event data in response")
        try:
            return EventType(
                id=str(event["id"]),
                name=str(event.get("name") or ""),
                description=str(event.get("description") or ""),
                duration_minutes=int(event["durationMinutes"]),
                slug=str(event.get("slug") or slug),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise EventLookupError("Malformed event data in response") from e

    async def create_booking(self, request: BookingRequest) -> dict[str, Any]:
        url = f"{self._base_url}/bookings"
        try:
            resp = await self._client.post(url, json=request.to_payload())
        except httpx.HTTPError as e:
            self._logger.error(
                "Booking request failed",
                extra={"guest_email": request.guest_email, "error": str(e)},
            )
            raise BookingSubmissionError("Could not reach the booking service") from e

        if resp.status_code >= 400:
            message = _error_message(resp) or "Booking failed"
            self._logger.warning(
                "Booking rejected",
                extra={"status": resp.status_code, "guest_email": request.guest_email, "error": message},
            )
            raise BookingSubmissionError(message, status_code=resp.status_code)

        data = _json_body(resp)
        booking = data.get("booking") if isinstance(data, dict) else None
        return booking if isinstance(booking, dict) else {}

    async def aclose(self) -> None:
        await self._client.aclose()


def _json_body(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return None


def _error_message(resp: httpx.Response) -> str | None:
    data = _json_body(resp)
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, str) and error.strip():
            return error
    return None
