from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any
from urllib.parse import quote

import httpx
from google.auth import crypt, jwt
from google.auth import exceptions as google_exceptions

from slotbook.application.exceptions import ProviderApiError, ProviderAuthError
from slotbook.application.ports.calendar_provider import CalendarProviderPort
from slotbook.core.config import settings

CALENDAR_SCOPE = "https://www.googleapis.com/auth/calendar"
JWT_BEARER_GRANT = "urn:ietf:params:oauth:grant-type:jwt-bearer"
ASSERTION_LIFETIME_SECONDS = 3600
TOKEN_REFRESH_MARGIN_SECONDS = 60


def load_service_account_info(
    raw_json: str | None = None,
    file_path: str | None = None,
) -> dict[str, Any] | None:
    """Service account key from an inline JSON string or a key file, if configured."""
    if raw_json and raw_json.strip():
        return json.loads(raw_json)
    if file_path:
        return json.loads(Path(file_path).read_text(encoding="utf-8"))
    return None


class GoogleCalendarProvider(CalendarProviderPort):
    """Calendar v3 client authenticated with a service-account JWT assertion."""

    def __init__(
        self,
        service_account_info: dict[str, Any] | None,
        calendar_id: str | None = None,
        token_uri: str | None = None,
        api_base: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._info = service_account_info
        self._calendar_id = calendar_id or settings.GOOGLE_CALENDAR_ID
        self._token_uri = token_uri or (service_account_info or {}).get("token_uri") or settings.GOOGLE_TOKEN_URI
        self._api_base = (api_base or settings.GOOGLE_CALENDAR_API_BASE).rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=settings.GOOGLE_API_TIMEOUT_SECONDS)
        self._access_token: str | None = None
        self._token_expires_at = 0.0
        self._logger = logging.getLogger(__name__)

    def build_assertion(self) -> str:
        if not self._info:
            raise ProviderAuthError("Service account credentials are not configured")
        try:
            signer = crypt.RSASigner.from_service_account_info(self._info)
            issued_at = int(time.time())
            payload = {
                "iss": self._info["client_email"],
                "scope": CALENDAR_SCOPE,
                "aud": self._token_uri,
                "iat": issued_at,
                "exp": issued_at + ASSERTION_LIFETIME_SECONDS,
            }
            assertion = jwt.encode(signer, payload)
        except (google_exceptions.GoogleAuthError, KeyError, ValueError, TypeError) as e:
            raise ProviderAuthError(f"Invalid service account key: {e}") from e
        return assertion.decode("utf-8") if isinstance(assertion, bytes) else assertion

    async def get_access_token(self) -> str:
        if self._access_token and time.monotonic() < self._token_expires_at:
            return self._access_token

        assertion = self.build_assertion()
        try:
            resp = await self._client.post(
                self._token_uri,
                data={"grant_type": JWT_BEARER_GRANT, "assertion": assertion},
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
        except httpx.HTTPError as e:
            raise ProviderAuthError(f"Token endpoint unreachable: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise ProviderAuthError("Malformed token response") from e

        if resp.status_code >= 400 or not isinstance(data, dict) or not data.get("access_token"):
            description = data.get("error_description") if isinstance(data, dict) else None
            raise ProviderAuthError(description or "Failed to get access token")

        self._access_token = str(data["access_token"])
        expires_in = int(data.get("expires_in") or ASSERTION_LIFETIME_SECONDS)
        self._token_expires_at = time.monotonic() + max(expires_in - TOKEN_REFRESH_MARGIN_SECONDS, 0)
        return self._access_token

    async def create_event(self, access_token: str, event: dict[str, Any]) -> dict[str, Any]:
        url = f"{self._api_base}/calendars/{quote(self._calendar_id, safe='')}/events"
        resp = await self._client.post(
            url,
            params={"conferenceDataVersion": 1},
            json=event,
            headers={"Authorization": f"Bearer {access_token}"},
        )
        if resp.status_code >= 400:
            try:
                error_json = resp.json()
                error_message = error_json.get("error", {}).get("message")
            except Exception:
                error_message = resp.text
            self._logger.error(
                "Calendar event creation failed",
                extra={"status": resp.status_code, "error": error_message},
            )
            raise ProviderApiError(error_message or "Unknown API Error", status_code=resp.status_code)

        return resp.json()
