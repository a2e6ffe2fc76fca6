from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class CalendarProviderPort(ABC):
    @abstractmethod
    async def get_access_token(self) -> str:
        """Exchange service credentials for an access token. Raises ProviderAuthError."""
        raise NotImplementedError

    @abstractmethod
    async def create_event(self, access_token: str, event: dict[str, Any]) -> dict[str, Any]:
        """Insert a calendar event. Returns the event resource.

        Raises ProviderApiError on a non-2xx response.
        """
        raise NotImplementedError
