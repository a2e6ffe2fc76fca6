from __future__ import annotations

from dataclasses import dataclass

FALLBACK_PREFIX = "fallback_"


@dataclass(frozen=True)
class MeetingResult:
    success: bool
    meeting_link: str | None = None
    meeting_id: str | None = None
    message: str | None = None

    @property
    def is_fallback(self) -> bool:
        """True when the link was generated locally instead of by the provider."""
        return bool(self.meeting_id and self.meeting_id.startswith(FALLBACK_PREFIX))
