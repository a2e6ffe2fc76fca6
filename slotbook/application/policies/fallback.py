from __future__ import annotations

from dataclasses import dataclass

from slotbook.core.config import Settings


@dataclass(frozen=True)
class FallbackPolicy:
    """Decides, per failure layer, whether a placeholder meeting link is issued.

    A flag set to False makes MeetingProvisioner return a failed MeetingResult
    for that layer instead of a synthetic success.
    """

    on_auth_failure: bool = True
    on_provider_error: bool = True
    on_unexpected_error: bool = True

    @classmethod
    def guest_friendly(cls) -> FallbackPolicy:
        return cls()

    @classmethod
    def strict(cls) -> FallbackPolicy:
        return cls(on_auth_failure=False, on_provider_error=False, on_unexpected_error=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> FallbackPolicy:
        return cls(
            on_auth_failure=settings.FALLBACK_ON_AUTH_FAILURE,
            on_provider_error=settings.FALLBACK_ON_PROVIDER_ERROR,
            on_unexpected_error=settings.FALLBACK_ON_UNEXPECTED_ERROR,
        )
