from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EventType:
    id: str
    name: str
    description: str
    duration_minutes: int
    slug: str  # unique, URL-safe

    def __post_init__(self) -> None:
        if self.duration_minutes <= 0:
            raise ValueError("duration_minutes must be positive")
