from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Selection:
    date: date | None = None
    slot: str | None = None  # "HH:MM"

    @property
    def is_complete(self) -> bool:
        return self.date is not None and self.slot is not None


@dataclass(frozen=True)
class GuestDetails:
    name: str = ""
    email: str = ""
    reason: str = ""
