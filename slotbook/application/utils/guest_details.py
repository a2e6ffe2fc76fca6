from __future__ import annotations

from pydantic import validate_email

from slotbook.application.exceptions import GuestDetailsError
from slotbook.domain.entities.selection import GuestDetails


def is_valid_email(value: str) -> bool:
    try:
        validate_email(value.strip())
    except ValueError:
        return False
    return True


def validate_guest_details(details: GuestDetails) -> GuestDetails:
    """Return trimmed details or raise GuestDetailsError."""
    name = details.name.strip()
    if not name:
        raise GuestDetailsError("Please enter your name")
    try:
        _, email = validate_email(details.email.strip())
    except ValueError as e:
        raise GuestDetailsError("Please enter a valid email address") from e
    return GuestDetails(name=name, email=email, reason=details.reason.strip())
