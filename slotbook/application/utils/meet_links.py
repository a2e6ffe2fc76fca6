from __future__ import annotations

import secrets
import string
import time

_ALPHABET = string.ascii_lowercase + string.digits


def _segment(length: int = 3) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def generate_placeholder_link(provider_domain: str = "google.com") -> str:
    """Meeting URL shaped like a provider link: https://meet.<domain>/xxx-xxx-xxx."""
    return f"https://meet.{provider_domain}/{_segment()}-{_segment()}-{_segment()}"


def fallback_meeting_id(tag: str) -> str:
    """Identifier for a locally generated meeting, e.g. ``fallback_auth_1718000000000``."""
    return f"fallback_{tag}_{int(time.time() * 1000)}"
