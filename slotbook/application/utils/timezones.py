from __future__ import annotations

import os
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from slotbook.core.config import settings


def safe_timezone(name: str | None, default: str = "UTC") -> ZoneInfo:
    if not name:
        return ZoneInfo(default)
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo(default)


def local_timezone_name() -> str:
    """IANA id of the runtime's current timezone.

    Uses ``TZ`` when it names a known zone, then the ``/etc/localtime`` link,
    then ``settings.DEFAULT_TIMEZONE``.
    """
    candidate = os.environ.get("TZ", "").lstrip(":")
    if candidate and _is_known_zone(candidate):
        return candidate

    try:
        target = os.path.realpath("/etc/localtime")
    except OSError:
        target = ""
    marker = "zoneinfo" + os.sep
    if marker in target:
        candidate = target.split(marker, 1)[1]
        if _is_known_zone(candidate):
            return candidate

    return settings.DEFAULT_TIMEZONE


def now_in(timezone_name: str) -> datetime:
    return datetime.now(safe_timezone(timezone_name))


def _is_known_zone(name: str) -> bool:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True
