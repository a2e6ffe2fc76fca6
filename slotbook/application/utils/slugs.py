from __future__ import annotations

import re

_SUFFIX_RE = re.compile(r"^(?P<base>.+)-(?P<suffix>[0-9a-fA-F]{8})$")


def normalize_slug(raw: str) -> str:
    """Strip a trailing 8-character hex id from an embed slug.

    ``agentic-ai-amro-4b0dab37`` -> ``agentic-ai-amro``.
    """
    value = raw.strip().strip("/")
    if "/" in value:
        value = value.rsplit("/", 1)[1]
    match = _SUFFIX_RE.match(value)
    if match:
        return match.group("base")
    return value
